# arcadenotes

Small games and effect demos built on pygame:

- **2048**: slide numbered tiles on a 4×4 board and merge equal ones.
- **Blocks**: a falling-blocks puzzle. Clear full lines to score and
  level up. It can be played with the keyboard or a gamepad.
- **Doom fire**: the classic palette-based fire effect.

The game rules are kept apart from drawing and input, so they can be used
and tested on their own. This covers tile moves and merges, piece rotation,
collision and line clearing, stereo panning of 16-bit PCM audio, and the
steering of an airship over a wrapping ground.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

### 2048

```
arcadenotes-2048
```

Use the arrow keys, or drag with the mouse or a finger, to slide the tiles.
A swipe shorter than 4 pixels in both directions is ignored. After each move
a new 2 appears on an empty cell. One time in ten it is a 4 instead.

### Blocks

```
arcadenotes-blocks
```

| Action       | Keyboard    |
|--------------|-------------|
| Move left    | Left arrow  |
| Move right   | Right arrow |
| Soft drop    | Down arrow  |
| Rotate right | Space or X  |
| Rotate left  | Z           |
| Start        | Space       |

When a game ends, press Space to go back to the title screen. Clearing 1, 2,
3 or 4 lines at once scores 100, 300, 600 or 1000 points, multiplied by the
level plus one. The level goes up every 10 lines.

To use a gamepad, press any button on it at the title screen. You are then
asked to press, one after another, the inputs for left, right, drop, rotate
left and rotate right. Buttons and stick directions can both be assigned.
Escape cancels the configuration.

`--cpuprofile FILE` writes a summary of the CPU time spent per frame in
updating and in drawing to FILE when the window closes.

### Doom fire

```
arcadenotes-doomfire
```

This opens a window showing the fire effect.

## Using the logic directly

```python
from arcadenotes.twenty48.tile import Dir, Tile, move_tiles

tiles = {Tile(2, 0, 0), Tile(2, 1, 0)}
moved = move_tiles(tiles, 4, Dir.LEFT)   # True: the two tiles merge into a 4
```

```python
from arcadenotes.blocks.field import Field
from arcadenotes.blocks.piece import PIECES, Angle, BlockType

field = Field()
piece = PIECES[BlockType.TYPE_7]
x, y = piece.initial_position()
y = field.drop_piece(piece, x, y, Angle.ANGLE_0)
```

`arcadenotes.demos.panning.StereoPanStream` wraps any seekable binary stream
of 16-bit little-endian stereo PCM. It scales the left and right channels to
match its `pan`, which runs from -1 (left only) through 0 (both at full
volume) to 1 (right only).

`arcadenotes.demos.airship.Player` moves and turns over a ground of a given
size and wraps at its edges. `fog_colors(height)` gives the premultiplied
colour of each row of the horizon fog.

## What it does not do

- Panning only transforms PCM bytes. The package decodes no audio files and
  plays no sound.
- The airship module has only the steering and fog logic. There is no
  airship window or command.
- The blocks game treats every joystick as having no standard layout, so a
  gamepad always goes through the configuration screen before use.
- Blocks and tiles are drawn as plain coloured squares with pygame's default
  font. No image or font files are shipped.