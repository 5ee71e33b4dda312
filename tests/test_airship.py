import pytest

from arcadenotes.demos.airship import MAX_ANGLE, MAX_LEAN, SKY_COLOR, Player, fog_colors


def test_defaults():
    p = Player(ground_width=100, ground_height=100)
    assert (p.x16, p.y16) == (16 * 100, 16 * 200)
    assert p.angle == MAX_ANGLE * 3 // 4
    assert p.lean == 0


def test_rotate_right_wraps_and_clamps_lean():
    p = Player(100, 100, angle=MAX_ANGLE - 1)
    p.rotate_right()
    assert p.angle == 0
    for _ in range(MAX_LEAN + 5):
        p.rotate_right()
    assert p.lean == MAX_LEAN


def test_rotate_left_wraps_and_clamps_lean():
    p = Player(100, 100, angle=0)
    p.rotate_left()
    assert p.angle == MAX_ANGLE - 1
    for _ in range(MAX_LEAN + 5):
        p.rotate_left()
    assert p.lean == -MAX_LEAN


def test_stabilize_moves_lean_to_zero():
    p = Player(100, 100, lean=2)
    p.stabilize()
    assert p.lean == 1
    p.stabilize()
    p.stabilize()
    assert p.lean == 0
    q = Player(100, 100, lean=-1)
    q.stabilize()
    assert q.lean == 0


def test_move_forward_at_angle_zero():
    p = Player(100, 100, x16=0, y16=0, angle=0)
    p.move_forward()
    assert (p.x16, p.y16) == (32, 0)


def test_move_forward_wraps_at_top():
    p = Player(100, 50, x16=160, y16=0, angle=MAX_ANGLE * 3 // 4)
    p.move_forward()
    assert p.x16 == 160
    assert p.y16 == 50 * 16 - 32


def test_position_stays_on_ground():
    p = Player(37, 23)
    for step in range(500):
        if step % 3 == 0:
            p.rotate_right()
        p.move_forward()
        assert 0 <= p.x16 < 37 * 16
        assert 0 <= p.y16 < 23 * 16


def test_fog_fades_from_sky_to_clear():
    rows = fog_colors(16)
    assert len(rows) == 16
    assert rows[0] == SKY_COLOR
    assert rows[-1] == (0, 0, 0, 0)
    alphas = [row[3] for row in rows]
    assert alphas == sorted(alphas, reverse=True)


def test_fog_needs_two_rows():
    with pytest.raises(ValueError):
        fog_colors(1)