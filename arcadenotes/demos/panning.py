"""Stereo panning of a raw 16-bit little-endian stereo PCM stream."""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Optional

_FRAME = 4  # two channels of two bytes


def lerp(a: float, b: float, t: float) -> float:
    """Interpolate linearly from a (t = 0) to b (t = 1)."""
    return a * (1 - t) + b * t


class StereoPanStream:
    """A readable, seekable stream that pans the stereo PCM it reads.

    A pan of -1 keeps only the left channel, 0 keeps both at full volume and
    1 keeps only the right channel. Reads always return whole frames; a
    partial frame is held back until the next read.
    """

    def __init__(self, source: BinaryIO, pan: float = 0.0) -> None:
        self._source = source
        self._buf = b""
        self._pan = 0.0
        self.pan = pan

    @property
    def pan(self) -> float:
        return self._pan

    @pan.setter
    def pan(self, value: float) -> None:
        self._pan = min(max(-1.0, value), 1.0)

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to ``size`` bytes (all, if negative) of panned frames."""
        if size is None or size < 0:
            data = self._buf + (self._source.read() or b"")
            remaining = b""
        else:
            data = self._buf[:size]
            remaining = self._buf[size:]
            want = size - len(data)
            if want > 0:
                data += self._source.read(want) or b""
        aligned = len(data) - len(data) % _FRAME
        self._buf = remaining + data[aligned:]
        return self._apply(data[:aligned])

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Seek the underlying stream, dropping any held-back partial frame."""
        self._buf = b""
        return self._source.seek(offset, whence)

    def _apply(self, chunk: bytes) -> bytes:
        if not chunk:
            return b""
        left_scale = min(-self._pan + 1, 1.0)
        right_scale = min(self._pan + 1, 1.0)
        out = []
        for left, right in struct.iter_unpack("<hh", chunk):
            out.append(int(left * left_scale))
            out.append(int(right * right_scale))
        return struct.pack(f"<{len(out)}h", *out)