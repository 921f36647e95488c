"""
Seed buffers and circular streams over them.

A seed buffer is generated once per source and never modified. A
CircularReader hands out independent streams that cycle through the
seed until the requested length is reached, without copying it.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Buffer

    import numpy as np


def new_seed_buffer(rng: np.random.Generator, size: int) -> bytes:
    """
    Draw an immutable seed buffer from a seeded generator.

    Args:
        rng: Generator owned by the source
        size: Buffer length in bytes (must be > 0)

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Seed buffer size must be positive, got {size}")
    return rng.bytes(size)


class CircularStream(io.RawIOBase):
    """
    Readable, seekable stream yielding exactly `length` bytes.

    Bytes are taken from the seed starting at `offset`, wrapping
    around to the start of the seed as often as needed.
    """

    def __init__(self, data: memoryview, length: int, offset: int) -> None:
        super().__init__()
        self._data = data
        self._length = length
        self._offset = offset
        self._pos = 0

    @property
    def size(self) -> int:
        """Total number of bytes the stream yields."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, buffer: Buffer) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")

        remaining = self._length - self._pos
        if remaining <= 0:
            return 0

        view = memoryview(buffer).cast("B")
        want = min(len(view), remaining)
        period = len(self._data)

        written = 0
        while written < want:
            start = (self._offset + self._pos) % period
            chunk = min(want - written, period - start)
            view[written : written + chunk] = self._data[start : start + chunk]
            written += chunk
            self._pos += chunk

        return written

    def seek(self, pos: int, whence: int = io.SEEK_SET) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")

        if whence == io.SEEK_SET:
            new_pos = pos
        elif whence == io.SEEK_CUR:
            new_pos = self._pos + pos
        elif whence == io.SEEK_END:
            new_pos = self._length + pos
        else:
            raise ValueError(f"Invalid whence: {whence}")

        if new_pos < 0:
            raise ValueError(f"Negative seek position {new_pos}")

        self._pos = new_pos
        return self._pos

    def tell(self) -> int:
        return self._pos


class CircularReader:
    """
    Hands out bounded streams over a fixed seed buffer.

    Resetting never touches the seed; every call returns a new cursor,
    so earlier streams stay readable.
    """

    def __init__(self, data: bytes | bytearray) -> None:
        self._data = memoryview(data).toreadonly()

    @property
    def data(self) -> memoryview:
        """Read-only view of the seed."""
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def reset(self, length: int, offset: int = 0) -> CircularStream:
        """
        Return a stream yielding exactly `length` bytes of the cycled seed.

        Args:
            length: Number of bytes to emit (must be >= 0)
            offset: Position in the seed where the cycle starts

        Raises:
            ValueError: On a negative length, an offset outside the seed,
                or a non-empty request against an empty seed
        """
        if length < 0:
            raise ValueError(f"Requested length must be >= 0, got {length}")

        if len(self._data) == 0:
            if length > 0 or offset != 0:
                raise ValueError("Cannot cycle an empty seed buffer")
        elif not 0 <= offset < len(self._data):
            raise ValueError(f"Offset {offset} outside seed buffer of {len(self._data)} bytes")

        return CircularStream(self._data, length, offset)
