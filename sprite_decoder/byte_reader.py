#!/usr/bin/env python3
"""
Little-endian byte access for sprite asset data

ByteSource wraps an immutable buffer and reads at absolute addresses.
Reader walks a ByteSource with two coordinates: an anchor (base) and an
offset from it (cursor). Pointer fields in an asset are stored relative
to an anchor, so seek() moves the cursor while keeping the anchor.
"""

import struct
from dataclasses import dataclass
from typing import Union

from .exceptions import OutOfBoundsError

_FORMATS = {1: "<B", 2: "<H", 4: "<I"}


@dataclass(frozen=True)
class ByteSource:
    """Immutable byte buffer with bounds-checked absolute reads"""

    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    def __len__(self) -> int:
        return len(self.data)

    def check(self, address: int, width: int) -> None:
        """Raise OutOfBoundsError unless [address, address + width) is readable"""
        if address < 0 or address + width > len(self.data):
            raise OutOfBoundsError(address, width, len(self.data))

    def read(self, address: int, width: int) -> int:
        """Read an unsigned little-endian integer of 1, 2 or 4 bytes"""
        fmt = _FORMATS.get(width)
        if fmt is None:
            raise ValueError(f"Unsupported read width: {width}")
        self.check(address, width)
        return struct.unpack_from(fmt, self.data, address)[0]

    def read8(self, address: int) -> int:
        return self.read(address, 1)

    def read16(self, address: int) -> int:
        return self.read(address, 2)

    def read32(self, address: int) -> int:
        return self.read(address, 4)

    def bytes_at(self, address: int, length: int) -> bytes:
        """Return length raw bytes starting at address"""
        self.check(address, length)
        return self.data[address:address + length]


@dataclass
class Reader:
    """
    Cursor over a ByteSource.

    The effective address is base + cursor and every read advances the
    cursor by the width read. One Reader belongs to one decode call.
    """

    source: ByteSource
    base: int = 0
    cursor: int = 0

    @classmethod
    def over(cls, data: Union[bytes, bytearray, ByteSource],
             base: int = 0, cursor: int = 0) -> "Reader":
        """Build a Reader from raw bytes or an existing ByteSource"""
        source = data if isinstance(data, ByteSource) else ByteSource(bytes(data))
        return cls(source, base, cursor)

    @property
    def address(self) -> int:
        """Current effective address"""
        return self.base + self.cursor

    def rebase(self, base: int, cursor: int = 0) -> None:
        """Replace both the anchor and the offset"""
        self.base = base
        self.cursor = cursor

    def seek(self, cursor: int) -> None:
        """Replace the offset, keeping the current anchor"""
        self.cursor = cursor

    def skip(self, count: int) -> None:
        self.cursor += count

    def _read(self, width: int) -> int:
        value = self.source.read(self.address, width)
        self.cursor += width
        return value

    def read8(self) -> int:
        return self._read(1)

    def read16(self) -> int:
        return self._read(2)

    def read32(self) -> int:
        return self._read(4)

    def read_bytes(self, count: int) -> bytes:
        data = self.source.bytes_at(self.address, count)
        self.cursor += count
        return data
