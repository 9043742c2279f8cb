#!/usr/bin/env python3
"""
OAM (placement record) parser for sprite assets
Decodes the sentinel-terminated list of hardware-style sprite placements
"""

from dataclasses import dataclass

from .byte_reader import Reader
from .constants import (
    MAX_PLACEMENTS,
    PLACEMENT_HFLIP_BIT,
    PLACEMENT_RECORD_SIZE,
    PLACEMENT_SENTINEL_BYTE,
    PLACEMENT_SHAPE_MASK,
    PLACEMENT_SIZE_MASK,
    PLACEMENT_SKIP_BIAS,
    PLACEMENT_VFLIP_BIT,
    SCREEN_BIAS,
    SCREEN_BIAS_MAX_POSITIVE,
    TILE_HEIGHT,
    TILE_WIDTH,
)
from .exceptions import InvalidSizeIndexError, UnterminatedPlacementListError
from .logging_config import get_logger

logger = get_logger("oam_parser")


@dataclass(frozen=True)
class PlacementSize:
    """Placement dimensions in tiles"""

    width: int
    height: int

    @property
    def pixel_width(self) -> int:
        return self.width * TILE_WIDTH

    @property
    def pixel_height(self) -> int:
        return self.height * TILE_HEIGHT

    @property
    def tile_count(self) -> int:
        return self.width * self.height


# Indexed by (shape << 2) | size
# Shape 0: square, 1: wide, 2: tall
PLACEMENT_SIZES = (
    PlacementSize(1, 1), PlacementSize(2, 2), PlacementSize(4, 4), PlacementSize(8, 8),
    PlacementSize(2, 1), PlacementSize(4, 1), PlacementSize(4, 2), PlacementSize(8, 2),
    PlacementSize(1, 2), PlacementSize(1, 4), PlacementSize(2, 4), PlacementSize(4, 8),
)


def lookup_placement_size(shape: int, size: int) -> PlacementSize:
    """Look up the tile dimensions for a shape/size field pair"""
    key = (shape << 2) | size
    if not 0 <= key < len(PLACEMENT_SIZES):
        raise InvalidSizeIndexError(key)
    return PLACEMENT_SIZES[key]


def biased_to_screen(value: int) -> int:
    """
    Convert a biased offset byte to a screen coordinate.

    0x00-0x7F map to 128-255 and 0x80-0xFF map to 0-127.
    """
    if value <= SCREEN_BIAS_MAX_POSITIVE:
        return SCREEN_BIAS + value
    return value - SCREEN_BIAS


@dataclass(frozen=True)
class Placement:
    """One placement record: which tiles to draw, where and how"""

    start_tile: int
    offset_x: int
    offset_y: int
    size: PlacementSize
    hflip: bool = False
    vflip: bool = False

    @property
    def screen_x(self) -> int:
        return biased_to_screen(self.offset_x)

    @property
    def screen_y(self) -> int:
        return biased_to_screen(self.offset_y)

    @classmethod
    def from_record(cls, record: bytes) -> "Placement":
        """Build a placement from a 5-byte record"""
        start_tile, offset_x, offset_y, size_byte, shape_byte = record

        # Size byte:
        # Bit 0-1: Size index
        # Bit 5: V-flip
        # Bit 6: H-flip
        size_index = size_byte & PLACEMENT_SIZE_MASK
        shape_index = shape_byte & PLACEMENT_SHAPE_MASK

        return cls(
            start_tile=start_tile,
            offset_x=offset_x,
            offset_y=offset_y,
            size=lookup_placement_size(shape_index, size_index),
            hflip=bool(size_byte & PLACEMENT_HFLIP_BIT),
            vflip=bool(size_byte & PLACEMENT_VFLIP_BIT),
        )


def is_sentinel(record: bytes) -> bool:
    return all(byte == PLACEMENT_SENTINEL_BYTE for byte in record)


def decode_placement_list(reader: Reader,
                          max_placements: int = MAX_PLACEMENTS) -> list[Placement]:
    """
    Decode a placement list at the reader's position.

    The list starts with a 32-bit skip value; skip - 4 bytes of lead-in
    follow, then 5-byte records up to a record of five 0xFF bytes. The
    sentinel itself is not returned.

    Raises:
        UnterminatedPlacementListError: No sentinel within max_placements records
        InvalidSizeIndexError: A record has an unknown shape/size pair
    """
    start = reader.address
    skip = reader.read32()
    reader.skip(skip - PLACEMENT_SKIP_BIAS)

    placements = []
    while True:
        record = reader.read_bytes(PLACEMENT_RECORD_SIZE)
        if is_sentinel(record):
            break
        if len(placements) >= max_placements:
            raise UnterminatedPlacementListError(start, max_placements)
        placements.append(Placement.from_record(record))

    logger.debug(f"Decoded {len(placements)} placements at 0x{start:X}")
    return placements
