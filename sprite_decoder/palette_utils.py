#!/usr/bin/env python3
"""
Palette utilities
Decodes 16-color RGB555 palettes and converts them to 8-bit channels
"""

from dataclasses import dataclass

import numpy as np

from .byte_reader import ByteSource, Reader
from .constants import (
    ALPHA_OPAQUE,
    BYTES_PER_PALETTE,
    COLORS_PER_PALETTE,
    PALETTE_SIZE_FIELD,
    RGB555_BLUE_MASK,
    RGB555_BLUE_SHIFT,
    RGB555_CHANNEL_SCALE,
    RGB555_GREEN_MASK,
    RGB555_GREEN_SHIFT,
    RGB555_RED_MASK,
    RGB555_RED_SHIFT,
)
from .logging_config import get_logger

logger = get_logger("palette")


def split_rgb555(color: int) -> tuple[int, int, int]:
    """
    Split a packed RGB555 color into its 5-bit components.

    Args:
        color: 16-bit color word, red in bits 0-4

    Returns:
        Tuple of (r, g, b) values in 0-31 range
    """
    r = (color & RGB555_RED_MASK) >> RGB555_RED_SHIFT
    g = (color & RGB555_GREEN_MASK) >> RGB555_GREEN_SHIFT
    b = (color & RGB555_BLUE_MASK) >> RGB555_BLUE_SHIFT
    return r, g, b


def rgb555_to_rgb888(color: int) -> tuple[int, int, int]:
    """
    Convert RGB555 color to 8-bit channels.

    Each channel is multiplied by 8, so 31 maps to 248 rather than 255.

    Args:
        color: 16-bit RGB555 color value

    Returns:
        Tuple of (r, g, b) values in 0-248 range
    """
    r, g, b = split_rgb555(color)
    return (
        r * RGB555_CHANNEL_SCALE,
        g * RGB555_CHANNEL_SCALE,
        b * RGB555_CHANNEL_SCALE,
    )


@dataclass(frozen=True)
class Palette:
    """Sixteen packed RGB555 colors"""

    colors: tuple[int, ...]

    def __post_init__(self):
        colors = tuple(self.colors)
        if len(colors) != COLORS_PER_PALETTE:
            raise ValueError(
                f"Palette must have {COLORS_PER_PALETTE} colors, got {len(colors)}"
            )
        object.__setattr__(self, "colors", colors)

    def __len__(self) -> int:
        return len(self.colors)

    def value(self, index: int) -> int:
        return self.colors[index]

    def high(self, index: int) -> tuple[int, int, int]:
        """Raw 5-bit (r, g, b) for a palette entry"""
        return split_rgb555(self.colors[index])

    def true(self, index: int) -> tuple[int, int, int]:
        """8-bit (r, g, b) for a palette entry"""
        return rgb555_to_rgb888(self.colors[index])

    def rgba(self, index: int) -> tuple[int, int, int, int]:
        return (*self.true(index), ALPHA_OPAQUE)

    def lookup_table(self) -> np.ndarray:
        """(16, 4) uint8 array of RGBA values, one row per index"""
        return np.array(
            [self.rgba(i) for i in range(COLORS_PER_PALETTE)], dtype=np.uint8
        )


def _read_colors(reader: Reader) -> Palette:
    return Palette(tuple(reader.read16() for _ in range(COLORS_PER_PALETTE)))


def decode_palette(reader: Reader) -> Palette:
    """
    Decode a palette block at the reader's position.

    The block is a 32-bit byte-size field followed by 16 color words.
    The size field is read but does not change how many colors are read.
    """
    start = reader.address
    size = reader.read32()
    if size != PALETTE_SIZE_FIELD:
        logger.warning(
            f"Palette at 0x{start:X} has size field 0x{size:X}, "
            f"expected 0x{PALETTE_SIZE_FIELD:X}"
        )

    palette = _read_colors(reader)
    logger.debug(f"Decoded palette at 0x{start:X}")
    return palette


def read_raw_palette(source: ByteSource, address: int) -> Palette:
    """Read 16 color words at an absolute address, with no size header"""
    source.check(address, BYTES_PER_PALETTE)
    return _read_colors(Reader(source, address))
