#!/usr/bin/env python3
"""
4bpp tile decoding utilities
Tiles are packed two pixels per byte, low nibble first
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from .byte_reader import ByteSource, Reader
from .constants import (
    BYTES_PER_TILE_4BPP,
    PIXEL_4BPP_MASK,
    PIXELS_PER_TILE,
    TILE_HEIGHT,
    TILE_WIDTH,
)
from .logging_config import get_logger

logger = get_logger("tiles")


@dataclass(frozen=True)
class Tile:
    """8x8 grid of palette indices, stored row-major"""

    pixels: tuple[int, ...]

    def __post_init__(self):
        pixels = tuple(self.pixels)
        if len(pixels) != PIXELS_PER_TILE:
            raise ValueError(f"Expected {PIXELS_PER_TILE} pixels, got {len(pixels)}")
        object.__setattr__(self, "pixels", pixels)

    def pixel(self, x: int, y: int) -> int:
        return self.pixels[y * TILE_WIDTH + x]

    def as_array(self) -> np.ndarray:
        return np.array(self.pixels, dtype=np.uint8).reshape(TILE_HEIGHT, TILE_WIDTH)


@dataclass(frozen=True)
class Tilemap:
    """Ordered tiles of one frame"""

    tiles: tuple[Tile, ...]

    def __len__(self) -> int:
        return len(self.tiles)

    def __getitem__(self, index: int) -> Tile:
        return self.tiles[index]

    def __iter__(self):
        return iter(self.tiles)


def decode_4bpp_linear_tile(data: bytes, offset: int = 0) -> Tile:
    """
    Decode a single 8x8 4bpp tile.

    Args:
        data: Raw tile data bytes
        offset: Starting offset in the data

    Returns:
        Tile with 64 pixel values (0-15)

    Raises:
        IndexError: If offset + BYTES_PER_TILE_4BPP exceeds data length
    """
    if offset < 0 or offset + BYTES_PER_TILE_4BPP > len(data):
        raise IndexError(f"Tile data out of bounds at offset {offset}")

    pixels = []
    for byte in data[offset:offset + BYTES_PER_TILE_4BPP]:
        pixels.append(byte & PIXEL_4BPP_MASK)
        pixels.append((byte >> 4) & PIXEL_4BPP_MASK)
    return Tile(tuple(pixels))


def _read_tiles(reader: Reader, count: int) -> Tilemap:
    tiles = []
    for _ in range(count):
        tiles.append(decode_4bpp_linear_tile(reader.read_bytes(BYTES_PER_TILE_4BPP)))
    return Tilemap(tuple(tiles))


def decode_tilemap(reader: Reader) -> Tilemap:
    """
    Decode a tilemap block at the reader's position.

    The block is a 32-bit byte-size field followed by that many bytes of
    tile data; the tile count is size // 32.
    """
    start = reader.address
    size = reader.read32()
    if size % BYTES_PER_TILE_4BPP:
        logger.warning(
            f"Tilemap at 0x{start:X} has size 0x{size:X}, "
            f"not a multiple of {BYTES_PER_TILE_4BPP}"
        )

    count = size // BYTES_PER_TILE_4BPP
    # Fail before decoding anything if the data is short
    reader.source.check(reader.address, count * BYTES_PER_TILE_4BPP)
    tilemap = _read_tiles(reader, count)
    logger.debug(f"Decoded {count} tiles at 0x{start:X}")
    return tilemap


def decode_tiles(source: ByteSource, address: int, count: int) -> Tilemap:
    """Decode count headerless tiles starting at an absolute address"""
    if count < 0:
        raise ValueError(f"Tile count cannot be negative: {count}")
    source.check(address, count * BYTES_PER_TILE_4BPP)
    return _read_tiles(Reader(source, address), count)


def tiles_to_array(tiles: List[Tile]) -> np.ndarray:
    """Stack tiles into an (n, 8, 8) uint8 array"""
    if not tiles:
        return np.zeros((0, TILE_HEIGHT, TILE_WIDTH), dtype=np.uint8)
    return np.stack([tile.as_array() for tile in tiles])
