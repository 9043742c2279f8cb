#!/usr/bin/env python3
"""
Compositing of decoded frames into RGBA pixel blocks
"""

from dataclasses import dataclass
from typing import List, Union

import numpy as np
from PIL import Image

from .byte_reader import ByteSource
from .constants import (
    COLORS_PER_PALETTE,
    DEFAULT_SWATCH_SIZE,
    DEFAULT_TILES_PER_ROW,
    RAW_PALETTE_ADDRESS,
    RAW_TILE_ADDRESS,
    RAW_TILE_COUNT,
    TILE_HEIGHT,
    TILE_WIDTH,
    TRANSPARENT_INDEX,
)
from .exceptions import TileIndexError
from .oam_parser import Placement
from .palette_utils import Palette, read_raw_palette
from .sprite_asset import Frame
from .tile_utils import Tile, Tilemap, decode_tiles, tiles_to_array


@dataclass(frozen=True, eq=False)
class ComposedBlock:
    """
    Positioned RGBA pixels for one placement.

    pixels has shape (height, width, 4). Unpainted pixels are (0, 0, 0, 0).
    """

    x: int
    y: int
    width: int
    height: int
    pixels: np.ndarray

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)


def _blank(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width, 4), dtype=np.uint8)


def _paint(indices: np.ndarray, palette: Palette, skip_transparent: bool = True) -> np.ndarray:
    height, width = indices.shape
    rgba = _blank(width, height)
    lut = palette.lookup_table()
    mask = indices != TRANSPARENT_INDEX if skip_transparent else np.ones_like(indices, dtype=bool)
    rgba[mask] = lut[indices[mask]]
    return rgba


def compose(frame: Frame, placement: Placement) -> ComposedBlock:
    """
    Build the pixel block for one placement of a frame.

    Tiles are taken from the frame's tilemap starting at start_tile, filling
    the placement left to right and then top to bottom. Horizontal flip
    mirrors the assembled block. Vertical flip is not applied.

    Raises:
        TileIndexError: The placement needs tiles past the end of the tilemap
    """
    size = placement.size
    width = size.pixel_width
    height = size.pixel_height

    last_tile = placement.start_tile + size.tile_count - 1
    if last_tile >= len(frame.tilemap):
        raise TileIndexError(last_tile, len(frame.tilemap))

    indices = np.zeros((height, width), dtype=np.uint8)
    for i in range(size.tile_count):
        tile = frame.tilemap[placement.start_tile + i]
        tile_x = (i % size.width) * TILE_WIDTH
        tile_y = (i // size.width) * TILE_HEIGHT
        indices[tile_y:tile_y + TILE_HEIGHT, tile_x:tile_x + TILE_WIDTH] = tile.as_array()

    if placement.hflip:
        indices = indices[:, ::-1]

    return ComposedBlock(
        x=placement.screen_x,
        y=placement.screen_y,
        width=width,
        height=height,
        pixels=_paint(indices, frame.palette),
    )


def compose_frame(frame: Frame) -> list[ComposedBlock]:
    """Compose every placement of a frame, in list order"""
    return [compose(frame, placement) for placement in frame.placements]


def render_tile_sheet(tiles: Union[Tilemap, List[Tile]], palette: Palette,
                      tiles_per_row: int = DEFAULT_TILES_PER_ROW) -> ComposedBlock:
    """
    Lay tiles out in a grid, painting every index including 0.

    Args:
        tiles: Tiles to draw, in order
        palette: Palette for all tiles
        tiles_per_row: Grid width in tiles

    Returns:
        Block positioned at (0, 0)
    """
    if tiles_per_row < 1:
        raise ValueError(f"tiles_per_row must be positive, got {tiles_per_row}")

    tiles = list(tiles)
    rows = (len(tiles) + tiles_per_row - 1) // tiles_per_row
    width = tiles_per_row * TILE_WIDTH
    height = rows * TILE_HEIGHT

    indices = np.zeros((height, width), dtype=np.uint8)
    painted = np.zeros((height, width), dtype=bool)
    for i, tile in enumerate(tiles_to_array(tiles)):
        tile_x = (i % tiles_per_row) * TILE_WIDTH
        tile_y = (i // tiles_per_row) * TILE_HEIGHT
        indices[tile_y:tile_y + TILE_HEIGHT, tile_x:tile_x + TILE_WIDTH] = tile
        painted[tile_y:tile_y + TILE_HEIGHT, tile_x:tile_x + TILE_WIDTH] = True

    pixels = _paint(indices, palette, skip_transparent=False)
    # Grid cells past the last tile stay empty
    pixels[~painted] = 0
    return ComposedBlock(0, 0, width, height, pixels)


def render_palette_strip(palette: Palette, swatch: int = DEFAULT_SWATCH_SIZE) -> ComposedBlock:
    """Draw the 16 palette colors side by side as swatch x swatch squares"""
    if swatch < 1:
        raise ValueError(f"swatch must be positive, got {swatch}")
    indices = np.repeat(np.arange(COLORS_PER_PALETTE, dtype=np.uint8), swatch)
    indices = np.tile(indices, (swatch, 1))
    pixels = _paint(indices, palette, skip_transparent=False)
    return ComposedBlock(0, 0, COLORS_PER_PALETTE * swatch, swatch, pixels)


def render_raw_tiles(source: ByteSource,
                     tile_address: int = RAW_TILE_ADDRESS,
                     palette_address: int = RAW_PALETTE_ADDRESS,
                     count: int = RAW_TILE_COUNT,
                     tiles_per_row: int = DEFAULT_TILES_PER_ROW) -> ComposedBlock:
    """
    Draw headerless tiles with a headerless palette, both at fixed addresses.

    Useful for eyeballing tile data that is not reachable from an asset.
    """
    tiles = decode_tiles(source, tile_address, count)
    palette = read_raw_palette(source, palette_address)
    return render_tile_sheet(tiles, palette, tiles_per_row)
