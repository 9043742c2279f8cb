"""
Sprite Asset Decoder
Decodes tile, palette and placement data of ROM sprite assets into RGBA blocks
"""

from .byte_reader import ByteSource, Reader
from .compositor import (
    ComposedBlock,
    compose,
    compose_frame,
    render_palette_strip,
    render_raw_tiles,
    render_tile_sheet,
)
from .exceptions import (
    InvalidSizeIndexError,
    OutOfBoundsError,
    SpriteDecodeError,
    TileIndexError,
    UnexpectedMarkerError,
    UnterminatedPlacementListError,
)
from .oam_parser import Placement, PlacementSize, biased_to_screen, decode_placement_list
from .palette_utils import Palette, decode_palette, read_raw_palette
from .settings import DecoderSettings, load_settings
from .sprite_asset import Frame, SpriteAsset, SpriteAssetDecoder, decode_sprite_asset, resolve_asset_address
from .tile_utils import Tile, Tilemap, decode_tilemap, decode_tiles

__version__ = "1.0.0"
__all__ = [
    "ByteSource",
    "ComposedBlock",
    "DecoderSettings",
    "Frame",
    "InvalidSizeIndexError",
    "OutOfBoundsError",
    "Palette",
    "Placement",
    "PlacementSize",
    "Reader",
    "SpriteAsset",
    "SpriteAssetDecoder",
    "SpriteDecodeError",
    "Tile",
    "TileIndexError",
    "Tilemap",
    "UnexpectedMarkerError",
    "UnterminatedPlacementListError",
    "biased_to_screen",
    "compose",
    "compose_frame",
    "decode_palette",
    "decode_placement_list",
    "decode_sprite_asset",
    "decode_tilemap",
    "decode_tiles",
    "load_settings",
    "read_raw_palette",
    "render_palette_strip",
    "render_raw_tiles",
    "render_tile_sheet",
    "resolve_asset_address",
]
