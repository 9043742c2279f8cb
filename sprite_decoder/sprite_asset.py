#!/usr/bin/env python3
"""
Sprite asset decoding

An asset starts with a 4-byte header (unused byte, 0x00, 0x01, animation
count) followed by a table of animation pointers. Every pointer inside the
asset, including those in the animation records, is relative to the
address just past the header.
"""

import warnings
from dataclasses import dataclass
from typing import Optional, Union

from .byte_reader import ByteSource, Reader
from .constants import BYTES_PER_POINTER, HEADER_MARKER_1, HEADER_MARKER_2, HEADER_SIZE
from .exceptions import UnexpectedMarkerError
from .logging_config import get_logger
from .oam_parser import Placement, decode_placement_list
from .palette_utils import Palette, decode_palette
from .settings import DecoderSettings
from .tile_utils import Tilemap, decode_tilemap

logger = get_logger("sprite_asset")


@dataclass(frozen=True)
class AssetHeader:
    markers: tuple[int, int]
    animation_count: int

    @property
    def markers_valid(self) -> bool:
        return self.markers == (HEADER_MARKER_1, HEADER_MARKER_2)


@dataclass(frozen=True)
class Frame:
    """One animation entry: tiles, palette and the placements drawing them"""

    tilemap: Tilemap
    palette: Palette
    placements: tuple[Placement, ...]
    delay: int = 0
    end_flag: int = 0


@dataclass(frozen=True)
class SpriteAsset:
    address: int
    header: AssetHeader
    frames: tuple[Frame, ...]

    @property
    def anchor(self) -> int:
        return self.address + HEADER_SIZE


class SpriteAssetDecoder:
    """Decode every frame of the sprite asset at one address"""

    def __init__(self, data: Union[bytes, bytearray, ByteSource],
                 settings: Optional[DecoderSettings] = None):
        self.source = data if isinstance(data, ByteSource) else ByteSource(bytes(data))
        self.settings = settings or DecoderSettings()

    def decode(self, address: int) -> SpriteAsset:
        reader = Reader(self.source, address)
        header = self._read_header(reader, address)

        anchor = address + HEADER_SIZE
        reader.rebase(anchor, 0)
        pointers = [reader.read32() for _ in range(header.animation_count)]

        frames = tuple(self._read_frame(reader, pointer) for pointer in pointers)
        logger.info(f"Decoded {len(frames)} frames from asset at 0x{address:X}")
        return SpriteAsset(address, header, frames)

    def _read_header(self, reader: Reader, address: int) -> AssetHeader:
        reader.read8()  # unused
        markers = (reader.read8(), reader.read8())
        header = AssetHeader(markers, reader.read8())

        if not header.markers_valid:
            error = UnexpectedMarkerError(address, markers)
            if self.settings.strict_markers:
                raise error
            logger.warning(f"{error}; continuing")
            warnings.warn(str(error), stacklevel=3)
        return header

    def _read_frame(self, reader: Reader, pointer: int) -> Frame:
        reader.seek(pointer)
        tilemap_ptr = reader.read32()
        palette_ptr = reader.read32()
        reader.read32()  # unused pointer
        oam_ptr = reader.read32()
        delay = reader.read8()
        reader.read8()
        end_flag = reader.read8()
        reader.read8()

        logger.debug(
            f"Animation record at 0x{reader.base + pointer:X}: "
            f"tilemap=0x{tilemap_ptr:X} palette=0x{palette_ptr:X} oam=0x{oam_ptr:X}"
        )

        reader.seek(tilemap_ptr)
        tilemap = decode_tilemap(reader)
        reader.seek(palette_ptr)
        palette = decode_palette(reader)
        reader.seek(oam_ptr)
        placements = decode_placement_list(reader, self.settings.max_placements)

        return Frame(tilemap, palette, tuple(placements), delay, end_flag)


def decode_sprite_asset(data: Union[bytes, bytearray, ByteSource], address: int,
                        settings: Optional[DecoderSettings] = None) -> list[Frame]:
    """Decode the asset at address and return its frames in table order"""
    return list(SpriteAssetDecoder(data, settings).decode(address).frames)


def resolve_asset_address(data: Union[bytes, bytearray, ByteSource], index: int,
                          settings: Optional[DecoderSettings] = None) -> int:
    """
    Look up an asset's address in the ROM's asset table.

    Args:
        data: ROM image
        index: Table index

    Returns:
        Low 24 bits of the 32-bit table entry
    """
    if index < 0:
        raise ValueError(f"Asset index cannot be negative: {index}")
    settings = settings or DecoderSettings()
    source = data if isinstance(data, ByteSource) else ByteSource(bytes(data))
    entry = source.read32(settings.asset_table_address + BYTES_PER_POINTER * index)
    return entry & settings.address_mask
