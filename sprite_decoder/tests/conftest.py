"""
Shared pytest fixtures for sprite decoder tests
"""

import struct
import tempfile
from pathlib import Path

import pytest


def pack_tiles(tiles):
    """Pack tiles given as 64-entry index lists into 4bpp bytes"""
    data = bytearray()
    for pixels in tiles:
        for i in range(0, 64, 2):
            data.append((pixels[i] & 0x0F) | ((pixels[i + 1] & 0x0F) << 4))
    return bytes(data)


def build_asset(frames, markers=(0x00, 0x01), prefix=b"", unused_ptr=0xDEADBEEF):
    """
    Build a sprite asset buffer.

    Each frame is a dict with keys:
        tiles: list of 64-entry index lists
        colors: list of 16 RGB555 words
        records: list of 5-byte records (the sentinel is appended)
        lead_in: bytes placed between the skip field and the records
        palette_size: value written to the palette size field
        delay, end_flag: animation record timing bytes
        terminate: append the sentinel (default True)

    Returns:
        (data, address) with the asset header at address
    """
    address = len(prefix)
    count = len(frames)
    table_size = 4 * count

    # Blocks are laid out after the pointer table, all relative to the anchor
    blocks = bytearray()
    records = []
    for frame in frames:
        tile_data = pack_tiles(frame.get("tiles", []))
        tilemap = struct.pack("<I", len(tile_data)) + tile_data

        colors = frame.get("colors", [0] * 16)
        palette = struct.pack("<I", frame.get("palette_size", 0x20))
        palette += b"".join(struct.pack("<H", c) for c in colors)

        lead_in = frame.get("lead_in", b"")
        oam = struct.pack("<I", len(lead_in) + 4) + lead_in
        for record in frame.get("records", []):
            oam += bytes(record)
        if frame.get("terminate", True):
            oam += b"\xFF" * 5

        records.append((tilemap, palette, oam, frame.get("delay", 0), frame.get("end_flag", 0)))

    record_area = table_size
    block_area = record_area + 20 * count

    pointers = []
    record_bytes = bytearray()
    offset = block_area
    for tilemap, palette, oam, delay, end_flag in records:
        pointers.append(record_area + len(record_bytes))
        tilemap_ptr = offset
        palette_ptr = tilemap_ptr + len(tilemap)
        oam_ptr = palette_ptr + len(palette)
        offset = oam_ptr + len(oam)
        record_bytes += struct.pack(
            "<IIIIBBBB", tilemap_ptr, palette_ptr, unused_ptr, oam_ptr,
            delay, 0, end_flag, 0,
        )
        blocks += tilemap + palette + oam

    header = bytes([0xAA, markers[0], markers[1], count])
    table = b"".join(struct.pack("<I", p) for p in pointers)
    data = bytes(prefix) + header + table + bytes(record_bytes) + bytes(blocks)
    return data, address


def solid_tile(index):
    return [index] * 64


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def white_palette_colors():
    colors = [0] * 16
    colors[1] = 0x7FFF
    return colors


@pytest.fixture
def single_frame_asset(white_palette_colors):
    """One frame, one solid tile of index 1, one 1x1 placement at (0x00, 0x00)"""
    return build_asset(
        [{
            "tiles": [solid_tile(1)],
            "colors": white_palette_colors,
            "records": [[0x00, 0x00, 0x00, 0x00, 0x00]],
        }],
        prefix=b"\x55" * 16,
    )


@pytest.fixture
def asset_builder():
    return build_asset


@pytest.fixture
def tile_packer():
    return pack_tiles
