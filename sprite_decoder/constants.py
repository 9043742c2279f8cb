#!/usr/bin/env python3
"""
Constants for the sprite asset decoder
All magic numbers and format layout values in one place
"""

# Tile specifications
TILE_WIDTH = 8  # pixels
TILE_HEIGHT = 8  # pixels
BYTES_PER_TILE_4BPP = 32  # 4 bits per pixel, 8x8 pixels
PIXELS_PER_TILE = 64  # 8x8

# Pixel masks
PIXEL_4BPP_MASK = 0x0F  # Mask for 4-bit pixel values
TRANSPARENT_INDEX = 0  # Palette index never painted

# Palette specifications
COLORS_PER_PALETTE = 16
BYTES_PER_COLOR = 2  # RGB555 format
BYTES_PER_PALETTE = 32  # 16 colors * 2 bytes
PALETTE_SIZE_FIELD = 0x20  # Expected value of the palette byte-size field

# RGB555 color masks (red in the low bits)
RGB555_RED_MASK = 0x001F    # Bits 4-0 for red
RGB555_GREEN_MASK = 0x03E0  # Bits 9-5 for green
RGB555_BLUE_MASK = 0x7C00   # Bits 14-10 for blue

# Bit shifts for RGB555
RGB555_RED_SHIFT = 0
RGB555_GREEN_SHIFT = 5
RGB555_BLUE_SHIFT = 10

# 5-bit to 8-bit channel scaling (exact, no rounding)
RGB555_CHANNEL_SCALE = 8
ALPHA_OPAQUE = 255

# Asset header layout
HEADER_SIZE = 4
HEADER_MARKER_1 = 0x00  # byte 1
HEADER_MARKER_2 = 0x01  # byte 2

# Placement (OAM) record layout
PLACEMENT_RECORD_SIZE = 5
PLACEMENT_SENTINEL_BYTE = 0xFF
PLACEMENT_SKIP_BIAS = 4  # Stored skip value is 4 larger than the distance
PLACEMENT_SIZE_MASK = 0x03
PLACEMENT_SHAPE_MASK = 0x03
PLACEMENT_HFLIP_BIT = 0x40
PLACEMENT_VFLIP_BIT = 0x20
MAX_PLACEMENTS = 128  # One full hardware OAM table

# Biased screen coordinates
SCREEN_BIAS = 128
SCREEN_BIAS_MAX_POSITIVE = 0x7F

# Asset lookup table
ASSET_TABLE_ADDRESS = 0x31EA8
ASSET_ADDRESS_MASK = 0xFFFFFF  # Low 24 bits
BYTES_PER_POINTER = 4

# Fixed locations used by the raw tile/palette viewer
RAW_PALETTE_ADDRESS = 0x3CACE4
RAW_TILE_ADDRESS = 0x3C0798
RAW_TILE_COUNT = 10
DEFAULT_TILES_PER_ROW = 2
DEFAULT_SWATCH_SIZE = 16
