#!/usr/bin/env python3
"""
Exceptions raised while decoding sprite assets.

Every decode failure propagates immediately; callers never receive a
partially decoded frame.
"""


class SpriteDecodeError(Exception):
    """Base exception for all sprite decoding errors"""
    pass


class OutOfBoundsError(SpriteDecodeError):
    """Raised when a read would run past either end of the buffer"""

    def __init__(self, address: int, width: int, length: int):
        self.address = address
        self.width = width
        self.length = length
        super().__init__(
            f"Read of {width} byte(s) at 0x{address:X} is outside buffer "
            f"of length 0x{length:X}"
        )


class UnexpectedMarkerError(SpriteDecodeError):
    """Raised when the asset header marker bytes are not 0x00, 0x01"""

    def __init__(self, address: int, markers: tuple[int, int]):
        self.address = address
        self.markers = markers
        super().__init__(
            f"Unexpected header markers at 0x{address:X}: "
            f"{markers[0]:#04x} {markers[1]:#04x} (expected 0x00 0x01)"
        )


class UnterminatedPlacementListError(SpriteDecodeError):
    """Raised when a placement list runs past the safety bound"""

    def __init__(self, address: int, limit: int):
        self.address = address
        self.limit = limit
        super().__init__(
            f"Placement list at 0x{address:X} has no sentinel "
            f"within {limit} records"
        )


class InvalidSizeIndexError(SpriteDecodeError):
    """Raised when a shape/size key has no entry in the size table"""

    def __init__(self, key: int):
        self.key = key
        super().__init__(f"Invalid placement size key: {key}")


class TileIndexError(SpriteDecodeError):
    """Raised when a placement refers to a tile the tilemap does not have"""

    def __init__(self, tile_index: int, tile_count: int):
        self.tile_index = tile_index
        self.tile_count = tile_count
        super().__init__(
            f"Tile {tile_index} requested but tilemap has {tile_count} tiles"
        )


def format_error_message(operation: str, error: Exception) -> str:
    """
    Format an error message for user display.

    Args:
        operation: Description of the operation that failed
        error: The exception that was raised

    Returns:
        User-friendly error message
    """
    if isinstance(error, OutOfBoundsError):
        return f"Data ended early during {operation}: {error}"
    elif isinstance(error, UnexpectedMarkerError):
        return f"Not a sprite asset ({operation}): {error}"
    elif isinstance(error, UnterminatedPlacementListError):
        return f"Corrupt placement list during {operation}: {error}"
    elif isinstance(error, (InvalidSizeIndexError, TileIndexError)):
        return f"Invalid sprite data during {operation}: {error}"
    else:
        return f"Failed to {operation}: {error}"
