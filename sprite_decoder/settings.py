"""
Decoder settings
Holds the tunable limits and table locations used while decoding
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

from .constants import ASSET_ADDRESS_MASK, ASSET_TABLE_ADDRESS, MAX_PLACEMENTS
from .logging_config import get_logger

logger = get_logger("settings")


@dataclass(frozen=True)
class DecoderSettings:
    """Settings passed explicitly into each decode call"""

    strict_markers: bool = True
    max_placements: int = MAX_PLACEMENTS
    asset_table_address: int = ASSET_TABLE_ADDRESS
    address_mask: int = ASSET_ADDRESS_MASK

    def __post_init__(self):
        if self.max_placements < 1:
            raise ValueError(
                f"max_placements must be positive, got {self.max_placements}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def updated(self, **changes) -> "DecoderSettings":
        """Return a copy with the given fields changed"""
        return replace(self, **changes)


def settings_from_dict(data: dict[str, Any]) -> DecoderSettings:
    """Merge a plain dict over the defaults, ignoring unknown keys"""
    known = {f.name for f in fields(DecoderSettings)}
    values = {}
    for key, value in data.items():
        if key in known:
            values[key] = value
        else:
            logger.warning(f"Ignoring unknown setting: {key}")
    return DecoderSettings(**values)


def load_settings(path: Optional[Union[str, Path]] = None) -> DecoderSettings:
    """
    Load decoder settings from a JSON file.

    Args:
        path: JSON file holding an object of setting overrides

    Returns:
        Settings with file values merged over the defaults. A missing or
        corrupt file yields the defaults.
    """
    if path is None:
        return DecoderSettings()

    settings_file = Path(path)
    if not settings_file.exists():
        logger.debug(f"Settings file not found, using defaults: {settings_file}")
        return DecoderSettings()

    try:
        with open(settings_file) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        # If file is corrupted, start fresh
        logger.warning(f"Could not read settings from {settings_file}: {e}")
        return DecoderSettings()

    if not isinstance(data, dict):
        logger.warning(f"Settings file {settings_file} does not hold an object")
        return DecoderSettings()

    return settings_from_dict(data)
