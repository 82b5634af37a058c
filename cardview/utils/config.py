from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from cardview.utils.constants import CARD_HEIGHT_OPTIONS, DEFAULT_CARD_HEIGHT

DEFAULT_DATA_ROOT = Path("./data")
DEFAULT_SETTINGS_SUBDIR = "settings"
DATA_ROOT_ENV = "CARDS_DATA_ROOT"
TIMEZONE_ENV = "CARDS_TIMEZONE"
SETTINGS_DIR_ENV = "CARDS_SETTINGS_DIR"
CARD_HEIGHT_ENV = "CARDS_DEFAULT_CARD_HEIGHT"


@dataclass(frozen=True)
class DisplayConfig:
    timezone: tzinfo | None
    default_card_height: str


@dataclass(frozen=True)
class StorageConfig:
    settings_directory: Path


def get_data_root() -> Path:
    return Path(os.getenv(DATA_ROOT_ENV, DEFAULT_DATA_ROOT)).expanduser()


def get_display_timezone() -> tzinfo | None:
    """Return the configured IANA timezone, or None to use the process local zone."""
    name = (os.getenv(TIMEZONE_ENV) or "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def get_default_card_height() -> str:
    value = (os.getenv(CARD_HEIGHT_ENV) or "").strip()
    return value if value in CARD_HEIGHT_OPTIONS else DEFAULT_CARD_HEIGHT


def load_display_config() -> DisplayConfig:
    return DisplayConfig(
        timezone=get_display_timezone(),
        default_card_height=get_default_card_height(),
    )


def get_settings_dir(data_root: Path | None = None) -> Path:
    explicit = os.getenv(SETTINGS_DIR_ENV)
    if explicit:
        return Path(explicit).expanduser()
    root = data_root if data_root is not None else get_data_root()
    return (root / DEFAULT_SETTINGS_SUBDIR).expanduser()


def load_storage_config(data_root: Path | None = None) -> StorageConfig:
    return StorageConfig(settings_directory=get_settings_dir(data_root))
