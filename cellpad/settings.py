"""User settings for the cellpad editor.

Settings live in a JSON file in the OS-appropriate config directory. Every
key is optional; a missing or unreadable file simply yields the defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir("cellpad")) / "settings.json"


@dataclass
class EditorSettings:
    accel_baseline: int = EditorConstants.ACCEL_BASELINE
    accel_ceiling: int = EditorConstants.ACCEL_CEILING
    default_save_name: str = EditorConstants.DEFAULT_SAVE_NAME
    show_hidden: bool = True
    log_file: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from a dict, ignoring unknown or mistyped keys."""
        settings = cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            default = getattr(settings, f.name)
            if default is not None and not isinstance(value, type(default)):
                logger.warning(f"Ignoring setting {f.name}={value!r}: expected {type(default).__name__}")
                continue
            setattr(settings, f.name, value)
        if settings.accel_baseline < 1:
            logger.warning("accel_baseline must be at least 1, using default")
            settings.accel_baseline = EditorConstants.ACCEL_BASELINE
        if settings.accel_ceiling < settings.accel_baseline:
            logger.warning("accel_ceiling below accel_baseline, clamping")
            settings.accel_ceiling = settings.accel_baseline
        return settings


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from ``path`` (default: the user config file)."""
    settings_file = path or default_settings_path()
    if not settings_file.exists():
        return EditorSettings()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return EditorSettings()

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return EditorSettings()

    return EditorSettings.from_dict(data)
