"""User settings loaded from a TOML file."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from logging import getLogger
from pathlib import Path
from tomllib import TOMLDecodeError, load
from typing import Any, TypedDict

logger = getLogger(__name__)

CONFIG_ENV_VAR = "QUICK_CSV_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "quick-csv" / "settings.toml"


class ParseOptions(TypedDict):
    """Keyword arguments for ``tabular.parse`` derived from settings."""

    max_rows: int
    has_headers: bool | None
    delimiter: str | None


@dataclass(frozen=True)
class Settings:
    """Settings shared by all commands."""

    max_display_rows: int = 1000
    auto_detect_headers: bool = True
    default_delimiter: str = ""  # Empty means auto-detect

    def __post_init__(self) -> None:
        """Validate field values."""
        if self.max_display_rows <= 0:
            msg = f"max_display_rows must be positive, got {self.max_display_rows}"
            raise ValueError(msg)
        if len(self.default_delimiter) > 1:
            msg = (
                "default_delimiter must be a single character or empty, "
                f"got {self.default_delimiter!r}"
            )
            raise ValueError(msg)

    def parse_options(self) -> ParseOptions:
        """Translate settings into parser options."""
        return {
            "max_rows": self.max_display_rows,
            "has_headers": None if self.auto_detect_headers else True,
            "delimiter": self.default_delimiter or None,
        }


def settings_path(path: Path | None = None) -> Path:
    """Resolve the settings file location."""
    if path is not None:
        return path
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def settings_from_dict(values: dict[str, Any]) -> Settings:
    """Build settings from parsed TOML, checking value types."""
    known = {f.name: f for f in fields(Settings)}
    options: dict[str, Any] = {}

    for key, value in values.items():
        if key not in known:
            logger.warning("Ignoring unknown setting: %s", key)
            continue
        expected = type(getattr(Settings, key))
        # bool is a subclass of int, reject it explicitly for integer settings
        if not isinstance(value, expected) or (
            expected is int and isinstance(value, bool)
        ):
            msg = (
                f"Setting {key!r} must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
            raise ValueError(msg)  # noqa: TRY004
        options[key] = value

    return Settings(**options)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no file exists.

    Raises:
        ValueError: If the file is not valid TOML or holds invalid values

    """
    location = settings_path(path)
    if not location.exists():
        logger.debug("No settings file at %s, using defaults", location)
        return Settings()

    try:
        with location.open("rb") as f:
            values = load(f)
    except TOMLDecodeError as err:
        msg = f"Invalid settings file {location}: {err}"
        raise ValueError(msg) from err

    return settings_from_dict(values)
