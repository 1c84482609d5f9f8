"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (DOCNAV__TRACKER__THRESHOLD_RATIO=0.25)
  2. docnav.yaml            (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_MIN_HEADINGS = 2
DEFAULT_MAX_DEPTH = 6
DEFAULT_SLUG_MAX_LENGTH = 50
# Share of the viewport height below the scroll position that counts as "reached".
DEFAULT_THRESHOLD_RATIO = 0.3
DEFAULT_FRAME_INTERVAL = 1 / 60
DEFAULT_TOP_OFFSET = 80.0


def _find_config_file() -> str | None:
    """Return the path of the first docnav.yaml found, or None."""
    candidates = [
        Path("docnav.yaml"),
        Path(platformdirs.user_config_dir("docnav")) / "docnav.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class OutlineSettings(BaseModel):
    min_headings: int = Field(default=DEFAULT_MIN_HEADINGS, ge=1)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=6)
    numbered: bool = False
    class_name: str = Field(default="toc", min_length=1)
    slug_max_length: int = Field(default=DEFAULT_SLUG_MAX_LENGTH, ge=2)


class TrackerSettings(BaseModel):
    threshold_ratio: float = Field(default=DEFAULT_THRESHOLD_RATIO, ge=0.0, le=1.0)
    # Fixed pixel threshold; overrides threshold_ratio when set.
    threshold: float | None = Field(default=None, ge=0.0)
    frame_interval: float = Field(default=DEFAULT_FRAME_INTERVAL, ge=0.0)


class NavigationSettings(BaseModel):
    top_offset: float = DEFAULT_TOP_OFFSET
    behavior: Literal["smooth", "auto"] = "smooth"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: DOCNAV__OUTLINE__MAX_DEPTH=3
        env_prefix="DOCNAV__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    outline: OutlineSettings = OutlineSettings()
    tracker: TrackerSettings = TrackerSettings()
    navigation: NavigationSettings = NavigationSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
