"""Configuration system for TranscriptShelf.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/tshelf/config.toml (user-level)
3. ./tshelf.toml (project-level)
4. Environment variables (TSHELF_SEGMENT__PAUSE_THRESHOLD, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "tshelf" / "config.toml"
_PROJECT_CONFIG = Path("tshelf.toml")


class SegmentConfig(BaseModel):
    pause_threshold: float = Field(1.5, ge=0)  # seconds of silence after a sentence end
    max_words: int = Field(150, ge=1)


class SearchConfig(BaseModel):
    batch_size: int = Field(10, ge=1)  # episodes between progress checkpoints


class LibraryConfig(BaseModel):
    path: Path | None = None  # JSON/JSONL library rows file


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_toml_layers() -> dict:
    """Merge the default, user and project TOML files."""
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        config_data = _deep_merge(config_data, _load_toml(path))

    # Flatten 'general' section into top-level
    if "general" in config_data:
        general = config_data.pop("general")
        config_data = _deep_merge(config_data, general)
    return config_data


class _TomlLayersSource(PydanticBaseSettingsSource):
    """Settings source for the TOML layers, ranked below environment variables."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        # Values are supplied all at once by __call__
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return _load_toml_layers()


class TShelfConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TSHELF_",
        env_nested_delimiter="__",
    )

    segment: SegmentConfig = SegmentConfig()
    search: SearchConfig = SearchConfig()
    library: LibraryConfig = LibraryConfig()
    export_dir: Path = Path("./tshelf_export")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources win: CLI overrides, env, then TOML files
        return (init_settings, env_settings, _TomlLayersSource(settings_cls))


def load_config(**cli_overrides: object) -> TShelfConfig:
    """Load configuration from all layers and merge.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. segment.max_words=200).
    """
    overrides: dict = {}
    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = overrides
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    return TShelfConfig(**overrides)
