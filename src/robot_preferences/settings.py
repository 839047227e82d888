"""Preferences configuration using Pydantic settings.

Settings are loaded from environment variables (prefix ``PREFERENCES_``) or a
``.env`` file and validated using Pydantic.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENTRY_POINT_GROUP = "robot_preferences.values"


class PreferencesSettings(BaseSettings):
    """Configuration for the preferences registry and its storage.

    Environment Variables:
        PREFERENCES_BACKEND: Storage backend: memory, json or wpilib
            (default: memory)
        PREFERENCES_JSON_PATH: File used by the json backend
            (default: preferences.json)
        PREFERENCES_RESERVED_PREFIX: Keys with this prefix are never pruned
            (default: ".")
        PREFERENCES_CLEAR_ON_RESET: Remove every stored key before writing
            defaults on a reset boot (default: true)
        PREFERENCES_PRUNE_STALE_KEYS: Remove unregistered keys while
            reconciling (default: true)
        PREFERENCES_ENTRY_POINT_GROUP: Entry point group scanned by
            ``PreferencesRegistry.discover()``
            (default: robot_preferences.values)

    Example:
        >>> settings = PreferencesSettings(backend="json", json_path="/tmp/prefs.json")
        >>> settings.json_path
        PosixPath('/tmp/prefs.json')
    """

    model_config = SettingsConfigDict(
        env_prefix="PREFERENCES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["memory", "json", "wpilib"] = Field(
        default="memory",
        description="Storage backend",
    )
    json_path: Path = Field(
        default=Path("preferences.json"),
        description="Preferences file for the json backend",
    )
    reserved_prefix: str = Field(
        default=".",
        description="Key prefix reserved for dashboard/internal keys",
    )
    clear_on_reset: bool = Field(
        default=True,
        description="Remove all stored keys before writing defaults on reset",
    )
    prune_stale_keys: bool = Field(
        default=True,
        description="Remove unregistered keys during reconciliation",
    )
    entry_point_group: str = Field(
        default=DEFAULT_ENTRY_POINT_GROUP,
        description="Entry point group for value discovery",
    )

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v: object) -> object:
        """Normalize backend name to lowercase."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("reserved_prefix")
    @classmethod
    def validate_reserved_prefix(cls, v: str) -> str:
        """Reject an empty prefix, which would reserve every key."""
        if not v:
            msg = "reserved_prefix must not be empty"
            raise ValueError(msg)
        return v


@lru_cache(maxsize=1)
def get_preferences_settings() -> PreferencesSettings:
    """Get cached PreferencesSettings instance.

    Clear cache with ``get_preferences_settings.cache_clear()`` for testing.
    """
    return PreferencesSettings()
