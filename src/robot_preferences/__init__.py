"""Robot Preferences: typed, persisted, reconciled robot tunables."""

from robot_preferences.discovery import DiscoveredContribution, discover, scan
from robot_preferences.dispatch import DriftNotice, ValueKind
from robot_preferences.exceptions import (
    DuplicateKeyError,
    PreferencesError,
    PreferenceTypeError,
    StorageError,
    UnregisteredValueError,
)
from robot_preferences.registry import (
    WRITE_DEFAULT_KEY,
    InitReport,
    PreferencesRegistry,
    RegistryState,
    get_registry,
)
from robot_preferences.settings import PreferencesSettings, get_preferences_settings
from robot_preferences.storage import (
    JsonFileStorage,
    MemoryStorage,
    PreferencesStorage,
    WpilibPreferencesStorage,
    create_storage,
)
from robot_preferences.values import (
    BooleanValue,
    DoubleValue,
    IntegerValue,
    PreferenceValue,
    StringValue,
    Value,
)

__all__ = [
    "WRITE_DEFAULT_KEY",
    "BooleanValue",
    "DiscoveredContribution",
    "DoubleValue",
    "DriftNotice",
    "DuplicateKeyError",
    "InitReport",
    "IntegerValue",
    "JsonFileStorage",
    "MemoryStorage",
    "PreferenceTypeError",
    "PreferenceValue",
    "PreferencesError",
    "PreferencesRegistry",
    "PreferencesSettings",
    "PreferencesStorage",
    "RegistryState",
    "StorageError",
    "StringValue",
    "UnregisteredValueError",
    "Value",
    "ValueKind",
    "WpilibPreferencesStorage",
    "create_storage",
    "discover",
    "get_preferences_settings",
    "get_registry",
    "scan",
]
