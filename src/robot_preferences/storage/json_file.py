"""JSON-file preference storage.

Persists preferences across process restarts as a single JSON document::

    {
      "version": 1,
      "entries": {
        "DriveStraight/P": {"type": "double", "value": 0.081},
        "WriteDefaultPrefs": {"type": "boolean", "value": false}
      }
    }

Entries are validated with a Pydantic discriminated union on ``type``. Non-finite
doubles are written as the ``Infinity`` / ``NaN`` constants. Every
mutation is written through atomically (temp file + ``os.replace``).
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from robot_preferences.exceptions import StorageError
from robot_preferences.logging import get_logger

logger = get_logger(__name__)


class StringEntry(BaseModel):
    """Stored string preference."""

    type: Literal["string"] = "string"
    value: StrictStr


class IntegerEntry(BaseModel):
    """Stored integer preference."""

    type: Literal["integer"] = "integer"
    value: StrictInt


class DoubleEntry(BaseModel):
    """Stored double preference."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    type: Literal["double"] = "double"
    value: float


class BooleanEntry(BaseModel):
    """Stored boolean preference."""

    type: Literal["boolean"] = "boolean"
    value: StrictBool


StoredEntry = Annotated[
    StringEntry | IntegerEntry | DoubleEntry | BooleanEntry,
    Field(discriminator="type"),
]


class PreferencesDocument(BaseModel):
    """On-disk document layout."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    version: Literal[1] = 1
    entries: dict[str, StoredEntry] = Field(default_factory=dict)


class JsonFileStorage:
    """File-backed storage surviving process restarts.

    A missing file starts an empty store. A file that cannot be read or
    validated is logged, renamed to ``<name>.corrupt`` and replaced by an
    empty store, so robot startup is never aborted by a bad file.

    Args:
        path: Location of the JSON document.

    Raises:
        StorageError: When a mutation cannot be written to disk.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._document = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> PreferencesDocument:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("preferences_file_missing", path=str(self._path))
            return PreferencesDocument()
        except OSError:
            logger.exception("preferences_file_unreadable", path=str(self._path))
            return PreferencesDocument()

        try:
            return PreferencesDocument.model_validate_json(raw)
        except PydanticValidationError:
            corrupt = self._path.with_name(self._path.name + ".corrupt")
            logger.exception(
                "preferences_file_invalid",
                path=str(self._path),
                moved_to=str(corrupt),
            )
            try:
                os.replace(self._path, corrupt)
            except OSError:
                logger.exception("preferences_file_move_failed", path=str(self._path))
            return PreferencesDocument()

    def _save(self) -> None:
        payload = self._document.model_dump_json(indent=2)
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            msg = f"Failed to write preferences file: {self._path}"
            raise StorageError(msg, {"path": str(self._path)}) from exc

    def _entry(self, key: str) -> StringEntry | IntegerEntry | DoubleEntry | BooleanEntry | None:
        return self._document.entries.get(key)

    def get_string(self, key: str, default: str) -> str:
        entry = self._entry(key)
        return entry.value if isinstance(entry, StringEntry) else default

    def get_int(self, key: str, default: int) -> int:
        entry = self._entry(key)
        return entry.value if isinstance(entry, IntegerEntry) else default

    def get_double(self, key: str, default: float) -> float:
        entry = self._entry(key)
        if isinstance(entry, (DoubleEntry, IntegerEntry)):
            return float(entry.value)
        return default

    def get_boolean(self, key: str, default: bool) -> bool:
        entry = self._entry(key)
        return entry.value if isinstance(entry, BooleanEntry) else default

    def put_string(self, key: str, value: str) -> None:
        self._document.entries[key] = StringEntry(value=value)
        self._save()

    def put_int(self, key: str, value: int) -> None:
        self._document.entries[key] = IntegerEntry(value=value)
        self._save()

    def put_double(self, key: str, value: float) -> None:
        self._document.entries[key] = DoubleEntry(value=value)
        self._save()

    def put_boolean(self, key: str, value: bool) -> None:
        self._document.entries[key] = BooleanEntry(value=value)
        self._save()

    def contains_key(self, key: str) -> bool:
        return key in self._document.entries

    def keys(self) -> list[str]:
        return list(self._document.entries)

    def remove(self, key: str) -> None:
        if self._document.entries.pop(key, None) is not None:
            self._save()

    def remove_all(self) -> None:
        self._document.entries.clear()
        self._save()
