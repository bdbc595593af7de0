"""Persistent display preferences.

A string key-value storage (JSON file under the platform config directory,
or an in-memory dict) holds one namespaced record of display toggles. The
record is loaded once, merged over defaults, and written back on every
change. Malformed payloads self-heal to defaults instead of raising.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "niftymenu"
STORAGE_FILENAME = "storage.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / STORAGE_FILENAME
CONFIG_KEY = "niftyPrefs"

DEFAULTS: dict[str, object] = {
    "arrowStyle": "arrow",
    "backgroundImage": 1,
    "exposeMode": 0,
    "darkMode": 0,
}
LEGACY_KEYS = {
    "bgimage": "backgroundImage",
    "expose": "exposeMode",
    "darkmode": "darkMode",
}
_AFFIRMATIVE_RE = re.compile(r"^\s*(y(es)?|true)\s*$", re.IGNORECASE)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage; survives ``Preferences.reload`` but not the process."""

    def __init__(self, items: Mapping[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes += 1


class JsonFileStorage:
    """String key-value storage persisted as one pretty-printed JSON object."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        # Resolved per call so tests can patch ``CONFIG_PATH``.
        return self._path if self._path is not None else CONFIG_PATH

    def _load(self) -> dict[str, object]:
        """Return the stored object, or ``{}`` when missing, unreadable, or malformed."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except Exception:
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Write ``key``; filesystem errors are logged and otherwise ignored."""
        data = self._load()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("could not write preferences to %s: %s", self.path, exc)


def canonical_key(key: str) -> str | None:
    """Return the canonical preference key for ``key`` or ``None`` if unknown."""
    if key in DEFAULTS:
        return key
    return LEGACY_KEYS.get(key)


def coerce_bool(value: object) -> bool:
    """Numeric values are true when non-zero; strings when they read as yes/true."""
    if value is None:
        return False
    if isinstance(value, (bool, int, float)):
        number = float(value)
        return not math.isnan(number) and number != 0
    text = str(value)
    try:
        number = float(text)
    except ValueError:
        return bool(_AFFIRMATIVE_RE.match(text))
    return not math.isnan(number) and number != 0


def _merge_with_defaults(stored: Mapping[object, object]) -> dict[str, object]:
    record = dict(DEFAULTS)
    for raw_key, value in stored.items():
        if not isinstance(raw_key, str):
            continue
        key = canonical_key(raw_key)
        if key is None:
            continue
        if raw_key != key and key in stored:
            # Canonical spelling wins over a legacy alias.
            continue
        record[key] = value
    return record


class Preferences:
    """Typed preference record over a ``KeyValueStorage``."""

    def __init__(self, storage: KeyValueStorage | None = None, key: str = CONFIG_KEY) -> None:
        self._storage = storage if storage is not None else JsonFileStorage()
        self._key = key
        self._record: dict[str, object] | None = None

    def _load(self) -> dict[str, object]:
        if self._record is None:
            raw = self._storage.get_item(self._key)
            stored: object = None
            if raw is not None:
                try:
                    stored = json.loads(raw)
                except ValueError:
                    stored = None
                if not isinstance(stored, dict):
                    logger.warning("discarding malformed preference payload under %r", self._key)
                    stored = None
            self._record = _merge_with_defaults(stored or {})
            self._persist()
        return self._record

    def _persist(self) -> None:
        assert self._record is not None
        self._storage.set_item(self._key, json.dumps(self._record))

    def reload(self) -> None:
        """Forget the in-memory record; the next access re-reads storage."""
        self._record = None

    def get(self, key: str | None = None) -> object:
        """Return the raw value for ``key``, ``None`` if unknown, or the whole record."""
        record = self._load()
        if key is None:
            return dict(record)
        canonical = canonical_key(key)
        if canonical is None:
            return None
        return record.get(canonical)

    def get_bool(self, key: str) -> bool:
        return coerce_bool(self.get(key))

    def set(self, key: str, value: object) -> None:
        self.update({key: value})

    def update(self, values: Mapping[str, object]) -> None:
        """Apply several preference changes with a single storage write."""
        record = self._load()
        changed = False
        for key, value in values.items():
            canonical = canonical_key(key)
            if canonical is None:
                logger.warning("ignoring unknown preference key %r", key)
                continue
            record[canonical] = value
            changed = True
        if changed:
            self._persist()
