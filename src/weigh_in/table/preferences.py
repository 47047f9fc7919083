"""Client-local preference storage.

The table engine only needs string get/set, so any key-value store can
stand in; the CLI keeps preferences in a JSON file next to the database.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

PREFERENCES_FILENAME = "preferences.json"


@runtime_checkable
class PreferenceStore(Protocol):
    """Protocol for client-local key-value preferences."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if unset."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        ...


class MemoryPreferenceStore:
    """In-process preferences, lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferenceStore:
    """Preferences persisted to a small JSON file."""

    def __init__(self, path: Path):
        self.path = path

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
