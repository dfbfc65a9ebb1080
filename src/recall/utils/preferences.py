"""String key-value preference stores consumed by the session controller."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class PreferencesStore(Protocol):
    def get(self, key: str, default: str | None = None) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryPreferences:
    """Dictionary-backed store, used by tests and headless runs."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._values[key] = str(value)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)


class JsonFilePreferences(InMemoryPreferences):
    """Store persisted as a flat JSON object; every ``set`` is written through."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else self._default_path()
        super().__init__(self._load())

    @staticmethod
    def _default_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "preferences.json"

    @property
    def path(self) -> Path:
        return self._path

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._save()

    def _load(self) -> Dict[str, str]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load preferences from %s: %s", self._path, e)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring preferences in %s: expected a JSON object", self._path)
            return {}
        return {str(key): str(value) for key, value in payload.items() if value is not None}

    def _save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                json.dump(self.as_dict(), handle, indent=2, sort_keys=True)
        except OSError as e:
            logger.warning("Could not save preferences to %s: %s", self._path, e)
