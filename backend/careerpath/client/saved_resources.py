"""Bookmarked learning resources, persisted per user.

The list lives under the key ``saved_resources_<user_id>`` and is written
back after every change. One writer per key is assumed.
"""
import json
import logging
import time
from pathlib import Path
from typing import Any, Optional, Protocol

from careerpath.core.config import settings

logger = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "saved_resources_"


class Storage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self):
        self._items: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def storage_key(user_id: str) -> str:
    return f"{STORAGE_KEY_PREFIX}{user_id}"


class SavedResourceStore:
    def __init__(self, storage: Storage, user_id: str):
        self.storage = storage
        self.user_id = user_id
        self.key = storage_key(user_id)
        self._resources: list[dict[str, Any]] = self._load()

    def _load(self) -> list[dict[str, Any]]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.error("Saved resources for %s are not valid JSON; starting empty", self.user_id)
            return []
        if not isinstance(data, list):
            logger.error("Saved resources for %s are not a list; starting empty", self.user_id)
            return []
        return [entry for entry in data if isinstance(entry, dict) and entry.get("id")]

    def _persist(self) -> None:
        self.storage.set(self.key, json.dumps(self._resources))

    @property
    def resources(self) -> list[dict[str, Any]]:
        return [dict(resource) for resource in self._resources]

    def is_saved(self, resource_id: str) -> bool:
        return any(resource["id"] == resource_id for resource in self._resources)

    def save(self, resource: dict[str, Any]) -> bool:
        """Bookmark ``resource``; returns False when its id is already saved."""
        if not resource.get("id"):
            raise ValueError("Resource must have an id")
        if self.is_saved(resource["id"]):
            return False
        entry = dict(resource)
        if not entry.get("savedAt"):
            entry["savedAt"] = int(time.time() * 1000)
        self._resources.append(entry)
        self._persist()
        return True

    def remove(self, resource_id: str) -> bool:
        remaining = [resource for resource in self._resources if resource["id"] != resource_id]
        if len(remaining) == len(self._resources):
            return False
        self._resources = remaining
        self._persist()
        return True

    def clear(self) -> None:
        self._resources = []
        self.storage.remove(self.key)

    def __len__(self) -> int:
        return len(self._resources)


def open_store(user_id: str, directory: str | Path | None = None) -> SavedResourceStore:
    return SavedResourceStore(JsonFileStorage(directory or settings.saved_resources_dir), user_id)
