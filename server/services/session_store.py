"""
Session store for the liked history.

The liked history is kept as one JSON blob under a fixed key. BlobStore is
the key/value boundary (file-backed for the server, in-memory for tests);
BlobSessionStore maps it to the engine's SessionStore protocol and treats
unreadable data as an empty history.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from pydantic import ValidationError

from feed_engine.errors import StorageCorruptError
from feed_engine.models.item import ContentItem

logger = logging.getLogger(__name__)

LIKES_KEY = "swipefeed.likes"


class BlobStore(Protocol):
    """String key/value storage."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> None:
        ...


class MemoryBlobStore:
    """Dict-backed blob store. Used by tests and when no data dir is configured."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def put(self, key: str, value: str) -> None:
        self.blobs[key] = value


class FileBlobStore:
    """One file per key under a directory."""

    def __init__(self, directory: Union[Path, str]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageCorruptError(f"blob {key} unreadable: {e}") from e

    def put(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)


def decode_history(raw: str) -> List[ContentItem]:
    """Parse a stored blob. Raises StorageCorruptError on anything unreadable."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        raise StorageCorruptError(f"liked history is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise StorageCorruptError(f"liked history must be a list, got {type(data).__name__}")
    try:
        return [ContentItem.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise StorageCorruptError(f"liked history entry invalid: {e.error_count()} errors") from e


class BlobSessionStore:
    """SessionStore over a BlobStore."""

    def __init__(self, blobs: BlobStore, key: str = LIKES_KEY):
        self.blobs = blobs
        self.key = key

    def load(self) -> List[ContentItem]:
        try:
            raw = self.blobs.get(self.key)
            if not raw:
                return []
            return decode_history(raw)
        except StorageCorruptError as e:
            logger.warning("[session_store] HISTORY_CORRUPT key=%s error=%s", self.key, e)
            return []

    def save(self, history: List[ContentItem]) -> None:
        payload = json.dumps([item.model_dump() for item in history])
        self.blobs.put(self.key, payload)
