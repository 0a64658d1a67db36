"""
smartfill.storage

Key-value persistence for autofill history:
- KeyValueStore: get(key) -> Optional[str], set(key, value)
- MemoryStore: in-process dict
- JsonFileStore: every key in one JSON object on disk, written atomically
"""

import os
import json
import logging
import tempfile
import threading
from typing import Dict, Optional

from .errors import StorageError

log = logging.getLogger(__name__)


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)

def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    d = os.path.dirname(path) or "."
    # unique temp name so concurrent writers never share a temp file
    with tempfile.NamedTemporaryFile(dir=d, prefix=os.path.basename(path) + ".", suffix=".tmp", delete=False) as f:
        tmp = f.name
        try:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        except OSError:
            f.close()
            os.remove(tmp)
            raise
    try:
        os.replace(tmp, path)
    except OSError:
        os.remove(tmp)
        raise

def atomic_read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def default_store_path() -> str:
    """
    Windows %APPDATA% location; fallback to user profile .smartfill.
    """
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "SmartFill", "history.json")
    home = os.path.expanduser("~")
    return os.path.join(home, ".smartfill", "history.json")

def read_json_bytes(b: bytes) -> dict:
    return json.loads(b.decode("utf-8"))

def dump_json_bytes(obj: dict) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=None).encode("utf-8")


def autofill_key(namespace: str, field: str) -> str:
    return f"{namespace}_autofill_{field}"


class KeyValueStore:
    """Synchronous string key-value surface supplied by the presentation layer."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


_path_locks: Dict[str, threading.Lock] = {}
_path_locks_guard = threading.Lock()

def _lock_for_path(path: str) -> threading.Lock:
    with _path_locks_guard:
        return _path_locks.setdefault(os.path.abspath(path), threading.Lock())


class JsonFileStore(KeyValueStore):
    """
    File-backed store. The whole file is a JSON object of key -> string and is
    rewritten on every set(). Stores on the same path share one lock, so
    writes for different keys never overwrite each other.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or default_store_path()
        self._lock = _lock_for_path(self.path)

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            data = read_json_bytes(atomic_read_bytes(self.path))
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read store at {self.path}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Invalid store format at {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Invalid value for {key!r}")
        return value

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._load()
            except StorageError:
                # a corrupt file is replaced rather than blocking writes
                log.warning("Discarding unreadable store at %s", self.path)
                data = {}
            data[key] = value
            try:
                atomic_write_bytes(self.path, dump_json_bytes(data))
            except OSError as e:
                raise StorageError(f"Could not write store at {self.path}") from e
