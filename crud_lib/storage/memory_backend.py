"""Simple memory-backed stream storage

This backend keeps every object as a `bytes` value in a dict keyed by the
full storage key.
"""
import io
from threading import RLock
from typing import BinaryIO, Dict, List

from .base import StreamStorage


class MemoryWriter:
    """Buffer writes and publish them into the owning store on close."""

    def __init__(self, store: "MemoryStreamStorage", key: str):
        self._store = store
        self._key = key
        self._buf = io.BytesIO()
        self.closed = False

    def write(self, data: bytes) -> int:
        return self._buf.write(data)

    def abort(self) -> None:
        self.closed = True

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._store._put(self._key, self._buf.getvalue())


class MemoryStreamStorage(StreamStorage):
    def __init__(self):
        self._lock = RLock()
        self._store: Dict[str, bytes] = {}

    def _put(self, key: str, value: bytes) -> None:
        with self._lock:
            self._store[key] = value

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._store

    def get_reader(self, key: str) -> BinaryIO:
        with self._lock:
            if key not in self._store:
                raise KeyError(key)
            return io.BytesIO(self._store[key])

    def get_writer(self, key: str) -> MemoryWriter:
        return MemoryWriter(self, key)

    def list(self, prefix: str) -> List[str]:
        with self._lock:
            return [k for k in self._store if k.startswith(prefix)]

    def delete(self, key: str) -> None:
        with self._lock:
            if key not in self._store:
                raise KeyError(key)
            del self._store[key]
