"""Storage backend interface definitions.

Defines the StreamStorage abstract class the CRUD endpoints use to persist
and retrieve opaque byte streams. Backends address objects by a single
string key; namespacing is left to the caller.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import BinaryIO, List

from .interfaces import StreamWriter


class StreamStorage(ABC):
    """Abstract byte-stream storage backend.

    Implementations must be thread-safe if used concurrently.
    """

    @abstractmethod
    def has(self, key: str) -> bool:
        """Return True if an object is stored under `key`."""

    @abstractmethod
    def get_reader(self, key: str) -> BinaryIO:
        """Open the object under `key` for reading.

        The caller must close the returned stream. Should raise `KeyError`
        if the key does not exist.
        """

    @abstractmethod
    def get_writer(self, key: str) -> StreamWriter:
        """Open a writer that replaces the object under `key`.

        Nothing is visible to readers until the writer is closed. Closing may
        itself fail; `abort()` discards the pending content.
        """

    @abstractmethod
    def list(self, prefix: str) -> List[str]:
        """Return all stored keys starting with `prefix`."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the stored object. Raise `KeyError` if not found."""
