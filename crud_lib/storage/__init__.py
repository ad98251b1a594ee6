"""Storage abstraction package for the CRUD server."""
from pathlib import Path

from .base import StreamStorage
from .file_backend import FileStreamStorage
from .interfaces import StreamStorageProtocol, StreamWriter
from .memory_backend import MemoryStreamStorage


def create_storage(backend: str = "file", data_dir: str | Path = "data/objects") -> StreamStorage:
    """Compose a storage backend by name.

    backend: 'file' (one file per key under `data_dir`) or 'memory'.
    """
    if backend == "file":
        return FileStreamStorage(data_dir=data_dir)
    if backend == "memory":
        return MemoryStreamStorage()
    raise ValueError(f"Unknown storage backend: {backend!r}")


__all__ = [
    "StreamStorage",
    "StreamStorageProtocol",
    "StreamWriter",
    "FileStreamStorage",
    "MemoryStreamStorage",
    "create_storage",
]
