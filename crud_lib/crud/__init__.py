"""CRUD endpoint package: HTTP handlers over a stream storage backend."""
from .endpoint import Endpoint, create_endpoint
from .errors import CrudError, DecodeError, MissingBodyError, NotFoundError, StorageError

__all__ = [
    "Endpoint",
    "create_endpoint",
    "CrudError",
    "DecodeError",
    "MissingBodyError",
    "NotFoundError",
    "StorageError",
]
