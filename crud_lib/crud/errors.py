"""Error kinds raised by CRUD handlers.

Each error carries the HTTP status it maps to; the endpoint's exception
handler writes `str(exc)` as a plain-text body with that status.
"""
from __future__ import annotations


class CrudError(Exception):
    status_code: int = 500


class MissingBodyError(CrudError):
    status_code = 400

    def __init__(self, message: str = "no body supplied") -> None:
        super().__init__(message)


class NotFoundError(CrudError):
    status_code = 404

    def __init__(self, message: str = "object not found") -> None:
        super().__init__(message)


class StorageError(CrudError):
    """Any failure reported by the storage collaborator."""

    status_code = 500

    def __init__(self, cause: BaseException | str) -> None:
        super().__init__(str(cause))


class DecodeError(CrudError):
    """JSON decode failure; 500 for stored data, 400 for request bodies."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code
