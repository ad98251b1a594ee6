"""File-backed stream storage.

Each key is stored as one file under `data_dir`. Keys are percent-encoded
into file names so separators such as `::` and `/` round-trip safely.
Writes go to a temporary file which is fsynced and renamed on close.

`quote()` only ever emits `%` followed by two uppercase hex digits, so
names starting with `%h` or `%t` can never collide with an encoded key:

    <quoted key>     object whose encoded key fits in a file name
    %h<sha256>       object with a long key; first line holds the encoded key
    %t<uuid>         pending write
"""
from __future__ import annotations
import hashlib
import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO, List, Optional
from urllib.parse import quote, unquote

from .base import StreamStorage

logger = logging.getLogger(__name__)

HASHED_PREFIX = "%h"
TMP_PREFIX = "%t"
# well below the usual 255 byte NAME_MAX
MAX_NAME_LENGTH = 200


class AtomicFileWriter:
    """Write to a temporary sibling file and publish it on `close`."""

    def __init__(self, path: Path, header: Optional[bytes] = None) -> None:
        self.path = path
        # unique per writer so concurrent writes to one key don't collide
        self.tmp = path.with_name(f"{TMP_PREFIX}{uuid.uuid4().hex}")
        self._f = open(self.tmp, "wb")
        self.closed = False
        if header:
            try:
                self._f.write(header)
            except Exception:
                self.abort()
                raise

    def write(self, data: bytes) -> int:
        return self._f.write(data)

    def abort(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._f.close()
        self.tmp.unlink(missing_ok=True)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._f.flush()
            os.fsync(self._f.fileno())
            self._f.close()
            self.tmp.replace(self.path)
        except Exception:
            self._f.close()
            self.tmp.unlink(missing_ok=True)
            raise


class FileStreamStorage(StreamStorage):
    def __init__(self, data_dir: str | Path = "./data/objects") -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _name_for(self, key: str) -> tuple[str, bool]:
        """Return the file name for `key` and whether it is a hashed name."""
        name = quote(key, safe="")
        if len(name) <= MAX_NAME_LENGTH and name not in (".", ".."):
            return name, False
        return HASHED_PREFIX + hashlib.sha256(key.encode("utf-8")).hexdigest(), True

    def _path_for(self, key: str) -> Path:
        return self.data_dir / self._name_for(key)[0]

    def has(self, key: str) -> bool:
        return self._path_for(key).is_file()

    def get_reader(self, key: str) -> BinaryIO:
        name, hashed = self._name_for(key)
        path = self.data_dir / name
        if not path.is_file():
            raise KeyError(key)
        f = open(path, "rb")
        if hashed:
            # skip the stored key
            f.readline()
        return f

    def get_writer(self, key: str) -> AtomicFileWriter:
        name, hashed = self._name_for(key)
        header = quote(key, safe="").encode("ascii") + b"\n" if hashed else None
        return AtomicFileWriter(self.data_dir / name, header=header)

    def _key_of(self, path: Path) -> str:
        if path.name.startswith(HASHED_PREFIX):
            with open(path, "rb") as f:
                return unquote(f.readline().rstrip(b"\n").decode("ascii"))
        return unquote(path.name)

    def list(self, prefix: str) -> List[str]:
        keys = []
        for p in self.data_dir.iterdir():
            if not p.is_file() or p.name.startswith(TMP_PREFIX):
                continue
            try:
                key = self._key_of(p)
            except FileNotFoundError:
                # deleted while listing
                continue
            if key.startswith(prefix):
                keys.append(key)
        logger.debug("FileStreamStorage listed %d keys under %r", len(keys), prefix)
        return keys

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        if not path.is_file():
            raise KeyError(key)
        path.unlink()
