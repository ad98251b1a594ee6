from typing import Optional

import httpx
from starlette.testclient import TestClient

from crud_lib.storage.memory_backend import MemoryStreamStorage, MemoryWriter


def send_without_body(client: TestClient, method: str, path: str) -> httpx.Response:
    """Send a request that carries no body at all.

    httpx adds `Content-Length: 0` to POST/PUT/PATCH requests, which would
    declare an empty body; drop it so the request has none.
    """
    req = client.build_request(method, path)
    req.headers.pop("Content-Length", None)
    req.headers.pop("Transfer-Encoding", None)
    return client.send(req)


class _FailingCloseWriter(MemoryWriter):
    def close(self) -> None:
        self.closed = True
        raise OSError("close failed")


class _FailingWriteWriter(MemoryWriter):
    def write(self, data: bytes) -> int:
        raise OSError("write failed")


class FailingStorage(MemoryStreamStorage):
    """Memory store whose selected operations raise.

    `fail` names the operations to break: 'writer', 'write', 'close', 'reader',
    'list', 'delete', 'has'.
    """

    def __init__(self, fail: Optional[set] = None):
        super().__init__()
        self.fail = set(fail or ())

    def seed(self, key: str, value: bytes) -> None:
        self._put(key, value)

    def has(self, key):
        if 'has' in self.fail:
            raise OSError("has failed")
        return super().has(key)

    def get_reader(self, key):
        if 'reader' in self.fail:
            raise OSError("reader failed")
        return super().get_reader(key)

    def get_writer(self, key):
        if 'writer' in self.fail:
            raise OSError("disk full")
        if 'close' in self.fail:
            return _FailingCloseWriter(self, key)
        if 'write' in self.fail:
            return _FailingWriteWriter(self, key)
        return super().get_writer(key)

    def list(self, prefix):
        if 'list' in self.fail:
            raise OSError("list failed")
        return super().list(prefix)

    def delete(self, key):
        if 'delete' in self.fail:
            raise OSError("delete failed")
        return super().delete(key)
