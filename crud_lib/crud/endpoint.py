"""CRUD endpoint serving one storage namespace over HTTP.

An `Endpoint` is a self-contained ASGI application. Mount it wherever the
objects should be reachable:

    store = create_storage('file', data_dir='data/objects')
    app.mount('/objects', Endpoint('objects', store))

Routes (relative to the mount point):

    POST   /      store the body under a generated id, 201 + id
    GET    /      JSON array of ids in the namespace
    GET    /{id}  stored bytes
    PUT    /{id}  store the body under id, 200 + id
    PATCH  /{id}  shallow-merge a JSON object into the stored one
    DELETE /{id}  remove the object

The HTTP mount path and the storage `prefix` are independent.
"""
from __future__ import annotations
import logging
from typing import Any, AsyncIterable, BinaryIO, Callable, Iterator, Optional, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Receive, Scope, Send

from crud_lib.storage.interfaces import StreamStorageProtocol
from .errors import CrudError, MissingBodyError, NotFoundError, StorageError
from .keys import namespace_prefix, new_object_id, storage_key, strip_prefix
from .merge import decode_object, encode_object, shallow_merge

CHUNK_SIZE = 64 * 1024

T = TypeVar("T")


def has_body(request: Request) -> bool:
    """A request carries a body iff it declares a length or a transfer coding."""
    return "content-length" in request.headers or "transfer-encoding" in request.headers


def _iter_reader(reader: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    try:
        while True:
            chunk = reader.read(chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        reader.close()


def _read_all(store: StreamStorageProtocol, key: str) -> bytes:
    with store.get_reader(key) as reader:
        return reader.read()


async def _single(payload: bytes):
    yield payload


class Endpoint:
    """HTTP handler serving CRUD requests for objects under `prefix`."""

    def __init__(
        self,
        prefix: str,
        store: StreamStorageProtocol,
        logger: Optional[logging.Logger] = None,
        id_factory: Callable[[], str] = new_object_id,
    ) -> None:
        self.prefix = prefix
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.id_factory = id_factory

        # no docs routes: they would shadow object ids like 'docs'
        self.app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
        self.app.add_api_route('/', self.handle_post, methods=['POST'])
        self.app.add_api_route('/', self.handle_list, methods=['GET'])
        self.app.add_api_route('/{object_id}', self.handle_get, methods=['GET'])
        self.app.add_api_route('/{object_id}', self.handle_put, methods=['PUT'])
        self.app.add_api_route('/{object_id}', self.handle_patch, methods=['PATCH'])
        self.app.add_api_route('/{object_id}', self.handle_delete, methods=['DELETE'])
        self.app.add_exception_handler(CrudError, self._crud_error_handler)
        self.app.add_exception_handler(StarletteHTTPException, self._http_exception_handler)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)

    async def _crud_error_handler(self, request: Request, exc: CrudError) -> Response:
        if exc.status_code >= 500:
            self.logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        else:
            self.logger.debug("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc)
        return PlainTextResponse(str(exc), status_code=exc.status_code)

    async def _http_exception_handler(self, request: Request, exc: StarletteHTTPException) -> Response:
        # unknown paths and unregistered methods are both "not found"
        if exc.status_code in (404, 405):
            return PlainTextResponse("404 page not found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    def _key(self, object_id: str) -> str:
        return storage_key(self.prefix, object_id)

    async def _store_call(self, fn: Callable[..., T], *args: Any) -> T:
        """Run a blocking store call off the event loop; failures become StorageError."""
        try:
            return await run_in_threadpool(fn, *args)
        except Exception as e:
            raise StorageError(e) from e

    async def _require_existing(self, key: str) -> None:
        if not await self._store_call(self.store.has, key):
            raise NotFoundError()

    async def _write(self, key: str, chunks: AsyncIterable[bytes]) -> None:
        """Stream `chunks` into the store; a failed write is never published."""
        writer = await self._store_call(self.store.get_writer, key)
        try:
            async for chunk in chunks:
                if chunk:
                    await run_in_threadpool(writer.write, chunk)
        except Exception as e:
            await run_in_threadpool(writer.abort)
            raise StorageError(e) from e
        await self._store_call(writer.close)

    async def handle_post(self, request: Request) -> Response:
        self.logger.debug("POST request to %s", request.url)
        if not has_body(request):
            raise MissingBodyError()
        object_id = self.id_factory()
        await self._write(self._key(object_id), request.stream())
        return PlainTextResponse(object_id, status_code=201)

    async def handle_list(self, request: Request) -> Response:
        self.logger.debug("GET request to list %s", request.url)
        ns = namespace_prefix(self.prefix)
        keys = await self._store_call(self.store.list, ns)
        return JSONResponse([strip_prefix(self.prefix, k) for k in keys if k.startswith(ns)])

    async def handle_get(self, request: Request, object_id: str) -> Response:
        self.logger.debug("GET request to %s", request.url)
        key = self._key(object_id)
        await self._require_existing(key)
        reader = await self._store_call(self.store.get_reader, key)
        return StreamingResponse(_iter_reader(reader), media_type="application/octet-stream")

    async def handle_put(self, request: Request, object_id: str) -> Response:
        self.logger.debug("PUT request to %s", request.url)
        if not has_body(request):
            raise MissingBodyError()
        await self._write(self._key(object_id), request.stream())
        return PlainTextResponse(object_id)

    async def handle_patch(self, request: Request, object_id: str) -> Response:
        self.logger.debug("PATCH request to %s", request.url)
        key = self._key(object_id)
        await self._require_existing(key)

        old_object = decode_object(await self._store_call(_read_all, self.store, key), status_code=500)
        patch_object = decode_object(await request.body(), status_code=400)

        # read-merge-write without a version check: concurrent patches race
        payload = encode_object(shallow_merge(old_object, patch_object))
        await self._write(key, _single(payload))
        return Response(payload, media_type="application/json")

    async def handle_delete(self, request: Request, object_id: str) -> Response:
        self.logger.debug("DELETE request to %s", request.url)
        key = self._key(object_id)
        await self._require_existing(key)
        await self._store_call(self.store.delete, key)
        return Response(status_code=200)


def create_endpoint(prefix: str, store: StreamStorageProtocol, logger: Optional[logging.Logger] = None) -> Endpoint:
    """Construct a new CRUD endpoint for `prefix` backed by `store`."""
    if not prefix or "::" in prefix:
        raise ValueError(f"invalid endpoint prefix: {prefix!r}")
    return Endpoint(prefix, store, logger=logger)
