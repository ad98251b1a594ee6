from typing import BinaryIO, List, Protocol, runtime_checkable


@runtime_checkable
class StreamWriter(Protocol):
    """Writable byte sink returned by `StreamStorage.get_writer`.

    `close` publishes the written bytes, `abort` drops them.
    """

    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...

    def abort(self) -> None: ...


@runtime_checkable
class StreamStorageProtocol(Protocol):
    """Storage protocol mirroring `crud_lib.storage.StreamStorage`.

    Implementations should follow the semantics documented on the abstract
    base class in `crud_lib.storage.base` (KeyError for missing keys,
    thread-safety where required, etc.).
    """

    def has(self, key: str) -> bool: ...

    def get_reader(self, key: str) -> BinaryIO: ...

    def get_writer(self, key: str) -> StreamWriter: ...

    def list(self, prefix: str) -> List[str]: ...

    def delete(self, key: str) -> None: ...
