"""Storage key namespacing for CRUD endpoints.

Every object an endpoint touches lives under `<prefix>::<id>` so several
endpoints can share one store without seeing each other's objects.
"""
import uuid

SEPARATOR = "::"


def namespace_prefix(prefix: str) -> str:
    """Return the key prefix shared by all objects of `prefix`."""
    return f"{prefix}{SEPARATOR}"


def storage_key(prefix: str, object_id: str) -> str:
    return f"{namespace_prefix(prefix)}{object_id}"


def strip_prefix(prefix: str, key: str) -> str:
    """Turn a full storage key back into the bare object id.

    Raises ValueError for keys outside the namespace.
    """
    ns = namespace_prefix(prefix)
    if not key.startswith(ns):
        raise ValueError(f"key {key!r} is not in namespace {prefix!r}")
    return key[len(ns):]


def new_object_id() -> str:
    return str(uuid.uuid4())
