"""JSON object decoding and shallow merge used by PATCH requests."""
from __future__ import annotations
import json
import math
from typing import Any, Dict

from .errors import DecodeError

JSONObject = Dict[str, Any]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} out of range")
    return value


def decode_object(raw: bytes, status_code: int) -> JSONObject:
    """Decode `raw` as a JSON object.

    Anything that is not strict JSON (NaN and Infinity included), nests too
    deeply to parse, or is valid JSON that is not an object, raises
    DecodeError carrying `status_code`.
    """
    try:
        value = json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_float)
    except RecursionError as e:
        raise DecodeError("JSON nested too deeply", status_code=status_code) from e
    except ValueError as e:
        raise DecodeError(str(e), status_code=status_code) from e
    if not isinstance(value, dict):
        raise DecodeError(
            f"expected a JSON object, got {type(value).__name__}",
            status_code=status_code,
        )
    return value


def shallow_merge(base: JSONObject, patch: JSONObject) -> JSONObject:
    """Return a new object where the top-level keys of `patch` replace or
    extend those of `base`. Nested values are replaced, never merged.
    """
    merged = dict(base)
    merged.update(patch)
    return merged


def encode_object(obj: JSONObject) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")
