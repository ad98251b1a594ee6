"""Server health utilities.

Provides a simple `get_health` function returning server status,
start time and uptime in seconds.
"""
from datetime import datetime, timezone
from importlib import metadata
import time
from typing import Iterable

# record process start time at import
_START_TIME = time.time()


def _version() -> str:
    try:
        return metadata.version("crud-server")
    except metadata.PackageNotFoundError:
        return "unknown"


def get_health(endpoints: Iterable[str] = ()) -> dict:
    """Return a dict representing server health.

    Fields:
    - status: 'ok'
    - start_time: ISO 8601 UTC timestamp when the process started
    - uptime_seconds: integer seconds since start
    - version: installed package version or 'unknown'
    - endpoints: mount paths of the CRUD endpoints being served
    """
    now = time.time()
    uptime = int(now - _START_TIME)
    start_dt = datetime.fromtimestamp(_START_TIME, tz=timezone.utc)

    return {
        "status": "ok",
        "start_time": start_dt.isoformat(),
        "uptime_seconds": uptime,
        "version": _version(),
        "endpoints": list(endpoints),
    }
