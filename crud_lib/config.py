"""Server configuration for the CRUD server.

Configuration is a human-editable YAML file loaded into a `Config`
dataclass. A missing file yields the defaults; a malformed one raises
`ValueError` so the server refuses to start with a half-read config.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import yaml

DEFAULT_CONFIG_PATH = Path('data/config/server_config.yml')
CONFIG_ENV = 'CRUD_CONFIG'


@dataclass(frozen=True)
class EndpointConfig:
    path: str
    prefix: str


def _default_endpoints() -> List[EndpointConfig]:
    return [EndpointConfig(path='/objects', prefix='objects')]


@dataclass
class Config:
    log_level: str = 'WARNING'
    storage_backend: str = 'file'
    data_dir: str = 'data/objects'
    host: str = '0.0.0.0'
    port: int = 8000
    endpoints: List[EndpointConfig] = field(default_factory=_default_endpoints)


def _parse_endpoint(entry: Any) -> EndpointConfig:
    if not isinstance(entry, dict):
        raise ValueError("invalid config format: endpoint entries must be mappings")
    path = entry.get('path')
    prefix = entry.get('prefix')
    if not isinstance(path, str) or not path.startswith('/'):
        raise ValueError(f"invalid endpoint path: {path!r}")
    if not isinstance(prefix, str) or not prefix or '::' in prefix:
        raise ValueError(f"invalid endpoint prefix: {prefix!r}")
    return EndpointConfig(path=path, prefix=prefix)


def _parse_port(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"invalid port: {value!r}")
    try:
        port = int(value)
    except ValueError:
        raise ValueError(f"invalid port: {value!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"invalid port: {value!r}")
    return port


def parse_config(data: Any) -> Config:
    """Build a Config from an already parsed YAML document."""
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ValueError("invalid config format: expected mapping")
    defaults = Config()
    endpoints = data.get('endpoints')
    if endpoints is not None and not isinstance(endpoints, list):
        raise ValueError("invalid config format: endpoints must be a list")
    return Config(
        log_level=str(data.get('log_level', defaults.log_level)),
        storage_backend=str(data.get('storage_backend', defaults.storage_backend)),
        data_dir=str(data.get('data_dir', defaults.data_dir)),
        host=str(data.get('host', defaults.host)),
        port=_parse_port(data.get('port', defaults.port)),
        endpoints=[_parse_endpoint(e) for e in endpoints] if endpoints is not None else defaults.endpoints,
    )


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load configuration from `path`, `$CRUD_CONFIG` or the default location."""
    cfg_path = Path(path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH)
    if not cfg_path.exists():
        return Config()
    with cfg_path.open('r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError("invalid config format: parse error") from e
    return parse_config(data)


def dump_config(cfg: Config) -> str:
    """Render `cfg` as YAML, e.g. to print a template for operators."""
    data = {
        'log_level': cfg.log_level,
        'storage_backend': cfg.storage_backend,
        'data_dir': cfg.data_dir,
        'host': cfg.host,
        'port': cfg.port,
        'endpoints': [{'path': e.path, 'prefix': e.prefix} for e in cfg.endpoints],
    }
    return yaml.safe_dump(data, sort_keys=False)
