"""Production entry point for the CRUD server.

    python3 crud.py [--config path] [--host addr] [--port n] [--log-level LEVEL]
    python3 crud.py --print-template
"""
from __future__ import annotations
import argparse
import sys
from typing import Iterable, Optional

from crud_lib.config import dump_config, load_config


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Serve CRUD endpoints over a key-value store")
    p.add_argument("--config", help="Path to the YAML server configuration")
    p.add_argument("--host", help="Bind address (overrides config)")
    p.add_argument("--port", type=int, help="Bind port (overrides config)")
    p.add_argument("--log-level", help="Log level name (overrides config)")
    p.add_argument("--print-template", action="store_true", help="Print the default YAML template to stdout and exit")
    return p


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    try:
        cfg = load_config(args.config)
    except ValueError as e:
        print("Failed to load config:", e, file=sys.stderr)
        return 1

    if args.print_template:
        sys.stdout.write(dump_config(cfg))
        return 0

    if args.log_level:
        cfg.log_level = args.log_level
    host = args.host or cfg.host
    port = args.port or cfg.port

    import uvicorn
    from crud_lib.main import create_app

    app = create_app(cfg)
    uvicorn.run(app, host=host, port=port, log_level=cfg.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
