"""Application factory for the CRUD server.

This module exposes `create_app(config: Config) -> FastAPI` which performs
all setup (logging, storage composition, endpoint mounting and router
registration). Avoids performing side-effects at import time so tests can
construct isolated apps.

To create an app for production or local runs:

    from crud_lib.main import create_app
    from crud_lib.config import load_config
    app = create_app(load_config())
"""
from typing import Optional

from fastapi import FastAPI

from crud_lib.config import Config
from crud_lib.crud import create_endpoint
from crud_lib.logging_config import configure_logging
from crud_lib.storage import StreamStorage, create_storage


def create_app(config: Config, storage: Optional[StreamStorage] = None) -> FastAPI:
    """Create and return a configured FastAPI application.

    `storage` overrides the backend selected by `config`; all endpoints
    share the one store and are isolated by their prefixes.
    """
    logger = configure_logging(config.log_level)

    store = storage if storage is not None else create_storage(
        backend=config.storage_backend,
        data_dir=config.data_dir,
    )

    app = FastAPI(title="CRUD Server")
    app.state.endpoint_paths = [e.path for e in config.endpoints]

    # Router registration before mounts so /api is not shadowed by a '/' mount
    from crud_lib.server.api import router as server_router
    app.include_router(server_router, prefix='/api')

    for entry in config.endpoints:
        endpoint = create_endpoint(entry.prefix, store)
        app.mount(entry.path, endpoint)
        logger.info("Mounted CRUD endpoint %s (prefix %r)", entry.path, entry.prefix)

    return app
