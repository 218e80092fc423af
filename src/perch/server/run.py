"""Serve a composed dispatch table with pounce.

Pounce's ``run()`` takes an import string, but by the time we serve,
perch already holds the live ServeMux, so ``pounce.Server`` is used
directly with the ASGI callable.
"""

import logging

from perch._internal.asgi import ASGIApp
from perch.config import ServerConfig

logger = logging.getLogger("perch.server")


def run_server(app: ASGIApp, config: ServerConfig) -> None:
    """Start a pounce server for *app* and block until it stops.

    Args:
        app: ASGI callable, normally ``asgi_app()`` around a composed ServeMux.
        config: Bind address, worker count, log level, and optional TLS files.
    """
    from pounce.config import ServerConfig as PounceConfig
    from pounce.server import Server

    pounce_config = PounceConfig(
        host=config.host,
        port=config.port,
        workers=config.workers,
        reload=False,
        log_level=config.log_level,
        ssl_certfile=config.ssl_certfile,
        ssl_keyfile=config.ssl_keyfile,
    )
    scheme = "https" if config.tls else "http"
    logger.info("Serving on %s://%s:%d", scheme, config.host, config.port)
    Server(pounce_config, app).run()
