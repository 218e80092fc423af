"""``perch run`` — compose a route tree and serve it.

This is the point where a configuration error stops the program:
builders raise, and the command turns the error into a message and
exit status 1 before any socket is opened.
"""

import argparse
import dataclasses
import logging
import sys

from perch.cli._resolve import compose, load_target
from perch.config import ServerConfig
from perch.errors import ConfigurationError

logger = logging.getLogger("perch.cli")


def build_config(args: argparse.Namespace) -> ServerConfig:
    """Apply CLI overrides to the default ServerConfig."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "workers": args.workers,
        "log_level": args.log_level,
        "ssl_certfile": args.certfile,
        "ssl_keyfile": args.keyfile,
    }
    config = dataclasses.replace(
        ServerConfig(),
        **{name: value for name, value in overrides.items() if value is not None},
    )
    if args.debug:
        config = dataclasses.replace(config, debug=True, log_level="debug")
    return config


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.target``, compose it, and start serving."""
    config = build_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        mux = compose(load_target(args.target))
    except ConfigurationError as exc:
        logger.error("Invalid route configuration: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from perch.server.handler import asgi_app
    from perch.server.run import run_server as serve

    serve(asgi_app(mux, debug=config.debug), config)
