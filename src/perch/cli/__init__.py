"""Perch CLI — inspect and serve composed route trees.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — compose HTTP endpoints, groups, and middleware into one dispatch table.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Print the composed dispatch table")
    routes_parser.add_argument(
        "target",
        help="Import string (e.g. myapp:router)",
    )

    # -- perch run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Compose and serve a route tree")
    run_parser.add_argument(
        "target",
        help="Import string (e.g. myapp:router)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--workers", type=int, default=None, help="Worker count")
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Logging level",
    )
    run_parser.add_argument("--certfile", default=None, help="TLS certificate file")
    run_parser.add_argument("--keyfile", default=None, help="TLS private key file")
    run_parser.add_argument("--debug", action="store_true", help="Debug logging and tracebacks")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from perch.cli._run import run_server

        run_server(args)
