"""``perch routes`` — print the composed dispatch table.

Resolves an import string to a route tree, flattens it, and prints one
row per pattern with the endpoint it is bound to.
"""

import argparse
import sys

from perch.cli._resolve import flatten, load_target
from perch.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """List the patterns a route tree composes to.

    Configuration errors in the tree are reported on stderr with exit
    status 1, the same as at server startup.
    """
    try:
        target = load_target(args.target)
        routes = flatten(target)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if routes is None:
        rows = [(entry.pattern, _handler_name(entry.handler)) for entry in target.entries()]
    else:
        rows = [(route.pattern, route.name or _handler_name(route.handler)) for route in routes]

    if not rows:
        print("No routes registered.")
        return

    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    fmt = f"{{:<{max_pattern}}}  {{}}"
    print(fmt.format("PATTERN", "HANDLER"))
    sep_len = max_pattern + 2 + max(len(r[1]) for r in rows)
    print("-" * min(sep_len, 80))
    for pattern, handler_name in rows:
        print(fmt.format(pattern, handler_name))


def _handler_name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__
