"""``spaserve routes``: list reserved endpoints and client routes.

Prints the endpoint table (method, path, handler) followed by the
client-side route patterns that receive the application shell.
"""

import argparse
import sys

from spaserve.cli._resolve import load_app
from spaserve.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """List endpoints and shell routes for a spaserve app.

    Resolves the app, freezes it, and prints a table of METHOD, PATH,
    and handler name, then the shell routes and the routing mode.
    """
    try:
        app = load_app(args.app)
        router = app.router
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    # Build rows: (methods_str, path, handler_name)
    rows: list[tuple[str, str, str]] = []
    for route in router.routes:
        methods_str = ", ".join(sorted(route.methods))
        rows.append((methods_str, route.path, route.label))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, path, handler_name in rows:
        print(fmt.format(methods_str, path, handler_name))

    mode = "strict" if app.config.strict_routes else "permissive"
    print()
    print(f"Client routes ({mode}):")
    for pattern in app.route_table:
        print(f"  {pattern}")
