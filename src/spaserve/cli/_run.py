"""``spaserve run``: development or production server command.

Resolves the app (an import string, or the default app configured from
the environment) and starts either the development server (single
worker, auto-reload) or the production server (multi-worker).
"""

import argparse
import sys
from typing import Any

from spaserve.cli._resolve import load_app
from spaserve.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Start the spaserve server (dev or production mode).

    ``--dist`` and ``--strict`` configure the environment-built app.
    A missing build directory is reported before any socket is opened.
    """
    overrides: dict[str, Any] = {}
    if args.dist is not None:
        overrides["dist_dir"] = args.dist
    if args.strict:
        overrides["strict_routes"] = True

    try:
        app = load_app(args.app, **overrides)
        app._ensure_frozen()
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = args.host or app.config.host
    port = args.port or app.config.port

    production_mode = args.production or not app.config.debug

    if production_mode:
        from spaserve.server.launch import run_production_server

        run_production_server(
            app,
            host=host,
            port=port,
            workers=args.workers if args.workers is not None else app.config.workers,
        )
    else:
        from spaserve.server.launch import run_dev_server

        run_dev_server(
            app,
            host,
            port,
            reload=app.config.debug,
            reload_include=app.config.reload_include,
            reload_dirs=app.config.reload_dirs,
            app_path=args.app,
        )
