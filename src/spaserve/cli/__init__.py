"""spaserve CLI: serve a built SPA, check a build, list routes.

Entry point registered as ``spaserve`` in ``pyproject.toml``::

    [project.scripts]
    spaserve = "spaserve.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``spaserve`` command."""
    parser = argparse.ArgumentParser(
        prog="spaserve",
        description="spaserve: static assets and SPA fallback routing for a built frontend.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- spaserve run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start dev or production server")
    run_parser.add_argument(
        "app",
        nargs="?",
        default=None,
        help="Import string (e.g. myapp:app); defaults to an app built from the environment",
    )
    run_parser.add_argument("--dist", default=None, help="Build output directory")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--production",
        action="store_true",
        help="Run in production mode even when APP_ENV is development",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )
    run_parser.add_argument(
        "--strict",
        action="store_true",
        help="Only serve the shell for known client routes",
    )

    # -- spaserve check ---------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Verify the build output")
    check_parser.add_argument("--dist", default=None, help="Build output directory")

    # -- spaserve routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List endpoints and client routes")
    routes_parser.add_argument(
        "app",
        nargs="?",
        default=None,
        help="Import string (e.g. myapp:app); defaults to an app built from the environment",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from spaserve.cli._run import run_server

        run_server(args)
    elif args.command == "check":
        from spaserve.cli._check import run_check

        run_check(args)
    elif args.command == "routes":
        from spaserve.cli._routes import run_routes

        run_routes(args)
