"""``spaserve check``: verify the build output before deploying.

Prints every file the server would serve with its size. Exits with
code 1 when the build directory or the shell document is missing,
after listing what is there instead.
"""

import argparse
import sys
from pathlib import Path

from spaserve.config import ServerConfig
from spaserve.errors import ConfigurationError
from spaserve.store import AssetStore


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size / (1024 * 1024):.1f} MiB"


def _list_directory(directory: Path) -> None:
    print(f"Contents of {directory}:", file=sys.stderr)
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        print(f"  (cannot list: {exc.strerror})", file=sys.stderr)
        return
    for entry in entries:
        suffix = "/" if entry.is_dir() else ""
        print(f"  - {entry.name}{suffix}", file=sys.stderr)


def run_check(args: argparse.Namespace) -> None:
    """Validate the build directory and list its contents."""
    try:
        config = ServerConfig.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    dist = args.dist if args.dist is not None else config.dist_dir
    store = AssetStore(dist, index=config.index)
    try:
        store.validate()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        _list_directory(store.root if store.root.is_dir() else store.root.parent)
        print("Run the frontend build first.", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"Build directory: {store.root}")
    print(f"Shell document:  {store.index}")

    files = list(store.walk())
    total = sum(info.size for info in files)
    width = max((len(info.path) for info in files), default=4)
    for info in files:
        print(f"  {info.path:<{width}}  {_format_size(info.size):>10}")
    print(f"{len(files)} file(s), {_format_size(total)} total")
