"""Reserved operational endpoints: health check and asset-store introspection.

Both are registered on the endpoint router before the SPA fallback sees
the request, so the shell rule can never shadow them. The health check
never touches the asset store.
"""

import sys
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from spaserve.config import ServerConfig
from spaserve.http.response import Response, json_response
from spaserve.routing.table import RouteTable
from spaserve.store import AssetStore

# Cap the introspection listing; a build has a few hundred files at most.
MAX_LISTED_FILES = 1000


def memory_usage() -> dict[str, int]:
    """Peak resident set size of this process, in KiB, where the platform reports it."""
    try:
        import resource
    except ImportError:
        return {}
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux reports KiB.
    if sys.platform == "darwin":
        peak //= 1024
    return {"max_rss_kb": peak}


def health_payload(environment: str, started: float) -> dict[str, Any]:
    """``{status, timestamp, uptime, memory, env}`` for ``GET /health``."""
    return {
        "status": "OK",
        "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "uptime": round(time.monotonic() - started, 3),
        "memory": memory_usage(),
        "env": environment,
    }


def make_health_endpoint(config: ServerConfig) -> Callable[[], Response]:
    started = time.monotonic()

    def health() -> Response:
        return json_response(health_payload(config.environment, started)).with_header(
            "Cache-Control", "no-store"
        )

    return health


def introspection_payload(
    store: AssetStore,
    routes: RouteTable,
    config: ServerConfig,
) -> dict[str, Any]:
    """What the server would serve: root, shell, policy, and the file listing."""
    files: list[dict[str, Any]] = []
    truncated = False
    for info in store.walk():
        if len(files) >= MAX_LISTED_FILES:
            truncated = True
            break
        files.append({"path": info.path, "size": info.size, "content_type": info.content_type})

    return {
        "root": str(store.root),
        "root_exists": store.root.is_dir(),
        "index": store.index,
        "index_exists": (store.root / store.index).is_file(),
        "assets_prefix": config.assets_prefix,
        "strict_routes": config.strict_routes,
        "routes": list(routes.patterns),
        "files": files,
        "truncated": truncated,
    }


def make_introspection_endpoint(
    store: AssetStore,
    routes: RouteTable,
    config: ServerConfig,
) -> Callable[[], Response]:
    def introspect() -> Response:
        return json_response(introspection_payload(store, routes, config)).with_header(
            "Cache-Control", "no-store"
        )

    return introspect
