"""Request classification — static asset, application shell, or 404.

``classify()`` is the whole SPA-fallback policy in one pure function.
Given a method and path it returns exactly one classification; the
middleware turns that into a response. Precedence, first match wins:

1. malformed path (``..``, NUL, backslash)  -> ``Rejected``
2. not GET/HEAD                             -> ``PassThrough("method")``
3. reserved endpoint (health, API, debug)   -> ``PassThrough("reserved")``
4. under the assets prefix                  -> ``ServeAsset`` (immutable) or ``Missing``
5. last segment has an extension            -> shell if routed, else ``ServeAsset`` or ``Missing``
6. anything else                            -> ``ServeShell``
   (strict mode: only for paths in the route table, else ``Missing``)

Paths under the assets prefix and paths with an extension never get the
shell: a missing bundle or favicon must surface as a 404, not as HTML
the browser tries to execute.
"""

import logging
from dataclasses import dataclass
from typing import TypeAlias

from spaserve.config import ServerConfig
from spaserve.errors import AssetStoreError, PathTraversal
from spaserve.routing.table import RouteTable
from spaserve.store import AssetStore

security_logger = logging.getLogger("spaserve.security")

CONTENT_METHODS = frozenset({"GET", "HEAD"})


@dataclass(frozen=True, slots=True)
class FallbackPolicy:
    """Everything ``classify()`` needs besides the store and tables."""

    assets_prefix: str = "/assets"
    index: str = "index.html"
    asset_cache_control: str = "public, max-age=31536000, immutable"
    static_cache_control: str = "public, max-age=3600"
    shell_cache_control: str = "no-cache"
    strict: bool = False

    @classmethod
    def from_config(cls, config: ServerConfig) -> "FallbackPolicy":
        return cls(
            assets_prefix=normalize_prefix(config.assets_prefix),
            index=config.index,
            asset_cache_control=config.asset_cache_control,
            static_cache_control=config.static_cache_control,
            shell_cache_control=config.shell_cache_control,
            strict=config.strict_routes,
        )


# -- Classification results --


@dataclass(frozen=True, slots=True)
class PassThrough:
    """Not a content request for the fallback; hand to the endpoint router."""

    reason: str


@dataclass(frozen=True, slots=True)
class ServeAsset:
    """Serve the store file at *path* (relative) with *cache_control*."""

    path: str
    cache_control: str


@dataclass(frozen=True, slots=True)
class ServeShell:
    """Serve the application shell document."""

    cache_control: str


@dataclass(frozen=True, slots=True)
class Missing:
    """Nothing to serve: 404."""

    reason: str


@dataclass(frozen=True, slots=True)
class Rejected:
    """Malformed or escaping path: 400."""

    reason: str


@dataclass(frozen=True, slots=True)
class Failed:
    """The store could not be read: 500."""

    error: AssetStoreError


Classification: TypeAlias = PassThrough | ServeAsset | ServeShell | Missing | Rejected | Failed


def normalize_prefix(prefix: str) -> str:
    """``"assets/"`` -> ``"/assets"``; the root prefix normalizes to ``""``."""
    stripped = "/" + prefix.strip("/")
    return stripped if stripped != "/" else ""


def has_extension(path: str) -> bool:
    """True if the last path segment contains a dot (``/favicon.ico``)."""
    last = path.rstrip("/").rsplit("/", 1)[-1]
    return "." in last


def malformed_reason(path: str) -> str | None:
    """Why *path* must be rejected before any lookup, or ``None``."""
    if "\x00" in path:
        return "NUL byte in path"
    if "\\" in path:
        return "backslash in path"
    if any(part in (".", "..") for part in path.split("/")):
        return "dot segment in path"
    return None


def classify(
    method: str,
    path: str,
    *,
    routes: RouteTable,
    reserved: RouteTable,
    store: AssetStore,
    policy: FallbackPolicy,
) -> Classification:
    """Decide how to answer *method* *path*.

    Deterministic for a given store content; the only side effects are
    read-only file-system checks and a security log line on rejection.
    """
    reason = malformed_reason(path)
    if reason is not None:
        security_logger.warning("Rejected %s %r: %s", method, path, reason)
        return Rejected(reason)

    if method not in CONTENT_METHODS:
        return PassThrough("method")

    if path in reserved:
        return PassThrough("reserved")

    try:
        return _classify_content(path, routes=routes, store=store, policy=policy)
    except PathTraversal as exc:
        security_logger.warning("Rejected %s %r: %s", method, path, exc)
        return Rejected(str(exc))
    except AssetStoreError as exc:
        return Failed(exc)


def _classify_content(
    path: str,
    *,
    routes: RouteTable,
    store: AssetStore,
    policy: FallbackPolicy,
) -> Classification:
    prefix = policy.assets_prefix

    # Hashed bundle output: the file or a real 404, never the shell.
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        relative = path.lstrip("/")
        if path.endswith("/") or not store.exists(relative):
            return Missing(f"no asset at {path!r}")
        return ServeAsset(relative, policy.asset_cache_control)

    if has_extension(path):
        if path in routes:
            return ServeShell(policy.shell_cache_control)
        relative = path.lstrip("/")
        if relative == policy.index:
            return ServeShell(policy.shell_cache_control)
        if path.endswith("/") or not store.exists(relative):
            return Missing(f"no file at {path!r}")
        return ServeAsset(relative, policy.static_cache_control)

    # Navigational route: the client router owns final matching.
    if policy.strict and path not in routes:
        return Missing(f"{path!r} is not a known route")
    return ServeShell(policy.shell_cache_control)
