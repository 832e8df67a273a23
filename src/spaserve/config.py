"""Server configuration.

ServerConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from spaserve.errors import ConfigurationError
from spaserve.routes import SITE_ROUTES

ONE_YEAR = 31_536_000

_DEV_ENVIRONMENTS = frozenset({"development", "dev"})
_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(port=8080, dist_dir="build", strict_routes=True)
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "production"
    debug: bool = False

    # Reload (development mode — requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".html", ".css")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Built bundle
    dist_dir: str | Path = "dist"
    index: str = "index.html"
    assets_prefix: str = "/assets"

    # Cache policy
    asset_cache_control: str = f"public, max-age={ONE_YEAR}, immutable"
    static_cache_control: str = "public, max-age=3600"
    shell_cache_control: str = "no-cache"

    # Route table
    routes: tuple[str, ...] = SITE_ROUTES
    strict_routes: bool = False  # Only listed routes get the shell

    # Reserved endpoints
    health_path: str = "/health"
    introspection: bool = False  # Always on when debug=True
    introspection_path: str = "/__spaserve/assets"

    # Security headers
    security_headers: bool = True
    content_security_policy: str | None = None
    strict_transport_security: str | None = None

    # Compression
    compression: bool = True
    compression_min_size: int = 1024

    # Production settings (pounce)
    workers: int = 0  # 0 = auto-detect from CPU count
    lifecycle_logging: bool = True
    log_format: str = "json"
    log_level: str = "info"
    max_connections: int = 1000
    backlog: int = 2048
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    # TLS (optional)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    @property
    def introspection_enabled(self) -> bool:
        return self.debug or self.introspection

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "ServerConfig":
        """Build a config from environment variables.

        Reads ``PORT``, ``HOST``, ``APP_ENV`` (falling back to ``NODE_ENV``),
        ``DIST_DIR``, ``STRICT_ROUTES``, ``WORKERS`` and ``LOG_LEVEL``.
        Keyword *overrides* win over the environment.

        Raises ``ConfigurationError`` for values that cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if "PORT" in env:
            values["port"] = _parse_int("PORT", env["PORT"])
        if "HOST" in env:
            values["host"] = env["HOST"]
        environment = env.get("APP_ENV") or env.get("NODE_ENV")
        if environment:
            values["environment"] = environment.strip().lower()
            values["debug"] = values["environment"] in _DEV_ENVIRONMENTS
        if "DIST_DIR" in env:
            values["dist_dir"] = env["DIST_DIR"]
        if "STRICT_ROUTES" in env:
            values["strict_routes"] = _parse_bool("STRICT_ROUTES", env["STRICT_ROUTES"])
        if "WORKERS" in env:
            values["workers"] = _parse_int("WORKERS", env["WORKERS"])
        if "LOG_LEVEL" in env:
            values["log_level"] = env["LOG_LEVEL"].lower()

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            msg = f"Unknown config field(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        values.update(overrides)
        return cls(**values)


def _parse_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from None
    if value < 0:
        msg = f"{name} must not be negative, got {value}"
        raise ConfigurationError(msg)
    return value


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    msg = f"{name} must be a boolean (true/false), got {raw!r}"
    raise ConfigurationError(msg)
