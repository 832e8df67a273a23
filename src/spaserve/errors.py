"""spaserve exception hierarchy.

Shared across the asset store, classifier, middleware, and handler so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class SpaServeError(Exception):
    """Base for all spaserve-specific errors."""


class ConfigurationError(SpaServeError):
    """Raised when server configuration is invalid.

    Typically raised during ``App._freeze()`` at startup, e.g. when the
    build directory or the shell document is missing.
    """


class PathTraversal(SpaServeError):  # noqa: N818 — names the attack, not a failure mode
    """A requested path resolved outside the asset store root."""

    def __init__(self, relative: str) -> None:
        super().__init__(f"Path escapes store root: {relative!r}")
        self.relative = relative


class AssetStoreError(SpaServeError):
    """The asset store could not be read (permissions, I/O)."""

    def __init__(self, relative: str, cause: OSError) -> None:
        super().__init__(f"Cannot read {relative!r}: {cause}")
        self.relative = relative
        self.cause = cause


@dataclass(frozen=True, slots=True)
class HTTPError(SpaServeError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing to serve for the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — malformed request path."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — endpoint exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods and embeds
    the allowed methods in the detail string for developer visibility.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
