"""spaserve: static assets and SPA fallback routing for a built frontend.

Serves the hashed assets under ``/assets`` with long-lived caching, other
files from the build directory, and the application shell for every
client-side route, so deep links and refreshes reach the browser router.

Basic usage::

    from spaserve import App, ServerConfig

    app = App(ServerConfig(dist_dir="dist"))
    app.run()

Or from the command line::

    spaserve run --dist dist
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AssetStore",
    "BadRequest",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "PathTraversal",
    "Request",
    "Response",
    "RouteTable",
    "SITE_ROUTES",
    "SPAFallback",
    "ServerConfig",
    "SpaServeError",
    "classify",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import spaserve`` fast while providing a clean top-level API.
    """
    if name in ("App", "create_app"):
        from spaserve import app as _app

        return getattr(_app, name)

    if name == "ServerConfig":
        from spaserve.config import ServerConfig

        return ServerConfig

    if name == "Request":
        from spaserve.http.request import Request

        return Request

    if name == "Response":
        from spaserve.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from spaserve.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "SPAFallback":
        from spaserve.middleware.fallback import SPAFallback

        return SPAFallback

    if name == "AssetStore":
        from spaserve.store import AssetStore

        return AssetStore

    if name == "RouteTable":
        from spaserve.routing.table import RouteTable

        return RouteTable

    if name == "classify":
        from spaserve.routing.classify import classify

        return classify

    if name == "SITE_ROUTES":
        from spaserve.routes import SITE_ROUTES

        return SITE_ROUTES

    if name in (
        "BadRequest",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "PathTraversal",
        "SpaServeError",
    ):
        from spaserve import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
