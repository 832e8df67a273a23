"""Endpoint router for the routes the app answers itself.

Holds the health check, the debug introspection endpoint, and every
``@app.route`` handler. Routes sharing a pattern are grouped so a known
path with the wrong method is a 405 rather than a 404. Patterns are
tried most specific first: a literal segment beats a parameter, and a
parameter beats a catch-all.
"""

from dataclasses import dataclass

from spaserve.errors import MethodNotAllowed, NotFound
from spaserve.routing.pattern import PathPattern, PathSegment, compile_pattern, split_path
from spaserve.routing.route import Route, RouteMatch


@dataclass(slots=True)
class _Endpoint:
    pattern: PathPattern
    by_method: dict[str, Route]


class Router:
    """Method-aware endpoint lookup, compiled once at freeze.

    Usage::

        router = Router()
        router.add(Route("/health", health, frozenset({"GET", "HEAD"})))
        router.add(Route("/api/contact", contact, frozenset({"POST"})))
        router.compile()
        match = router.match("GET", "/health")
    """

    __slots__ = ("_endpoints", "_ordered", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._endpoints: dict[tuple[PathSegment, ...], _Endpoint] = {}
        self._ordered: tuple[_Endpoint, ...] | None = None

    def add(self, route: Route) -> None:
        """Register *route*. Only allowed before ``compile()``."""
        if self._ordered is not None:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        pattern = compile_pattern(route.path)
        endpoint = self._endpoints.setdefault(pattern.segments, _Endpoint(pattern, {}))
        for method in route.methods:
            endpoint.by_method[method] = route
        self._routes.append(route)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    @property
    def compiled(self) -> bool:
        return self._ordered is not None

    def compile(self) -> None:
        """Fix the lookup order. No more routes can be added."""
        if self._ordered is None:
            # sorted() is stable: equally specific patterns keep registration order
            endpoints = sorted(self._endpoints.values(), key=lambda e: e.pattern.specificity)
            self._ordered = tuple(endpoints)

    def match(self, method: str, path: str) -> RouteMatch:
        """The route for *method* and *path*.

        Raises ``NotFound`` if no pattern matches the path and
        ``MethodNotAllowed`` if one does but not for this method.
        """
        if self._ordered is None:
            msg = "Router must be compiled before matching."
            raise RuntimeError(msg)
        parts = split_path(path)
        for endpoint in self._ordered:
            params = endpoint.pattern.match(parts)
            if params is None:
                continue
            route = endpoint.by_method.get(method)
            if route is None:
                raise MethodNotAllowed(frozenset(endpoint.by_method))
            return RouteMatch(route=route, path_params=params)
        raise NotFound(f"No route matches {method} {path!r}")
