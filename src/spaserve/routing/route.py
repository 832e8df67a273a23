"""Endpoint definitions and the result of matching one."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """An endpoint answered by the app itself instead of the fallback.

    ``methods`` is the full set the endpoint accepts; ``App`` adds HEAD
    wherever GET is allowed before the route gets here.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None

    @property
    def label(self) -> str:
        """Handler name, with the route name in parentheses when set."""
        label = getattr(self.handler, "__name__", repr(self.handler))
        return f"{label} ({self.name})" if self.name else label


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """The endpoint for a request and the raw strings captured from its path."""

    route: Route
    path_params: dict[str, str]
