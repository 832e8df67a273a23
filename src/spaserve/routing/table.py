"""Immutable table of application path patterns.

A ``RouteTable`` answers one question: does this path belong to a known
client route? Literal patterns are looked up directly; parameterized
ones are tried most specific first. Tables are built once and never
change, so concurrent requests share them without locking.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from spaserve.routing.pattern import PathPattern, compile_pattern, split_path


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """The pattern a path matched and the segments it captured."""

    pattern: str
    path_params: dict[str, str]


class RouteTable:
    """Ordered, immutable set of route patterns.

    Usage::

        table = RouteTable(["/", "/turismo", "/productos/{id}", "/admin/*"])
        "/productos/7" in table                     # True
        table.match("/admin/places/3").path_params  # {"path": "places/3"}
    """

    __slots__ = ("_dynamic", "_literal", "_patterns")

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        seen: dict[str, None] = {}
        literal: dict[tuple[str, ...], str] = {}
        dynamic: list[PathPattern] = []
        for source in patterns:
            if source in seen:
                continue
            seen[source] = None
            pattern = compile_pattern(source)
            if pattern.is_static:
                key = tuple(segment.text for segment in pattern.segments)
                literal.setdefault(key, source)
            else:
                dynamic.append(pattern)
        self._patterns = tuple(seen)
        self._literal = literal
        self._dynamic = tuple(sorted(dynamic, key=lambda p: p.specificity))

    @property
    def patterns(self) -> tuple[str, ...]:
        """Patterns in declaration order, duplicates removed."""
        return self._patterns

    def match(self, path: str) -> PatternMatch | None:
        """The matching pattern and captured params, or ``None``."""
        parts = split_path(path)
        source = self._literal.get(parts)
        if source is not None:
            return PatternMatch(source, {})
        for pattern in self._dynamic:
            params = pattern.match(parts)
            if params is not None:
                return PatternMatch(pattern.source, params)
        return None

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.match(path) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"RouteTable({list(self._patterns)!r})"
