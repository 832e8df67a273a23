"""Route path patterns shared by the endpoint router and the route table.

A pattern is a ``/``-separated template. Each segment is literal text, a
``{name}`` or ``{name:converter}`` parameter, or a trailing catch-all
(``{name:path}``; ``*`` is shorthand for ``{path:path}``). Empty
segments are ignored on both sides, so ``/turismo/`` and ``/turismo``
are the same path.
"""

import re
from dataclasses import dataclass

from spaserve.errors import ConfigurationError

# Converter name -> regex one captured segment must match in full.
# Captures stay strings; endpoint handlers convert via annotations.
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

# Segment ranks: when two patterns match one path, lower ranks win
# segment by segment.
LITERAL, PARAM, CATCH_ALL = 0, 1, 2


def split_path(path: str) -> tuple[str, ...]:
    """Non-empty segments of *path*."""
    return tuple(part for part in path.split("/") if part)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One segment of a pattern.

    ``text`` is the literal for static segments and the parameter name
    for the others. ``converter`` is ``None`` for static segments.
    """

    text: str
    converter: str | None = None

    @property
    def is_param(self) -> bool:
        return self.converter is not None

    @property
    def rank(self) -> int:
        if self.converter is None:
            return LITERAL
        return CATCH_ALL if self.converter == "path" else PARAM

    def accepts(self, part: str) -> bool:
        """True if one request path segment fits this pattern segment."""
        if self.converter is None:
            return part == self.text
        return re.fullmatch(CONVERTERS[self.converter], part) is not None


def _parse_segment(pattern: str, part: str) -> PathSegment:
    if part.startswith("<") and part.endswith(">"):
        msg = (
            f"Route {pattern!r} uses <param> syntax; "
            "spaserve expects {param} (e.g. /productos/{id})."
        )
        raise ConfigurationError(msg)
    if part == "*":
        return PathSegment("path", "path")
    if not (part.startswith("{") and part.endswith("}")):
        return PathSegment(part)
    name, _, converter = part[1:-1].partition(":")
    converter = converter or "str"
    if converter not in CONVERTERS:
        msg = f"Route {pattern!r} uses unknown converter {converter!r}."
        raise ConfigurationError(msg)
    return PathSegment(name, converter)


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Split a route pattern into segments.

    Examples::

        "/turismo"             -> (PathSegment("turismo"),)
        "/productos/{id:int}"  -> (PathSegment("productos"), PathSegment("id", "int"))
        "/admin/*"             -> (PathSegment("admin"), PathSegment("path", "path"))

    Raises ``ConfigurationError`` for Flask-style ``<param>`` segments,
    unknown converters, and catch-alls that are not the last segment.
    """
    segments = tuple(_parse_segment(pattern, part) for part in split_path(pattern))
    for segment in segments[:-1]:
        if segment.rank == CATCH_ALL:
            msg = f"Route {pattern!r}: a path catch-all must be the last segment."
            raise ConfigurationError(msg)
    return segments


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A parsed pattern, matched against pre-split request paths.

    Usage::

        pattern = compile_pattern("/productos/{id:int}")
        pattern.match(split_path("/productos/7"))    # {"id": "7"}
        pattern.match(split_path("/productos/uno"))  # None
    """

    source: str
    segments: tuple[PathSegment, ...]

    @property
    def is_static(self) -> bool:
        return not any(segment.is_param for segment in self.segments)

    @property
    def specificity(self) -> tuple[int, ...]:
        """Sort key; more specific patterns sort first."""
        return tuple(segment.rank for segment in self.segments)

    def match(self, parts: tuple[str, ...]) -> dict[str, str] | None:
        """Captured parameters if *parts* fit the pattern, else ``None``.

        A catch-all needs at least one remaining segment: ``/admin/*``
        matches ``/admin/places`` but not ``/admin``.
        """
        params: dict[str, str] = {}
        for index, segment in enumerate(self.segments):
            if segment.rank == CATCH_ALL:
                if index >= len(parts):
                    return None
                params[segment.text] = "/".join(parts[index:])
                return params
            if index >= len(parts) or not segment.accepts(parts[index]):
                return None
            if segment.is_param:
                params[segment.text] = parts[index]
        if len(parts) != len(self.segments):
            return None
        return params


def compile_pattern(source: str) -> PathPattern:
    """Parse *source* into a ``PathPattern``; see ``parse_pattern`` for errors."""
    return PathPattern(source, parse_pattern(source))
