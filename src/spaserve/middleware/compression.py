"""Response compression middleware.

Gzips textual responses (HTML shell, JS/CSS bundles, JSON, SVG) for
clients that accept it. Output is deterministic (no timestamp in the
gzip header), so an unchanged file always compresses to the same bytes.
"""

import gzip
from dataclasses import dataclass

from spaserve.http.request import Request
from spaserve.http.response import Response
from spaserve.middleware.protocol import Next

COMPRESSIBLE_TYPES: tuple[str, ...] = (
    "text/",
    "application/javascript",
    "application/json",
    "application/manifest+json",
    "application/xml",
    "image/svg+xml",
)


@dataclass(frozen=True, slots=True)
class CompressionConfig:
    """Compression settings.

    ``min_size`` is the smallest body, in bytes, worth compressing.
    """

    min_size: int = 1024
    level: int = 6
    content_types: tuple[str, ...] = COMPRESSIBLE_TYPES


def _varies(response: Response, config: CompressionConfig) -> bool:
    """Whether the representation depends on ``Accept-Encoding``.

    A 304 stands in for the 200 it revalidates, so it carries the same
    ``Vary`` even though its body is empty.
    """
    if response.status not in (200, 304) or response.has_header("Content-Encoding"):
        return False
    media_type = response.content_type.split(";", 1)[0].strip().lower()
    return any(media_type.startswith(prefix) for prefix in config.content_types)


class CompressionMiddleware:
    """Gzip eligible responses.

    Adds ``Vary: Accept-Encoding`` to every response of a compressible
    type, small or not, so shared caches keep the encoded and plain
    variants apart. Only 200 bodies of at least ``min_size`` bytes are
    actually compressed.

    Usage::

        app.add_middleware(CompressionMiddleware(CompressionConfig(min_size=512)))
    """

    __slots__ = ("config",)

    def __init__(self, config: CompressionConfig | None = None) -> None:
        self.config = config or CompressionConfig()

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        if not _varies(response, self.config):
            return response

        response = response.with_header("Vary", "Accept-Encoding")
        if response.status != 200 or len(response.body_bytes) < self.config.min_size:
            return response
        if not request.accepts_gzip:
            return response

        compressed = gzip.compress(response.body_bytes, compresslevel=self.config.level, mtime=0)
        return response.with_body(compressed).with_header("Content-Encoding", "gzip")
