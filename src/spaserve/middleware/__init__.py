"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    CompressionMiddleware -- gzip for compressible responses
    SecurityHeadersMiddleware -- nosniff, frame options, referrer policy, optional CSP/HSTS
    SPAFallback -- static assets, the application shell, and real 404s
"""

from spaserve.middleware.compression import CompressionConfig, CompressionMiddleware
from spaserve.middleware.fallback import SPAFallback
from spaserve.middleware.protocol import Middleware, Next
from spaserve.middleware.security_headers import (
    SecurityHeadersConfig,
    SecurityHeadersMiddleware,
)

__all__ = [
    "CompressionConfig",
    "CompressionMiddleware",
    "Middleware",
    "Next",
    "SPAFallback",
    "SecurityHeadersConfig",
    "SecurityHeadersMiddleware",
]
