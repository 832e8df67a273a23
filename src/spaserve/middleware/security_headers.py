"""Security headers middleware — nosniff, frame options, referrer policy.

Applies a helmet-style baseline: MIME sniffing off, framing limited to
the same origin, no referrer leakage. Errors raised through the chain
(404, 400, 500) are rendered by the request handler, which applies the
same baseline through ``apply_security_headers``. A
Content-Security-Policy is opt-in because the shell loads third-party
scripts (analytics, maps) that a default policy would block.
"""

from dataclasses import dataclass

from spaserve.http.request import Request
from spaserve.http.response import Response
from spaserve.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class SecurityHeadersConfig:
    """Configuration for security headers.

    All values are applied as-is. Use standard header values;
    ``None`` leaves the header out.
    """

    x_frame_options: str = "SAMEORIGIN"
    x_content_type_options: str = "nosniff"
    referrer_policy: str = "no-referrer"
    cross_origin_opener_policy: str | None = "same-origin"
    content_security_policy: str | None = None
    strict_transport_security: str | None = None


def apply_security_headers(response: Response, config: SecurityHeadersConfig) -> Response:
    """Add security headers, leaving any the handler already set."""
    candidates = (
        ("X-Content-Type-Options", config.x_content_type_options),
        ("X-Frame-Options", config.x_frame_options),
        ("Referrer-Policy", config.referrer_policy),
        ("Cross-Origin-Opener-Policy", config.cross_origin_opener_policy),
        ("Content-Security-Policy", config.content_security_policy),
        ("Strict-Transport-Security", config.strict_transport_security),
    )
    secured = response
    for name, value in candidates:
        if value and not response.has_header(name):
            secured = secured.with_header(name, value)
    return secured


class SecurityHeadersMiddleware:
    """Add security headers to every response.

    Usage::

        from spaserve.middleware import SecurityHeadersMiddleware

        app.add_middleware(SecurityHeadersMiddleware())

    Or with custom config::

        from spaserve.middleware.security_headers import (
            SecurityHeadersConfig,
            SecurityHeadersMiddleware,
        )

        app.add_middleware(SecurityHeadersMiddleware(SecurityHeadersConfig(
            content_security_policy="default-src 'self'",
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: SecurityHeadersConfig | None = None) -> None:
        self.config = config or SecurityHeadersConfig()

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        return apply_security_headers(response, self.config)
