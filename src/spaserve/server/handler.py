"""ASGI request handling: scope in, one response out.

The only component that turns raw ASGI requests into ``Request``
objects. Each request runs through the middleware chain, whose innermost
layer is the endpoint router; the SPA fallback sits at the end of the
chain and only hands a request to the router when it passes it through.

This is the outermost error boundary. An ``HTTPError`` or any other
exception becomes an error response here, outside the middleware chain,
so the configured security headers are added to it directly. Whatever
goes wrong, a response is sent and the process keeps serving.
"""

import inspect
from collections.abc import Callable
from functools import partial
from typing import Any

from spaserve._internal.asgi import Receive, Scope, Send
from spaserve._internal.invoke import invoke
from spaserve.errors import HTTPError
from spaserve.http.request import Request
from spaserve.http.response import Response
from spaserve.middleware.protocol import Next
from spaserve.middleware.security_headers import SecurityHeadersConfig, apply_security_headers
from spaserve.routing.router import Router
from spaserve.server.errors import handle_http_error, handle_internal_error
from spaserve.server.negotiation import negotiate
from spaserve.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
    security: SecurityHeadersConfig | None = None,
) -> None:
    """Answer one HTTP request."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    pending = None
    try:
        response = await _chain(middleware, partial(_dispatch, router))(request)
    except HTTPError as exc:
        pending = handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        pending = handle_internal_error(exc, request, error_handlers, debug)

    if pending is not None:
        response = await _recover(pending, request, debug)
        if security is not None:
            response = apply_security_headers(response, security)

    await send_response(response, send, head=request.is_head)


def _chain(middleware: tuple[Callable[..., Any], ...], innermost: Next) -> Next:
    """Compose *middleware* around *innermost*; the first entry runs first."""
    handler = innermost
    for layer in reversed(middleware):
        handler = _link(layer, handler)
    return handler


def _link(layer: Callable[..., Any], next: Next) -> Next:
    async def call(request: Request) -> Response:
        return await layer(request, next)

    return call


async def _recover(pending: Any, request: Request, debug: bool) -> Response:
    """Await an error response; a failing user error handler falls back to the default 500."""
    try:
        return await pending
    except Exception as exc:
        return await handle_internal_error(exc, request, {}, debug)


async def _dispatch(router: Router, request: Request) -> Response:
    """Run the endpoint registered for the request's method and path."""
    match = router.match(request.method, request.path)
    request = request.with_path_params(match.path_params)
    handler = match.route.handler
    result = await invoke(handler, **_endpoint_kwargs(handler, request))
    return negotiate(result)


def _endpoint_kwargs(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Arguments for *handler*, chosen by parameter name and annotation.

    A parameter named ``request`` or annotated ``Request`` gets the
    request. A parameter named after a captured path segment gets that
    segment, passed through its annotation (``int``, ``float``) when the
    conversion succeeds. Anything else keeps its default.
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
            continue
        if name not in request.path_params:
            continue
        raw = request.path_params[name]
        convert = param.annotation
        if convert is inspect.Parameter.empty:
            kwargs[name] = raw
            continue
        try:
            kwargs[name] = convert(raw)
        except (TypeError, ValueError):
            kwargs[name] = raw
    return kwargs
