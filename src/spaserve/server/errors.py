"""Error handling pipeline for spaserve requests.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or terse defaults. 404/400 bodies are
plain text; 500 bodies are JSON and only carry diagnostics in debug mode.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from spaserve._internal.invoke import invoke
from spaserve.errors import AssetStoreError, HTTPError
from spaserve.http.request import Request
from spaserve.http.response import Response, json_response, text_response
from spaserve.server.negotiation import negotiate

logger = logging.getLogger("spaserve.server")

_REASONS = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    500: "Internal Server Error",
}


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    sig = inspect.signature(handler)
    params = list(sig.parameters.values())

    if len(params) >= 2:
        result = await invoke(handler, request, exc)
    elif len(params) == 1:
        result = await invoke(handler, request)
    else:
        result = await invoke(handler)

    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Preserve the HTTP status from the exception unless the handler
        # explicitly returned a Response with its own status
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    body = _REASONS.get(exc.status, f"Error {exc.status}")
    if debug and exc.detail and exc.detail != body:
        body = f"{body}: {exc.detail}"

    resp = text_response(body, status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors.

    The full exception is always logged server-side; the client only
    sees it in debug mode.
    """
    if isinstance(exc, AssetStoreError):
        logger.error("500 %s %s — asset store: %s", request.method, request.path, exc)
    else:
        logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        return response.with_status(500) if response.status == 200 else response

    payload: dict[str, Any] = {"error": _REASONS[500]}
    if debug:
        payload["type"] = type(exc).__name__
        payload["detail"] = str(exc)
        payload["traceback"] = traceback.format_exception(exc)
    return json_response(payload, status=500).with_header("Cache-Control", "no-store")
