"""Content negotiation — maps endpoint return values to Response objects.

isinstance-based dispatch, no magic, fully predictable:

- ``Response``             -> as-is
- ``dict`` / ``list``      -> JSON
- ``str``                  -> text/html
- ``bytes``                -> application/octet-stream
- ``None``                 -> 204 No Content
- ``(value, status)``      -> negotiated value with that status
- ``(value, status, hdrs)``-> plus extra headers
"""

from typing import Any

from spaserve.errors import ConfigurationError
from spaserve.http.response import Response, json_response


def negotiate(value: Any) -> Response:
    """Convert an endpoint handler's return value to a Response."""
    if isinstance(value, Response):
        return value

    if isinstance(value, tuple):
        if len(value) == 2:
            inner, status = value
            return negotiate(inner).with_status(status)
        if len(value) == 3:
            inner, status, headers = value
            return negotiate(inner).with_status(status).with_headers(headers)
        msg = f"Handler returned a tuple of length {len(value)}; expected (value, status[, headers])."
        raise ConfigurationError(msg)

    if isinstance(value, (dict, list)):
        return json_response(value)
    if isinstance(value, str):
        return Response(body=value)
    if isinstance(value, bytes):
        return Response(body=value, content_type="application/octet-stream")
    if value is None:
        return Response(status=204)

    msg = f"Cannot convert {type(value).__name__} to a response."
    raise ConfigurationError(msg)
