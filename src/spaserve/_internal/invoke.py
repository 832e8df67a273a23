"""Invoke helpers — call sync or async handlers uniformly.

Endpoint handlers, error handlers, and lifecycle hooks can be ``def``
or ``async def``. This module keeps the sync/async check in one place.

Usage::

    from spaserve._internal.invoke import invoke

    result = await invoke(handler, *args, **kwargs)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
