"""Invoke helpers: call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def``. Anything that calls a
user-provided handler goes through here so the sync/async check lives
in exactly one place.

Usage::

    from switchyard._internal.invoke import invoke

    result = await invoke(handler, context, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    A plain ``def`` handler is a terminal handler: it gets ``next`` but
    cannot await it, so nothing downstream runs unless it returns the
    coroutine from calling ``next()``, which is awaited here.
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
