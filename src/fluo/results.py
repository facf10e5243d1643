"""Wiring asynchronous results to success and failure continuations."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable

from .exceptions import SchedulingError

logger = logging.getLogger(__name__)


def attach_continuations(
    value: Any,
    on_success: Callable[[Any], Any],
    on_failure: Callable[[BaseException], Any],
) -> bool:
    """Call `on_success` or `on_failure` once `value` settles.

    Accepts asyncio futures, any other awaitable (scheduled on the running
    loop) and objects with a `then(on_success, on_failure)` method. Returns
    False, without doing anything, for values that are none of these.
    """
    then = getattr(value, "then", None)
    if callable(then):
        then(on_success, on_failure)
        return True

    if not asyncio.isfuture(value):
        if not inspect.isawaitable(value):
            logger.debug("Result %r is not awaitable, ignoring", value)
            return False
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(value):
                value.close()
            raise SchedulingError(
                f"awaiting {value!r} requires a running event loop"
            ) from None
        value = asyncio.ensure_future(value)

    def _settle(future: asyncio.Future[Any]) -> None:
        if future.cancelled():
            on_failure(asyncio.CancelledError())
            return
        exc = future.exception()
        if exc is not None:
            on_failure(exc)
        else:
            on_success(future.result())

    value.add_done_callback(_settle)
    return True
