"""Minimal publish/subscribe core owned by every publisher."""

from __future__ import annotations

import itertools
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Iterator

logger = logging.getLogger(__name__)

ListenerCallback = Callable[..., Any]

_current_context: ContextVar[Any] = ContextVar("fluo_current_context", default=None)


def current_context() -> Any:
    """Return the context of the listener currently being notified.

    Outside of a notification this is None.
    """
    return _current_context.get()


@contextmanager
def using_context(context: Any) -> Iterator[None]:
    """Make `current_context()` return `context` inside the block."""
    token = _current_context.set(context)
    try:
        yield
    finally:
        _current_context.reset(token)


class EmitterCore:
    """Registers listeners and notifies all of them with an argument list."""

    _ids = itertools.count(1)

    def __init__(self) -> None:
        self._listeners: dict[int, tuple[ListenerCallback, Any]] = {}

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, subscription_id: object) -> bool:
        return subscription_id in self._listeners

    def subscribe(self, callback: ListenerCallback, context: Any = None) -> int:
        """Register a listener. Returns its subscription id."""
        subscription_id = next(self._ids)
        self._listeners[subscription_id] = (callback, context)
        logger.debug("Subscribed %r as #%d", callback, subscription_id)
        return subscription_id

    def unsubscribe(self, subscription_id: int) -> bool:
        """Remove a listener. Returns False if it was already gone."""
        if self._listeners.pop(subscription_id, None) is None:
            return False
        logger.debug("Unsubscribed #%d", subscription_id)
        return True

    def clear(self) -> None:
        self._listeners.clear()

    def notify(
        self,
        args: tuple[Any, ...],
        on_result: Callable[[Any], Any] | None = None,
    ) -> list[Exception]:
        """Call every listener registered when delivery starts.

        Each listener's return value is passed to `on_result` when given.
        A failing listener (or `on_result` call) is logged and skipped.
        Returns the exceptions raised, in delivery order.
        """
        errors: list[Exception] = []
        for callback, context in list(self._listeners.values()):
            try:
                with using_context(context):
                    value = callback(*args)
                if on_result is not None:
                    on_result(value)
            except Exception as exc:
                logger.exception("Error in listener %r", callback)
                errors.append(exc)
        return errors
