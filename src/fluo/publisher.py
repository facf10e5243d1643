"""The publisher API shared by actions and stores."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable

from .config import get_settings
from .emitter import EmitterCore
from .exceptions import NotAsyncActionError
from .results import attach_continuations

logger = logging.getLogger(__name__)


class Publisher:
    """Mixin for anything listeners can subscribe to.

    Subclasses must set `self._emitter` to an `EmitterCore`.
    """

    _emitter: EmitterCore

    def pre_emit(self, *args: Any) -> Any:
        """Hook run first on every emission. The return value may be a result to promise."""
        return None

    def should_emit(self, *args: Any) -> bool:
        """Hook run after `pre_emit`. A falsy return value blocks the emission."""
        return True

    def listen(self, callback: Callable[..., Any], context: Any = None) -> int:
        """Subscribe `callback` to every future emission.

        `context` is what `current_context()` returns inside the callback.
        It defaults to the publisher itself.
        """
        return self._emitter.subscribe(callback, self if context is None else context)

    def unlisten(self, subscription_id: int) -> bool:
        return self._emitter.unsubscribe(subscription_id)

    def trigger(self, *args: Any) -> None:
        """Run the hooks and notify listeners before returning."""
        self._emit(args, deferred=False)

    def trigger_async(self, *args: Any) -> None:
        """Run the hooks now and notify listeners on a later turn."""
        self._emit(args, deferred=True)

    def promise(self, result: Any) -> bool:
        """Fire `completed` or `failed` once `result` settles.

        Tuples are spread into `completed(*value)`. Returns False when
        `result` is neither awaitable nor thenable.
        """
        completed = getattr(self, "completed", None)
        failed = getattr(self, "failed", None)
        if not (callable(completed) and callable(failed)):
            raise NotAsyncActionError(self)

        def _on_success(value: Any) -> None:
            if isinstance(value, tuple):
                completed(*value)
            else:
                completed(value)

        return attach_continuations(result, _on_success, failed)

    def listen_and_promise(self, callback: Callable[..., Any], context: Any = None) -> int:
        """Listen with a callback whose return value is passed to `promise`."""

        def _promising(*args: Any) -> None:
            self.promise(callback(*args))

        return self.listen(_promising, context)

    def _emit(self, args: tuple[Any, ...], deferred: bool) -> None:
        result = self.pre_emit(*args)
        if not self.should_emit(*args):
            logger.debug("Emission of %r blocked by should_emit", self)
            return
        on_result = self._wire_result(result)
        if deferred:
            get_settings().scheduler.call_soon(self._emitter.notify, args, on_result)
        else:
            self._emitter.notify(args, on_result)

    def _wire_result(self, result: Any) -> Callable[[Any], Any] | None:
        """Handle the `pre_emit` result of an emission that was let through.

        Runs before any listener is notified. May return a callable that
        receives each listener's return value.
        """
        return None


PUBLISHER_METHODS = MappingProxyType({
    name: getattr(Publisher, name)
    for name in (
        "pre_emit",
        "should_emit",
        "listen",
        "unlisten",
        "trigger",
        "trigger_async",
        "promise",
        "listen_and_promise",
    )
})


def is_publisher(obj: object) -> bool:
    """True if `obj` exposes every publisher method."""
    return all(callable(getattr(obj, name, None)) for name in PUBLISHER_METHODS)
