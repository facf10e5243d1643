"""Listener handles: batches of subscriptions that are released together."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

from .exceptions import InvalidListenableError
from .models import Subscription
from .publisher import PUBLISHER_METHODS, is_publisher

logger = logging.getLogger(__name__)


class Listener:
    """Subscribes to any number of publishers and can drop them all at once.

    Also usable as a context manager; leaving the block stops listening.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __enter__(self) -> Listener:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop_listening()

    @property
    def subscriptions(self) -> list[Subscription]:
        return list(self._subscriptions)

    def validate_listening(self, listenable: Any) -> str | None:
        """Return why `listenable` can't be listened to, or None if it can."""
        if listenable is self:
            return "a listener cannot listen to itself"
        if not is_publisher(listenable):
            return "it does not implement the publisher methods"
        return None

    def listen_to(
        self, listenable: Any, callback: Callable[..., Any], context: Any = None
    ) -> Subscription:
        """Subscribe `callback` to `listenable` and remember the subscription."""
        reason = self.validate_listening(listenable)
        if reason is not None:
            raise InvalidListenableError(listenable, reason)
        subscription = Subscription(
            id=listenable.listen(callback, context),
            publisher=listenable,
            callback=callback,
            context=context,
        )
        self._subscriptions.append(subscription)
        return subscription

    def listen_to_many(self, listenables: Mapping[str, Any]) -> list[Subscription]:
        """Bind `on_<name>` (or `<name>`) handlers to each named publisher.

        Children are bound too, e.g. `on_load_completed` for `load.completed`.
        Publishers without a matching handler are skipped.
        """
        subscriptions: list[Subscription] = []
        for name, listenable in listenables.items():
            subscriptions.extend(self._listen_to_tree(name, listenable))
        return subscriptions

    def has_listener(self, listenable: Any) -> bool:
        return any(s.publisher is listenable for s in self._subscriptions)

    def stop_listening_to(self, listenable: Any) -> bool:
        """Drop every subscription to `listenable`. Returns False if there were none."""
        dropped = [s for s in self._subscriptions if s.publisher is listenable]
        for subscription in dropped:
            subscription.publisher.unlisten(subscription.id)
            self._subscriptions.remove(subscription)
        return bool(dropped)

    def stop_listening(self) -> None:
        """Drop every subscription this listener made."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.publisher.unlisten(subscription.id)
        if subscriptions:
            logger.debug("%r stopped %d subscriptions", self, len(subscriptions))

    stop_listening_to_all = stop_listening

    def _find_handler(self, name: str) -> Callable[..., Any] | None:
        for candidate in (f"on_{name}", name):
            if candidate in PUBLISHER_METHODS or candidate in LISTENER_METHODS:
                continue
            handler = getattr(self, candidate, None)
            if callable(handler):
                return handler
        return None

    def _listen_to_tree(self, name: str, listenable: Any) -> list[Subscription]:
        subscriptions: list[Subscription] = []
        handler = self._find_handler(name)
        if handler is not None:
            subscriptions.append(self.listen_to(listenable, handler))
        else:
            logger.debug("%r has no handler for %s", self, name)
        for child in getattr(listenable, "children", ()):
            subscriptions.extend(
                self._listen_to_tree(f"{name}_{child}", getattr(listenable, child))
            )
        return subscriptions


LISTENER_METHODS = MappingProxyType({
    name: getattr(Listener, name)
    for name in (
        "validate_listening",
        "listen_to",
        "listen_to_many",
        "has_listener",
        "stop_listening_to",
        "stop_listening",
        "stop_listening_to_all",
    )
})
