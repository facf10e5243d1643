"""Stores: named handlers that listen to actions and publish changes."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

from .emitter import EmitterCore, using_context
from .exceptions import InvalidDefinitionError, UnknownHandlerError
from .listener import Listener
from .models import Subscription
from .publisher import Publisher

logger = logging.getLogger(__name__)

_RESERVED = ("init", "listenables")
_HOOKS = ("pre_emit", "should_emit")


class Store(Listener, Publisher):
    """Aggregate of handler functions attached to actions.

    Handlers come from the `handlers` mapping (kept as plain, unbound
    functions) or from methods of a subclass. Inside a handler,
    `current_context()` is the store. A store is a publisher too: its
    own listeners are notified through `trigger`.

    The `init` key is called once after construction and `listenables`
    is handed to `listen_to_many`.
    """

    def __init__(self, handlers: Mapping[str, Any] | None = None, name: str | None = None) -> None:
        Listener.__init__(self)
        self._emitter = EmitterCore()
        self.name = name or type(self).__name__
        handlers = dict(handlers or {})
        init = handlers.pop("init", None)
        listenables = handlers.pop("listenables", None)

        for key, handler in handlers.items():
            if key not in _HOOKS and (hasattr(type(self), key) or key in self.__dict__):
                raise InvalidDefinitionError(f"store field {key!r} would shadow an existing attribute")
            setattr(self, key, handler)

        if init is not None:
            with using_context(self):
                init()
        elif callable(getattr(self, "init", None)):
            self.init()
        if listenables is None:
            listenables = getattr(self, "listenables", None)
        if listenables is not None:
            self.listen_to_many(listenables)

    def __repr__(self) -> str:
        return f"<Store {self.name!r}>"

    def listen_to(
        self,
        listenable: Any,
        handler: str | Callable[..., Any],
        context: Any = None,
    ) -> Subscription:
        """Attach one of this store's handlers, by name or directly, to `listenable`."""
        if isinstance(handler, str):
            callback = getattr(self, handler, None)
            if not callable(callback):
                raise UnknownHandlerError(self.name, handler)
        else:
            callback = handler
        return super().listen_to(listenable, callback, self if context is None else context)

    @property
    def listener_count(self) -> int:
        return len(self._emitter)


def create_store(handlers: Mapping[str, Any], name: str | None = None) -> Store:
    """Build a store from a mapping of handler name to function."""
    store = Store(handlers, name=name)
    logger.debug("Created %r with handlers %s", store, [k for k in handlers if k not in _RESERVED])
    return store
