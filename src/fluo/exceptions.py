"""Custom exceptions for fluo."""


class FluoError(Exception):
    """Base exception for fluo errors."""


class InvalidDefinitionError(FluoError, ValueError):
    """Raised when an action definition cannot be turned into an action."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid action definition: {reason}")
        self.reason = reason


class InvalidListenableError(FluoError, TypeError):
    """Raised when a listener is asked to listen to something it can't."""

    def __init__(self, listenable: object, reason: str) -> None:
        super().__init__(f"Cannot listen to {listenable!r}: {reason}")
        self.listenable = listenable
        self.reason = reason


class UnknownHandlerError(FluoError, AttributeError):
    """Raised when a store has no handler with the requested name."""

    def __init__(self, store_name: str, handler_name: str) -> None:
        super().__init__(f"Store {store_name} has no handler named {handler_name!r}")
        self.store_name = store_name
        self.handler_name = handler_name


class NotAsyncActionError(FluoError):
    """Raised when a result is promised to a publisher without completed/failed children."""

    def __init__(self, publisher: object) -> None:
        super().__init__(
            f'{publisher!r} must have "completed" and "failed" child actions'
        )
        self.publisher = publisher


class SchedulingError(FluoError, RuntimeError):
    """Raised when deferred work needs an event loop and none is running."""
