"""fluo: in-process actions, listeners and stores."""

from .config import Settings, configure, get_settings
from .core import Action, ActionGroup, create_action, create_actions
from .emitter import EmitterCore, current_context
from .exceptions import (
    FluoError,
    InvalidDefinitionError,
    InvalidListenableError,
    NotAsyncActionError,
    SchedulingError,
    UnknownHandlerError,
)
from .listener import LISTENER_METHODS, Listener
from .models import ActionDefinition, Subscription
from .publisher import PUBLISHER_METHODS, Publisher, is_publisher
from .scheduling import AsyncioScheduler, QueueScheduler, Scheduler
from .store import Store, create_store

__all__ = [
    "Action",
    "ActionDefinition",
    "ActionGroup",
    "AsyncioScheduler",
    "EmitterCore",
    "FluoError",
    "InvalidDefinitionError",
    "InvalidListenableError",
    "LISTENER_METHODS",
    "Listener",
    "NotAsyncActionError",
    "PUBLISHER_METHODS",
    "Publisher",
    "QueueScheduler",
    "Scheduler",
    "SchedulingError",
    "Settings",
    "Store",
    "Subscription",
    "UnknownHandlerError",
    "configure",
    "create_action",
    "create_actions",
    "create_store",
    "current_context",
    "get_settings",
    "is_publisher",
]
