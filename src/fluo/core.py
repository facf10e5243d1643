"""Actions, the main entry point."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable

from pydantic import ValidationError

from .emitter import EmitterCore
from .exceptions import InvalidDefinitionError
from .models import ActionDefinition
from .publisher import Publisher

logger = logging.getLogger(__name__)


class Action(Publisher):
    """A callable that runs its hooks and then notifies its listeners.

    Calling the action emits with the call arguments: synchronously when
    built with `sync=True`, otherwise on a later turn of the configured
    scheduler. Child actions are attributes named after `children`.
    """

    is_action = True

    def __init__(self, definition: ActionDefinition | None = None, name: str | None = None) -> None:
        if definition is None:
            definition = ActionDefinition()
        self._emitter = EmitterCore()
        self._extras: dict[str, Any] = {}
        self.name = name
        self.sync = definition.sync
        self.async_result = definition.async_result
        self.children = definition.child_names

        # Hooks shadow the Publisher defaults per instance, unbound.
        if definition.pre_emit is not None:
            self.pre_emit = definition.pre_emit
        if definition.should_emit is not None:
            self.should_emit = definition.should_emit

        for key, value in definition.extras.items():
            self._check_free(key)
            self._extras[key] = value

        for child in self.children:
            self._check_free(child)
            child_name = f"{name}.{child}" if name else child
            setattr(self, child, Action(name=child_name))

    def __repr__(self) -> str:
        if self.name:
            return f"<Action {self.name!r}>"
        return f"<Action at {id(self):#x}>"

    def __getattr__(self, key: str) -> Any:
        # Only reached when normal lookup fails.
        try:
            return self.__dict__["_extras"][key]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {key!r}"
            ) from None

    def __call__(self, *args: Any) -> None:
        self.invoke(*args)

    def invoke(self, *args: Any) -> None:
        """Emit with `args`, honouring the action's `sync` flag."""
        if self.sync:
            self.trigger(*args)
        else:
            self.trigger_async(*args)

    @property
    def extras(self) -> dict[str, Any]:
        """Pass-through fields from the definition."""
        return dict(self._extras)

    @property
    def listener_count(self) -> int:
        return len(self._emitter)

    def _wire_result(self, result: Any) -> Callable[[Any], Any] | None:
        if not self.async_result or self.promise(result):
            return None
        # Nothing to settle from pre_emit; promise the first listener result that can be.
        promised = False

        def _promise_first(value: Any) -> None:
            nonlocal promised
            if not promised and value is not None:
                promised = self.promise(value)

        return _promise_first

    def _check_free(self, key: str) -> None:
        if hasattr(type(self), key) or key in self.__dict__:
            raise InvalidDefinitionError(f"{key!r} would shadow an existing attribute")


class ActionGroup(Mapping[str, Action]):
    """Read-only mapping of named actions, also reachable as attributes."""

    def __init__(self, actions: Mapping[str, Action]) -> None:
        self._actions = dict(actions)

    def __getitem__(self, name: str) -> Action:
        return self._actions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def __getattr__(self, name: str) -> Action:
        try:
            return self.__dict__["_actions"][name]
        except KeyError:
            raise AttributeError(f"No action named {name!r}") from None

    def __repr__(self) -> str:
        return f"ActionGroup({list(self._actions)})"


def _to_definition(definition: ActionDefinition | Mapping[str, Any] | None, fields: dict[str, Any]) -> ActionDefinition:
    if isinstance(definition, ActionDefinition):
        if not fields:
            return definition
        definition = {**dict(definition), **definition.extras}
    try:
        return ActionDefinition.model_validate({**(definition or {}), **fields})
    except ValidationError as exc:
        raise InvalidDefinitionError(str(exc)) from exc


def create_action(
    definition: ActionDefinition | Mapping[str, Any] | None = None,
    /,
    *,
    name: str | None = None,
    **fields: Any,
) -> Action:
    """Build an action from a definition mapping and/or keyword fields.

    Recognized fields are `pre_emit`, `should_emit`, `sync`, `children` and
    `async_result`. Anything else is passed through onto the action.
    `children` may be given as any sequence of names; the action stores
    it as a tuple, so compare `action.children` against a tuple.
    """
    return Action(_to_definition(definition, fields), name=name)


def create_actions(
    definitions: Mapping[str, ActionDefinition | Mapping[str, Any] | None] | Iterable[str],
) -> ActionGroup:
    """Build several actions at once.

    Takes either names of plain actions or a mapping from name to
    definition.
    """
    if isinstance(definitions, Mapping):
        items = definitions.items()
    else:
        items = ((name, None) for name in definitions)
    actions = {name: create_action(definition, name=name) for name, definition in items}
    logger.debug("Created actions %s", list(actions))
    return ActionGroup(actions)
