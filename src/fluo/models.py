"""Data models for fluo."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

ASYNC_RESULT_CHILDREN = ("completed", "failed")


class ActionDefinition(BaseModel):
    """How an action should be built.

    The hook fields are a closed set. Any other keyword is kept as a
    pass-through field (see `extras`) and is exposed on the action as-is.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True, frozen=True)

    pre_emit: Callable[..., Any] | None = None
    should_emit: Callable[..., Any] | None = None
    sync: bool = False
    children: tuple[str, ...] = ()
    async_result: bool = False

    @field_validator("children")
    @classmethod
    def _check_children(cls, children: tuple[str, ...]) -> tuple[str, ...]:
        for name in children:
            if not name.isidentifier():
                raise ValueError(f"child name {name!r} is not a valid identifier")
        if len(set(children)) != len(children):
            raise ValueError(f"duplicate child names in {list(children)}")
        return children

    @model_validator(mode="after")
    def _check_shape(self) -> ActionDefinition:
        if self.async_result and self.children:
            raise ValueError("children cannot be combined with async_result")
        clashes = set(self.extras) & set(self.child_names)
        if clashes:
            raise ValueError(f"fields {sorted(clashes)} clash with child actions")
        return self

    @property
    def extras(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    @property
    def child_names(self) -> tuple[str, ...]:
        """Children the action ends up with, including the async result pair."""
        if self.async_result:
            return ASYNC_RESULT_CHILDREN
        return self.children


class Subscription(BaseModel):
    """One callback attached to one publisher by a listener."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    id: int
    publisher: Any
    callback: Callable[..., Any]
    context: Any = None
