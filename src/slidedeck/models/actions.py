"""
Navigation Actions

Abstract actions consumed by NavigationStateMachine.handle(). Input
adapters, the clock loop and location sync all translate their raw input
into one of these before it reaches the engine.
"""

from dataclasses import dataclass
from typing import Optional, Union

from slidedeck.models.enums import NavActionType


@dataclass(frozen=True)
class GoFirst:
    type = NavActionType.GO_FIRST


@dataclass(frozen=True)
class GoLast:
    type = NavActionType.GO_LAST


@dataclass(frozen=True)
class GoNext:
    type = NavActionType.GO_NEXT


@dataclass(frozen=True)
class GoPrev:
    type = NavActionType.GO_PREV


@dataclass(frozen=True)
class TogglePause:
    type = NavActionType.TOGGLE_PAUSE


@dataclass(frozen=True)
class Resize:
    """Viewport size changed (pixels)"""
    width: float
    height: float

    type = NavActionType.RESIZE


@dataclass(frozen=True)
class Tick:
    """Clock tick carrying the elapsed time since the previous tick (ms)"""
    delta_ms: float

    type = NavActionType.TICK


@dataclass(frozen=True)
class LocationChanged:
    """
    External location changed.

    index is None when the location string could not be parsed.
    """
    index: Optional[int]

    type = NavActionType.LOCATION_CHANGED


NavigationAction = Union[GoFirst, GoLast, GoNext, GoPrev, TogglePause, Resize, Tick, LocationChanged]


_SIMPLE_ACTIONS = {
    NavActionType.GO_FIRST: GoFirst,
    NavActionType.GO_LAST: GoLast,
    NavActionType.GO_NEXT: GoNext,
    NavActionType.GO_PREV: GoPrev,
    NavActionType.TOGGLE_PAUSE: TogglePause,
}


def action_from_type(action_type: NavActionType) -> NavigationAction:
    """
    Build a parameterless action from its type (used by key bindings).

    Raises:
        ValueError: for action types that need a payload
    """
    action_cls = _SIMPLE_ACTIONS.get(action_type)
    if action_cls is None:
        raise ValueError(f"{action_type.name} cannot be bound without a payload")
    return action_cls()
