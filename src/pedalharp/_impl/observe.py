from collections.abc import Callable
from typing import Any, NamedTuple
import logging

__all__ = ["PropertyChange", "ChangeListener", "Observable"]

logger = logging.getLogger(__name__)


class PropertyChange(NamedTuple):
    """A state change of an observable object: the property name and its old and new values."""

    name: str
    old: Any
    new: Any


type ChangeListener = Callable[[PropertyChange], None]
"""Callback receiving every `PropertyChange` fired by the object it is registered on."""


class Observable:
    """
    Mixin holding a list of change listeners. Listeners are called synchronously, in
    registration order, on the thread performing the mutation.
    """

    __slots__ = ("_listeners",)

    def __init__(self):
        self._listeners: list[ChangeListener] = []

    def addListener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def removeListener(self, listener: ChangeListener) -> None:
        """
        Removes a listener. Bound methods of the same object and function count as the same
        listener. Unknown listeners are ignored.
        """
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _fire(self, name: str, old: Any, new: Any) -> None:
        event = PropertyChange(name, old, new)
        logger.debug("%s: %s -> %s", name, old, new)
        for listener in tuple(self._listeners):
            listener(event)
