"""A minimal model of checkable menu entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(eq=False)
class MenuAction:
    """A menu entry that calls its connected callbacks when triggered."""

    text: str
    checkable: bool = field(default=False, init=False)
    checked: bool = field(default=False, init=False)
    separator: bool = field(default=False, init=False)
    _callbacks: List[Callable[[], object]] = field(default_factory=list, init=False, repr=False)

    def connect(self, callback):
        """Call *callback* with no arguments each time the action is triggered."""
        self._callbacks.append(callback)
        return callback

    def trigger(self):
        """Toggle a checkable action, then run the connected callbacks."""
        if self.checkable:
            self.checked = not self.checked
        for callback in list(self._callbacks):
            callback()


class Menu:
    """An ordered list of actions and separators."""

    def __init__(self):
        self._actions: List[MenuAction] = []

    def add_action(self, text):
        action = MenuAction(text)
        self._actions.append(action)
        return action

    def add_separator(self):
        action = MenuAction("")
        action.separator = True
        self._actions.append(action)
        return action

    def actions(self):
        return list(self._actions)

    def find(self, text):
        """Return the first non-separator action labelled *text*."""
        for action in self._actions:
            if not action.separator and action.text == text:
                return action
        raise KeyError(text)