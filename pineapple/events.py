"""Per-frame input snapshots and the queue of pending game actions."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class InputState:
    """Snapshot of the keyboard and mouse for one frame.

    ``keys`` holds lower-case key names such as ``"w"``, ``"k"``, ``"r"``,
    ``"lshift"``, ``"lctrl"`` or ``"lalt"``.
    """

    keys: frozenset[str] = frozenset()
    mouse_position: tuple[float, float] = (0.0, 0.0)
    mouse_left: bool = False

    def is_pressed(self, key: str) -> bool:
        """Return whether the named key is held down."""
        return key in self.keys


class EventBus:
    """Stacks of pending actions and setting tweaks, drained newest first."""

    def __init__(self) -> None:
        self._actions: list[str] = []
        self._tweaks: list[tuple[str, float]] = []

    def push_action(self, action: str) -> None:
        self._actions.append(action)

    def push_tweak(self, name: str, value: float) -> None:
        self._tweaks.append((name, float(value)))

    def drain_actions(self) -> Iterator[str]:
        """Yield pending actions newest first until none are left.

        Actions pushed while draining are yielded as well.
        """
        while self._actions:
            yield self._actions.pop()

    def drain_tweaks(self) -> Iterator[tuple[str, float]]:
        """Yield pending ``(name, value)`` tweaks newest first until none are left."""
        while self._tweaks:
            yield self._tweaks.pop()

    def clear(self) -> None:
        self._actions.clear()
        self._tweaks.clear()