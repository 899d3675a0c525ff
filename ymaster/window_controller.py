"""
Window Controller

Moves the focused window through the master/stack layout by swapping.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .focus_manager import wrap_target
from .protocol import Direction

if TYPE_CHECKING:
    from .state import StateStore
    from .yabai import YabaiClient

log = logging.getLogger(__name__)


class WindowController:
    """Handles window move commands.

    Uses the same wrap-around rules as FocusManager, but swaps the
    focused window instead of moving focus.

    Responsibilities:
    - CMD_MOVE_DOWN: Swap with the window below, wrapping master -> stack
    - CMD_MOVE_UP: Swap with the window above, wrapping stack -> master
    """

    def __init__(self, bus, client: "YabaiClient", store: "StateStore"):
        """Initialize window controller.

        Args:
            bus: Event bus instance (Pypubsub)
            client: yabai client
            store: Per-space master count store
        """
        self.bus = bus
        self.client = client
        self.store = store

        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to window move command events."""
        from . import topics

        self.bus.subscribe(self._on_move_down, topics.CMD_MOVE_DOWN)
        self.bus.subscribe(self._on_move_up, topics.CMD_MOVE_UP)

    def _on_move_down(self):
        """Handle CMD_MOVE_DOWN command."""
        self._move(Direction.SOUTH)

    def _on_move_up(self):
        """Handle CMD_MOVE_UP command."""
        self._move(Direction.NORTH)

    def _move(self, direction: Direction):
        snapshot = self.client.query_windows()
        focused = snapshot.focused_window()
        if focused is None:
            log.info("No focused window to move.")
            return

        space = self.client.query_focused_space()
        expected = self.store.target_for(space.id)
        target = wrap_target(snapshot, expected, focused, direction)

        if target is None:
            self.client.swap(focused.id, direction)
        elif target.id != focused.id:
            log.info("Swapping %s with %s", focused.name, target.name)
            self.client.swap(focused.id, target.id)
