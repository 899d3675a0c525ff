"""
Focus Manager

Moves focus through the master/stack layout. Focus wraps from the bottom
of the master column to the top of the stack and back, otherwise it
simply follows yabai's directional focus.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

from .layouts import (
    bottom_window,
    classify,
    dividing_line_x,
    is_bottom_window,
    is_top_window,
    top_window,
)
from .protocol import Direction, Region, Window
from .snapshot import Snapshot

if TYPE_CHECKING:
    from .state import StateStore
    from .yabai import YabaiClient

log = logging.getLogger(__name__)


def split_regions(
    snapshot: Snapshot, expected_master_count: int
) -> Tuple[List[Window], List[Window]]:
    """Master and stack windows of a non-empty snapshot."""
    line_x = dividing_line_x(snapshot, expected_master_count)
    master = [w for w in snapshot if classify(w, line_x) is Region.MASTER]
    stack = [w for w in snapshot if classify(w, line_x) is Region.STACK]
    return master, stack


def wrap_target(
    snapshot: Snapshot,
    expected_master_count: int,
    window: Window,
    direction: Direction,
) -> Optional[Window]:
    """
    Window to jump to when leaving ``window`` toward ``direction``.

    Args:
        snapshot: Current snapshot containing ``window``
        expected_master_count: Stored master count of the space
        window: The window focus (or a swap) starts from
        direction: Direction.SOUTH or Direction.NORTH

    Returns:
        The window at the other end of the layout when ``window`` is at
        the edge of its region, otherwise None (plain directional move)
    """
    master, stack = split_regions(snapshot, expected_master_count)
    is_master = any(w.id == window.id for w in master)
    is_stack = any(w.id == window.id for w in stack)

    if direction is Direction.SOUTH:
        if is_master and is_bottom_window(master, window):
            return top_window(stack) or top_window(master)
        if is_stack and is_bottom_window(stack, window):
            return top_window(master)
    elif direction is Direction.NORTH:
        if is_master and is_top_window(master, window):
            return bottom_window(stack) or bottom_window(master)
        if is_stack and is_top_window(stack, window):
            return bottom_window(master)
    else:
        raise ValueError(f"Unsupported direction: {direction}")

    return None


class FocusManager:
    """Handles focus commands.

    This component subscribes to focus command events and publishes
    FOCUS_CHANGED after issuing the yabai focus command.

    Responsibilities:
    - CMD_FOCUS_DOWN: Focus the window below, wrapping master -> stack
    - CMD_FOCUS_UP: Focus the window above, wrapping stack -> master
    """

    def __init__(self, bus, client: "YabaiClient", store: "StateStore"):
        """Initialize focus manager.

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
        """Subscribe to focus command events."""
        from . import topics

        self.bus.subscribe(self._on_focus_down, topics.CMD_FOCUS_DOWN)
        self.bus.subscribe(self._on_focus_up, topics.CMD_FOCUS_UP)

    def _on_focus_down(self):
        """Handle CMD_FOCUS_DOWN command."""
        self._focus(Direction.SOUTH, fallback=Direction.FIRST)

    def _on_focus_up(self):
        """Handle CMD_FOCUS_UP command."""
        self._focus(Direction.NORTH, fallback=Direction.LAST)

    def _focus(self, direction: Direction, fallback: Direction):
        from . import topics

        snapshot = self.client.query_windows()
        focused = snapshot.focused_window()

        target = None
        if focused is None:
            self.client.focus_direction(fallback)
        else:
            space = self.client.query_focused_space()
            expected = self.store.target_for(space.id)
            target = wrap_target(snapshot, expected, focused, direction)
            if target is None:
                self.client.focus_direction(direction)
            else:
                log.info("Focusing on the window %s", target.name)
                self.client.focus_window(target.id)

        self.bus.sendMessage(
            topics.FOCUS_CHANGED, window_id=target.id if target else None
        )
