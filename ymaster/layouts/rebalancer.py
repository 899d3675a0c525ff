"""
Layout Rebalancer

Drives yabai's BSP tree toward a master/stack layout. Each step issues one
yabai command and then takes a new snapshot, because every later decision
depends on where yabai actually put the windows.
"""

from __future__ import annotations
import logging
from typing import List, Optional, TYPE_CHECKING

from ..errors import LayoutInvariantError
from ..protocol import Region, Split, Window
from ..snapshot import Snapshot
from .. import topics
from .classifier import (
    is_master_window,
    is_middle_window,
    master_windows,
    middle_windows,
    stack_windows,
    top_left_window,
    top_right_window,
    widest_window,
)
from .dividing_line import dividing_line_x
from .validator import LayoutValidity, is_valid_layout

if TYPE_CHECKING:
    from ..yabai import YabaiClient

log = logging.getLogger(__name__)


class LayoutRebalancer:
    """
    Rebalances the windows of the focused space.

    The rebalancer keeps the latest snapshot and rebinds it after every
    command it issues; it never edits window geometry itself.
    """

    def __init__(
        self,
        client: "YabaiClient",
        expected_master_count: int,
        bus=None,
        snapshot: Optional[Snapshot] = None,
    ):
        """Initialize the rebalancer.

        Args:
            client: yabai client used for queries and commands
            expected_master_count: Number of master windows the layout is
                believed to currently have (the stored target)
            bus: Event bus instance (Pypubsub), optional
            snapshot: Initial snapshot; queried from yabai when omitted
        """
        self.client = client
        self.expected_master_count = expected_master_count
        self.bus = bus
        self.snapshot = snapshot if snapshot is not None else client.query_windows()

    # Snapshot helpers

    def refresh(self) -> Snapshot:
        self.snapshot = self.client.query_windows()
        return self.snapshot

    def dividing_line_x(self) -> int:
        return dividing_line_x(self.snapshot, self.expected_master_count)

    def master_windows(self) -> List[Window]:
        return master_windows(self.snapshot, self.dividing_line_x())

    def stack_windows(self) -> List[Window]:
        return stack_windows(self.snapshot)

    def middle_windows(self) -> List[Window]:
        return middle_windows(self.snapshot, self.dividing_line_x())

    def is_master_window(self, window: Window) -> bool:
        return is_master_window(window, self.dividing_line_x())

    def is_middle_window(self, window: Window) -> bool:
        return is_middle_window(window, self.dividing_line_x())

    def stack_exists(self) -> bool:
        """The stack is missing when the top-right window touches x = 0."""
        top_right = top_right_window(self.snapshot)
        return top_right is not None and top_right.frame.x != 0

    def is_valid_layout(self, target_master_count: Optional[int] = None) -> LayoutValidity:
        if target_master_count is None:
            target_master_count = self.expected_master_count
        return is_valid_layout(
            self.snapshot, target_master_count, self.expected_master_count
        )

    # Primitives

    def _toggle_split(self, window: Window):
        self.client.toggle_split(window.id)
        self.refresh()

    def _warp(self, window: Window, target: Window) -> Window:
        self.client.warp(window.id, target.id)
        self.refresh()
        return self.snapshot.refreshed(window)

    def _publish(self, topic: str, **kwargs):
        if self.bus is not None:
            self.bus.sendMessage(topic, **kwargs)

    def create_stack(self):
        """Force a stack into existence when every window spans the screen.

        The top-right window is split vertically and every other window is
        warped into the top-left window's container.
        """
        top_right = top_right_window(self.snapshot)
        if top_right is None:
            return

        if top_right.split is Split.HORIZONTAL:
            self._toggle_split(top_right)

        top_left = top_left_window(self.snapshot)
        if top_left is not None:
            for window in self.snapshot:
                if window.id in (top_right.id, top_left.id):
                    continue
                self._warp(window, top_left)

        self.columnize_stack_windows()
        self._publish(topics.STACK_CREATED, window_id=top_right.id)

    def columnize_stack_windows(self):
        """Give every non-master window a horizontal split so the stack is a column."""
        for stack_window in [w for w in self.snapshot if not self.is_master_window(w)]:
            window = self.snapshot.refreshed(stack_window)
            if window.split is Split.VERTICAL:
                self._toggle_split(window)

    def move_window_to_stack(self, window: Window):
        window = self.snapshot.refreshed(window)

        # With two windows, splitting vertically is enough to create the stack
        if len(self.snapshot) == 2:
            if window.split is Split.HORIZONTAL:
                self._toggle_split(window)
            return

        self.columnize_stack_windows()

        stack_window = widest_window(self.stack_windows())
        if stack_window is None:
            log.info("No stack windows available.")
            return

        window = self._warp(window, stack_window)
        wanted = Split.VERTICAL if len(self.snapshot) == 2 else Split.HORIZONTAL
        if window.split is not wanted:
            self._toggle_split(window)

        self._publish(topics.WINDOW_MOVED, window_id=window.id, region=Region.STACK)

    def move_window_to_master(self, window: Window):
        master_window = widest_window(self.master_windows())
        if master_window is None:
            log.info("No master windows available.")
            return

        window = self._warp(window, master_window)
        if window.split is Split.VERTICAL:
            self._toggle_split(window)

        self._publish(topics.WINDOW_MOVED, window_id=window.id, region=Region.MASTER)

    # Convergence

    def update_windows(self, target_master_count: int) -> bool:
        """
        Rearrange the windows until exactly ``target_master_count`` of them
        are master windows and none is left in the middle.

        Does nothing when the layout is already valid. On success the target
        becomes the expected master count.

        Returns:
            True if windows were rearranged, False if the layout was valid

        Raises:
            LayoutInvariantError: if the layout is still invalid afterwards
        """
        log.debug("update_windows() called")
        validity = self.is_valid_layout(target_master_count)
        if validity:
            log.info("Valid layout detected; no changes were made.")
            return False

        log.info("Invalid layout detected (%s)...updating windows.", validity.reason)
        num_windows = len(self.snapshot)

        if target_master_count < num_windows and not self.stack_exists():
            log.info("Stack does not exist, creating it...")
            self.create_stack()

        if num_windows > 2:
            master = self.master_windows()
            log.debug("Master windows: %s", [w.name for w in master])
            num_master = len(master)

            if num_master > target_master_count:
                log.info(
                    "Too many master windows (%d/%d).", num_master, target_master_count
                )
                # The bottom-most, then right-most master windows leave first
                master.sort(key=lambda w: (w.frame.y, w.frame.x))
                while num_master > target_master_count:
                    window = master.pop()
                    log.info("Moving master window %s to stack.", window.name)
                    self.move_window_to_stack(window)
                    num_master -= 1

            # Each pass moves one middle window; more passes than windows
            # means yabai is not doing what we ask
            for _ in range(len(self.snapshot)):
                middle = self.middle_windows()
                if not middle:
                    break
                window = middle[0]
                log.info("Middle window %s detected.", window.name)
                if num_master < target_master_count:
                    log.info("Moving middle window %s to master.", window.name)
                    self.move_window_to_master(window)
                    num_master += 1
                else:
                    log.info("Moving middle window %s to stack.", window.name)
                    self.move_window_to_stack(window)

            stack = self.stack_windows()
            stack.sort(key=lambda w: (w.frame.x, w.frame.y), reverse=True)
            while num_master < target_master_count and stack:
                log.info(
                    "Not enough master windows (%d/%d)",
                    num_master,
                    target_master_count,
                )
                window = stack.pop()
                log.info("Moving stack window %s to master.", window.name)
                self.move_window_to_master(window)
                num_master += 1

        validity = self.is_valid_layout(target_master_count)
        if not validity:
            raise LayoutInvariantError(validity.reason)

        log.info("update_windows() was successful.")
        self.expected_master_count = target_master_count
        return True
