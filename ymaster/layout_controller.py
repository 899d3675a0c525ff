"""
Layout Controller

Runs the rebalancer in response to yabai events and master-count
keybindings, and stores the new master count once a rebalance succeeds.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .layouts import LayoutRebalancer

if TYPE_CHECKING:
    from .state import StateStore
    from .yabai import YabaiClient

log = logging.getLogger(__name__)


def usable_master_count(target: int, num_windows: int) -> int:
    """Master count a rebalance can reach with ``num_windows`` windows.

    A layout needs at least one stack window, so with two or more
    windows the count is capped at ``num_windows - 1``. A lone window
    is always the single master window.
    """
    return max(1, min(target, num_windows - 1))


class LayoutController:
    """Handles layout commands.

    This component subscribes to layout command events and publishes
    LAYOUT_VALID / LAYOUT_REBALANCED once it is done.

    Responsibilities:
    - CMD_UPDATE_LAYOUT: Rebalance toward the stored master count
    - CMD_INCREASE_MASTER: Rebalance with one more master window
    - CMD_DECREASE_MASTER: Rebalance with one less master window
    """

    def __init__(self, bus, client: "YabaiClient", store: "StateStore"):
        """Initialize layout controller.

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
        """Subscribe to layout command events."""
        from . import topics

        self.bus.subscribe(self._on_update_layout, topics.CMD_UPDATE_LAYOUT)
        self.bus.subscribe(self._on_increase_master, topics.CMD_INCREASE_MASTER)
        self.bus.subscribe(self._on_decrease_master, topics.CMD_DECREASE_MASTER)

    def _on_update_layout(self):
        """Handle CMD_UPDATE_LAYOUT command."""
        space = self.client.query_focused_space()
        target = self.store.target_for(space.id)
        rebalancer = LayoutRebalancer(self.client, target, bus=self.bus)

        num_windows = len(rebalancer.snapshot)
        if num_windows == 0:
            log.info("No tileable windows on space %d", space.id)
            return

        # Too few windows for the stored count; keep the stored preference
        # for when windows come back
        clamped = usable_master_count(target, num_windows)
        if clamped != target:
            log.info(
                "Space %d has %d window(s); using %d master window(s) instead of %d",
                space.id,
                num_windows,
                clamped,
                target,
            )
            rebalancer.expected_master_count = clamped

        self._rebalance(space.id, rebalancer, clamped, persist=False)

    def _on_increase_master(self):
        """Handle CMD_INCREASE_MASTER command."""
        space = self.client.query_focused_space()
        target = self.store.target_for(space.id)
        rebalancer = LayoutRebalancer(self.client, target, bus=self.bus)

        if target + 1 >= len(rebalancer.snapshot):
            log.info("Cannot have more than %d master window(s).", target)
            return

        self._rebalance(space.id, rebalancer, target + 1, persist=True)

    def _on_decrease_master(self):
        """Handle CMD_DECREASE_MASTER command."""
        space = self.client.query_focused_space()
        target = self.store.target_for(space.id)
        if target <= 1:
            log.info("Cannot have fewer than one master window.")
            return

        rebalancer = LayoutRebalancer(self.client, target, bus=self.bus)
        num_windows = len(rebalancer.snapshot)
        if num_windows == 0:
            log.info("No tileable windows on space %d", space.id)
            return

        rebalancer.expected_master_count = usable_master_count(target, num_windows)
        self._rebalance(
            space.id,
            rebalancer,
            usable_master_count(target - 1, num_windows),
            persist=True,
        )

    def _rebalance(
        self,
        space_id: int,
        rebalancer: LayoutRebalancer,
        target: int,
        persist: bool,
    ):
        from . import topics

        changed = rebalancer.update_windows(target)

        # Only reached after the rebalancer re-validated the layout
        if persist:
            self.store.set_target(space_id, target)

        topic = topics.LAYOUT_REBALANCED if changed else topics.LAYOUT_VALID
        self.bus.sendMessage(topic, space_id=space_id, num_master_windows=target)
