"""
Event Topics for ymaster

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>
"""

# Command events (imperative - tell components to do something)
# These are triggered by yabai signals or keybindings through the CLI

CMD_UPDATE_LAYOUT = "cmd.update_layout"
"""Command: Rebalance the focused space toward its stored master count."""

CMD_INCREASE_MASTER = "cmd.increase_master"
"""Command: Add one window to the master region."""

CMD_DECREASE_MASTER = "cmd.decrease_master"
"""Command: Remove one window from the master region."""

CMD_FOCUS_DOWN = "cmd.focus_down"
"""Command: Focus the next window down, wrapping from master to stack."""

CMD_FOCUS_UP = "cmd.focus_up"
"""Command: Focus the next window up, wrapping from stack to master."""

CMD_MOVE_DOWN = "cmd.move_down"
"""Command: Swap the focused window with the next window down."""

CMD_MOVE_UP = "cmd.move_up"
"""Command: Swap the focused window with the next window up."""

# Layout notifications

LAYOUT_VALID = "layout.valid"
"""Published when a rebalance found nothing to do. Params: space_id, num_master_windows"""

LAYOUT_REBALANCED = "layout.rebalanced"
"""Published after a successful rebalance. Params: space_id, num_master_windows"""

STACK_CREATED = "layout.stack_created"
"""Published when a missing stack was forced into existence. Params: window_id"""

WINDOW_MOVED = "layout.window_moved"
"""Published after a window was warped into a region. Params: window_id, region"""

# Focus notifications

FOCUS_CHANGED = "focus.changed"
"""Published when a focus command was issued. Params: window_id (or None)"""
