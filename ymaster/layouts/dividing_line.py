"""
Dividing Line Locator

Finds the x-coordinate that separates the stack from the master region.
The line is rediscovered from geometry on every call, never cached.
"""

from __future__ import annotations
import logging
from typing import Iterable

from ..protocol import Window
from .classifier import is_stack_window, top_right_window

log = logging.getLogger(__name__)


def dividing_line_x(windows: Iterable[Window], expected_master_count: int) -> int:
    """
    Locate the line dividing the master windows from the stack windows.

    Two observations drive the search:

    1. The top-right window is always on the master side of the line.
    2. With more than one master window, the line runs along the left
       edge of at least two windows stacked on top of each other.

    Starting from the top-right window, non-stack windows are walked in
    descending x. The first pair sharing an x-coordinate that accounts
    for enough master windows gives the line. When no such pair exists
    (every window sits side by side) the top-right window's x is used.

    Args:
        windows: Snapshot to inspect; must not be empty
        expected_master_count: Number of master windows the layout is
            believed to currently have

    Returns:
        The x-coordinate of the dividing line
    """
    windows = list(windows)
    top_right = top_right_window(windows)
    if top_right is None:
        raise ValueError("Cannot locate the dividing line of an empty snapshot")

    log.debug("Top-right window: %s", top_right.name)

    if expected_master_count == 1:
        return top_right.frame.x

    non_stack = [w for w in windows if not is_stack_window(w)]
    eligible = sorted(
        (w for w in non_stack if w.frame.x <= top_right.frame.x),
        key=lambda w: w.frame.x,
        reverse=True,
    )

    # Already past the top-right window, so already on the master side
    num_right_of_top_right = len(non_stack) - len(eligible)
    if num_right_of_top_right >= expected_master_count:
        return top_right.frame.x

    for i in range(len(eligible) - 1):
        current, following = eligible[i], eligible[i + 1]
        if (
            current.frame.x == following.frame.x
            and num_right_of_top_right + i + 2 >= expected_master_count
        ):
            return current.frame.x

    return top_right.frame.x
