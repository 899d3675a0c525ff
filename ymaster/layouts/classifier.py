"""
Geometry Classifier

Pure functions that sort the windows of a snapshot into master, stack and
middle regions. yabai has no notion of either region, so membership is
read off the window frames every time.

Stack windows hug the left edge of the screen. Master windows sit at or
right of the dividing line. Anything in between is a middle window, the
trace left behind when BSP rebalancing drags a window out of place.
"""

from __future__ import annotations
from typing import Iterable, List, Optional

from ..protocol import Region, Window


def is_stack_window(window: Window) -> bool:
    return window.frame.x == 0


def is_master_window(window: Window, dividing_line_x: int) -> bool:
    return window.frame.x >= dividing_line_x


def is_middle_window(window: Window, dividing_line_x: int) -> bool:
    return not is_stack_window(window) and not is_master_window(
        window, dividing_line_x
    )


def classify(window: Window, dividing_line_x: int) -> Region:
    """Classify a window into exactly one region.

    Master wins over stack so that a single full-width window (x == 0 and
    a dividing line of 0) counts as the master window.
    """
    if is_master_window(window, dividing_line_x):
        return Region.MASTER
    if is_stack_window(window):
        return Region.STACK
    return Region.MIDDLE


def stack_windows(windows: Iterable[Window]) -> List[Window]:
    return [w for w in windows if is_stack_window(w)]


def master_windows(windows: Iterable[Window], dividing_line_x: int) -> List[Window]:
    return [w for w in windows if is_master_window(w, dividing_line_x)]


def middle_windows(windows: Iterable[Window], dividing_line_x: int) -> List[Window]:
    return [w for w in windows if is_middle_window(w, dividing_line_x)]


def top_window(windows: Iterable[Window]) -> Optional[Window]:
    """Window with the lowest y; the first one wins ties."""
    top = None
    for window in windows:
        if top is None or window.frame.y < top.frame.y:
            top = window
    return top


def bottom_window(windows: Iterable[Window]) -> Optional[Window]:
    """Window with the greatest y; the first one wins ties."""
    bottom = None
    for window in windows:
        if bottom is None or window.frame.y > bottom.frame.y:
            bottom = window
    return bottom


def widest_window(windows: Iterable[Window]) -> Optional[Window]:
    widest = None
    for window in windows:
        if widest is None or window.frame.w > widest.frame.w:
            widest = window
    return widest


def is_top_window(windows: Iterable[Window], window: Window) -> bool:
    top = top_window(windows)
    return top is not None and top.id == window.id


def is_bottom_window(windows: Iterable[Window], window: Window) -> bool:
    bottom = bottom_window(windows)
    return bottom is not None and bottom.id == window.id


def top_left_window(windows: Iterable[Window]) -> Optional[Window]:
    """Highest window touching the left edge of the screen."""
    return top_window(stack_windows(windows))


def top_right_window(windows: Iterable[Window]) -> Optional[Window]:
    """Rightmost window among those sharing the lowest y."""
    windows = list(windows)
    if not windows:
        return None

    lowest_y = min(w.frame.y for w in windows)
    top_right = None
    for window in windows:
        if window.frame.y != lowest_y:
            continue
        if top_right is None or window.frame.x > top_right.frame.x:
            top_right = window
    return top_right
