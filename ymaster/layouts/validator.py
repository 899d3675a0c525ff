"""
Layout Validator

Checks whether a snapshot already is the master/stack layout the user
asked for.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..protocol import Window
from .classifier import is_middle_window, master_windows
from .dividing_line import dividing_line_x

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutValidity:
    """Outcome of a layout check. ``reason`` is for logging only."""

    status: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.status


VALID = LayoutValidity(True)


def is_valid_layout(
    windows: Iterable[Window],
    target_master_count: int,
    expected_master_count: Optional[int] = None,
) -> LayoutValidity:
    """
    Validate a snapshot against a target number of master windows.

    The layout is valid when exactly ``target_master_count`` windows are
    master windows and no window is left in the middle.

    Args:
        windows: Snapshot to check
        target_master_count: Number of master windows wanted
        expected_master_count: Number of master windows the layout is
            believed to have right now, used to locate the dividing line.
            Defaults to the target.

    Returns:
        VALID, or an invalid LayoutValidity carrying the reason
    """
    windows = list(windows)
    if expected_master_count is None:
        expected_master_count = target_master_count

    log.debug("Starting valid layout check...")
    if not windows:
        if target_master_count == 0:
            return VALID
        return LayoutValidity(False, "No tileable windows on the space")

    line_x = dividing_line_x(windows, expected_master_count)
    num_master = len(master_windows(windows, line_x))
    if num_master != target_master_count:
        return LayoutValidity(
            False,
            "Number of master windows does not equal expected number of master "
            f"windows ({num_master}/{target_master_count})",
        )

    for window in windows:
        if is_middle_window(window, line_x):
            return LayoutValidity(
                False, f"A middle window ({window.name}) was detected."
            )

    return VALID
