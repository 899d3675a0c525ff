"""
Layout System

Classifies windows into master/stack regions and rebalances yabai's BSP
tree into a master/stack layout.
"""

from .classifier import (
    classify,
    is_stack_window,
    is_master_window,
    is_middle_window,
    stack_windows,
    master_windows,
    middle_windows,
    top_window,
    bottom_window,
    widest_window,
    is_top_window,
    is_bottom_window,
    top_left_window,
    top_right_window,
)
from .dividing_line import dividing_line_x
from .validator import LayoutValidity, VALID, is_valid_layout
from .rebalancer import LayoutRebalancer

__all__ = [
    # Classifier
    "classify",
    "is_stack_window",
    "is_master_window",
    "is_middle_window",
    "stack_windows",
    "master_windows",
    "middle_windows",
    "top_window",
    "bottom_window",
    "widest_window",
    "is_top_window",
    "is_bottom_window",
    "top_left_window",
    "top_right_window",
    # Dividing line
    "dividing_line_x",
    # Validation
    "LayoutValidity",
    "VALID",
    "is_valid_layout",
    # Rebalancing
    "LayoutRebalancer",
]
