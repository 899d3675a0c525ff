"""
ymaster

A dwm-style master/stack layout for the yabai tiling window manager.

yabai only knows about binary space partitioning. ymaster is run from
yabai signals and keybindings, works out which windows form the master
and stack regions from their geometry alone, and warps windows around
until the layout has the requested number of master windows.

This package provides:
- yabai query types and a command-line client
- Geometry classification of master, stack and middle windows
- The rebalancer that repairs drift after BSP rebalancing
- A cross-process handler lock
- Focus and move commands that wrap between master and stack

Example yabai configuration:
    yabai -m signal --add event=window_created action="ymaster on-window-created"
    yabai -m signal --add event=window_moved action="ymaster on-window-moved"
    ymaster on-yabai-start  # last line of yabairc

Or run directly:
    python -m ymaster focus-down
"""

__version__ = "0.1.0"

from .protocol import (
    Split,
    Direction,
    Region,
    Frame,
    Window,
    Space,
    Display,
)

from .snapshot import Snapshot

from .errors import (
    YMasterError,
    LockedError,
    WindowNotFoundError,
    LayoutInvariantError,
    YabaiCommandError,
    StateError,
)

from .layouts import (
    LayoutRebalancer,
    LayoutValidity,
    dividing_line_x,
    is_valid_layout,
)

from .handler_lock import HandlerLock, install_exit_hooks
from .state import StateStore, SpaceState
from .yabai import YabaiClient

from .app import YMaster, YMasterConfig, main

from . import topics

__all__ = [
    # Version
    "__version__",
    # Protocol types
    "Split",
    "Direction",
    "Region",
    "Frame",
    "Window",
    "Space",
    "Display",
    "Snapshot",
    # Errors
    "YMasterError",
    "LockedError",
    "WindowNotFoundError",
    "LayoutInvariantError",
    "YabaiCommandError",
    "StateError",
    # Layouts
    "LayoutRebalancer",
    "LayoutValidity",
    "dividing_line_x",
    "is_valid_layout",
    # Infrastructure
    "HandlerLock",
    "install_exit_hooks",
    "StateStore",
    "SpaceState",
    "YabaiClient",
    # Application
    "YMaster",
    "YMasterConfig",
    "main",
    # Event topics
    "topics",
]
