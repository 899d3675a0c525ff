"""
yabai Query Protocol Types

Value types for the JSON documents returned by ``yabai -m query``.
All types are immutable; a fresh query always produces fresh objects.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class Split(Enum):
    """Split orientation of a window's parent node."""

    NONE = "none"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: Any) -> "Split":
        """Parse a yabai split value, treating unknown values as NONE."""
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


class Direction(Enum):
    """Targets accepted by ``--focus`` and ``--swap`` besides a window id."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    FIRST = "first"
    LAST = "last"


class Region(Enum):
    """Region a window belongs to in the master/stack layout."""

    MASTER = "master"
    STACK = "stack"
    MIDDLE = "middle"


def _px(value: Any) -> int:
    # yabai reports frames as floats (e.g. 640.0000)
    return int(round(float(value)))


@dataclass(frozen=True)
class Frame:
    """Window frame in screen-relative integer pixels."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    @classmethod
    def from_yabai(cls, data: Dict[str, Any]) -> "Frame":
        return cls(
            x=_px(data.get("x", 0)),
            y=_px(data.get("y", 0)),
            w=_px(data.get("w", 0)),
            h=_px(data.get("h", 0)),
        )


@dataclass(frozen=True)
class Window:
    """A window known to yabai.

    Region membership is never stored here; it is derived from ``frame``
    against the dividing line of the snapshot the window came from.
    """

    id: int
    pid: int = 0
    app: str = ""
    title: str = ""
    frame: Frame = field(default_factory=Frame)
    split: Split = Split.NONE
    focused: bool = False
    space: int = 0
    display: int = 0

    @property
    def name(self) -> str:
        """Display name used in log messages."""
        return self.app or self.title or str(self.id)

    @property
    def is_tileable(self) -> bool:
        return self.split is not Split.NONE

    @classmethod
    def from_yabai(cls, data: Dict[str, Any]) -> "Window":
        """Build a Window from one entry of ``query --windows``.

        yabai 4 reports focus as the boolean ``has-focus`` and the split as
        ``split-type``; older releases used an integer ``focused`` field
        and ``split``.
        """
        if "has-focus" in data:
            focused = bool(data["has-focus"])
        else:
            focused = bool(data.get("focused", 0))
        split = data.get("split-type", data.get("split", "none"))

        return cls(
            id=int(data["id"]),
            pid=int(data.get("pid", 0)),
            app=data.get("app", ""),
            title=data.get("title", ""),
            frame=Frame.from_yabai(data.get("frame", {})),
            split=Split.parse(split),
            focused=focused,
            space=int(data.get("space", 0)),
            display=int(data.get("display", 0)),
        )


@dataclass(frozen=True)
class Space:
    """A yabai space (virtual desktop)."""

    id: int
    index: int = 0
    label: str = ""
    display: int = 0
    windows: Tuple[int, ...] = ()
    focused: bool = False

    @classmethod
    def from_yabai(cls, data: Dict[str, Any]) -> "Space":
        if "has-focus" in data:
            focused = bool(data["has-focus"])
        else:
            focused = bool(data.get("focused", 0))

        return cls(
            id=int(data["id"]),
            index=int(data.get("index", 0)),
            label=data.get("label", ""),
            display=int(data.get("display", 0)),
            windows=tuple(int(w) for w in data.get("windows", [])),
            focused=focused,
        )


@dataclass(frozen=True)
class Display:
    """A physical display."""

    id: int
    index: int = 0
    frame: Frame = field(default_factory=Frame)
    spaces: Tuple[int, ...] = ()

    @classmethod
    def from_yabai(cls, data: Dict[str, Any]) -> "Display":
        return cls(
            id=int(data["id"]),
            index=int(data.get("index", 0)),
            frame=Frame.from_yabai(data.get("frame", {})),
            spaces=tuple(int(s) for s in data.get("spaces", [])),
        )
