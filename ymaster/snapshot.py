"""
Window Snapshot

An ordered, immutable view of the tileable windows on a space, taken at
one instant. Any move or toggle makes a snapshot stale; callers re-query
instead of patching geometry in place.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from .errors import WindowNotFoundError
from .protocol import Window


@dataclass(frozen=True)
class Snapshot:
    """Tileable windows in the order yabai reported them."""

    windows: Tuple[Window, ...] = ()

    @classmethod
    def from_windows(cls, windows: Iterable[Window]) -> "Snapshot":
        """Build a snapshot, dropping windows yabai does not tile."""
        return cls(tuple(w for w in windows if w.is_tileable))

    @classmethod
    def from_yabai(cls, data: Iterable[Dict[str, Any]]) -> "Snapshot":
        return cls.from_windows(Window.from_yabai(entry) for entry in data)

    def __iter__(self) -> Iterator[Window]:
        return iter(self.windows)

    def __len__(self) -> int:
        return len(self.windows)

    def __contains__(self, window: object) -> bool:
        if not isinstance(window, Window):
            return False
        return any(w.id == window.id for w in self.windows)

    def get(self, window_id: int) -> Optional[Window]:
        """Get a window by id, or None."""
        for window in self.windows:
            if window.id == window_id:
                return window
        return None

    def find(
        self, window_id: Optional[int] = None, pid: Optional[int] = None
    ) -> Window:
        """Find a window by id or owning process id.

        Raises:
            ValueError: if neither window_id nor pid is given
            WindowNotFoundError: if no window matches
        """
        if window_id is None and pid is None:
            raise ValueError("Must provide at least one of pid or window_id")

        for window in self.windows:
            if window.pid == pid or window.id == window_id:
                return window

        if pid is not None:
            raise WindowNotFoundError(f"Window with pid {pid} not found.")
        raise WindowNotFoundError(f"Window with id {window_id} not found.")

    def refreshed(self, window: Window) -> Window:
        """Return this snapshot's copy of a window taken from an older one."""
        return self.find(window_id=window.id)

    def focused_window(self) -> Optional[Window]:
        for window in self.windows:
            if window.focused:
                return window
        return None
