"""
Shared pytest fixtures for ymaster tests.
"""

from dataclasses import dataclass
from typing import List

import pytest
from pubsub import pub

from ymaster.protocol import Frame, Space, Split, Window
from ymaster.snapshot import Snapshot
from ymaster.state import SpaceState, StateStore


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without yabai")


def make_window(
    window_id, x, y, w, h, split="vertical", focused=False, app=None, pid=None
):
    """Build a tileable window with the given frame."""
    return Window(
        id=window_id,
        pid=pid if pid is not None else 1000 + window_id,
        app=app or f"app{window_id}",
        frame=Frame(x, y, w, h),
        split=Split(split),
        focused=focused,
        space=1,
        display=1,
    )


@pytest.fixture
def window():
    """Factory fixture for creating windows."""
    return make_window


@pytest.fixture
def bus():
    """The global Pypubsub bus, with subscriptions cleared around each test."""
    pub.unsubAll()
    yield pub
    pub.unsubAll()


class ScriptedYabai:
    """
    Fake yabai client replaying prepared snapshots.

    Every mutating command advances to the next scripted snapshot; once
    the script runs out, commands leave the windows where they are.
    """

    def __init__(self, windows: List[Window], script=(), space_id: int = 1):
        self.snapshot = Snapshot.from_windows(windows)
        self.script = [Snapshot.from_windows(step) for step in script]
        self.space_id = space_id
        self.commands = []
        self.space_queries = 0
        self.window_queries = 0

    def _advance(self):
        if self.script:
            self.snapshot = self.script.pop(0)

    def query_windows(self):
        self.window_queries += 1
        return self.snapshot

    def query_focused_space(self):
        self.space_queries += 1
        return Space(id=self.space_id, index=1, focused=True)

    def query_spaces(self):
        return [self.query_focused_space()]

    def toggle_split(self, window_id):
        self.commands.append(("toggle", window_id))
        self._advance()

    def warp(self, window_id, target_id):
        self.commands.append(("warp", window_id, target_id))
        self._advance()

    def swap(self, window_id, target):
        self.commands.append(("swap", window_id, target))
        self._advance()

    def focus_window(self, window_id):
        self.commands.append(("focus", window_id))

    def focus_direction(self, direction):
        self.commands.append(("focus", direction))


@dataclass
class _Tile:
    id: int
    x: int
    y: int
    w: int
    h: int
    split: Split
    focused: bool


class ColumnYabai(ScriptedYabai):
    """
    Fake yabai client keeping windows in fixed x-columns.

    Warping a window puts it in the target's column right below the
    target, and both affected columns are re-tiled top to bottom with
    equal heights. Toggling a split only flips the window's split flag.
    """

    def __init__(self, windows: List[Window], height: int = 800, space_id: int = 1):
        super().__init__(windows, space_id=space_id)
        self.height = height
        self.tiles = [
            _Tile(w.id, w.frame.x, w.frame.y, w.frame.w, w.frame.h, w.split, w.focused)
            for w in windows
        ]

    def _tile(self, window_id):
        return next(t for t in self.tiles if t.id == window_id)

    def _column(self, x):
        return sorted((t for t in self.tiles if t.x == x), key=lambda t: t.y)

    def _retile(self, column):
        if not column:
            return
        height = self.height // len(column)
        for i, tile in enumerate(column):
            tile.y = i * height
            tile.h = height if i < len(column) - 1 else self.height - i * height

    def query_windows(self):
        self.window_queries += 1
        return Snapshot.from_windows(
            Window(
                id=t.id,
                pid=1000 + t.id,
                app=f"app{t.id}",
                frame=Frame(t.x, t.y, t.w, t.h),
                split=t.split,
                focused=t.focused,
                space=1,
                display=1,
            )
            for t in self.tiles
        )

    def toggle_split(self, window_id):
        self.commands.append(("toggle", window_id))
        tile = self._tile(window_id)
        if tile.split is Split.VERTICAL:
            tile.split = Split.HORIZONTAL
        else:
            tile.split = Split.VERTICAL

    def warp(self, window_id, target_id):
        self.commands.append(("warp", window_id, target_id))
        moving = self._tile(window_id)
        target = self._tile(target_id)
        source_x = moving.x

        column = [t for t in self._column(target.x) if t.id != window_id]
        column.insert(column.index(target) + 1, moving)
        moving.x, moving.w = target.x, target.w

        self._retile(column)
        if source_x != target.x:
            self._retile(self._column(source_x))

    def swap(self, window_id, target):
        self.commands.append(("swap", window_id, target))
        if isinstance(target, int):
            a, b = self._tile(window_id), self._tile(target)
            a.x, b.x = b.x, a.x
            a.y, b.y = b.y, a.y
            a.w, b.w = b.w, a.w
            a.h, b.h = b.h, a.h


@pytest.fixture
def scripted_yabai():
    """Factory fixture for ScriptedYabai."""
    return ScriptedYabai


@pytest.fixture
def column_yabai():
    """Factory fixture for ColumnYabai."""
    return ColumnYabai


@pytest.fixture
def store(tmp_path):
    """State store for space 1 holding one master window."""
    store = StateStore(tmp_path / "state.json")
    store.write({"1": SpaceState(1)})
    return store


@pytest.fixture
def stack_and_master(window):
    """Two stack windows on the left, one master window on the right."""
    return [
        window(1, 0, 0, 640, 400, split="horizontal"),
        window(2, 0, 400, 640, 400, split="horizontal"),
        window(3, 640, 0, 640, 800),
    ]
