"""
Unit tests for the yabai client and the query protocol types.
"""

import json
import subprocess

import pytest
from ymaster import yabai
from ymaster.errors import WindowNotFoundError, YabaiCommandError
from ymaster.protocol import Direction, Frame, Split, Window
from ymaster.snapshot import Snapshot
from ymaster.yabai import YabaiClient

WINDOWS = [
    {
        "id": 101,
        "pid": 501,
        "app": "kitty",
        "title": "zsh",
        "frame": {"x": 0.0, "y": 0.0, "w": 639.5, "h": 800.0},
        "split": "horizontal",
        "has-focus": True,
        "space": 2,
        "display": 1,
    },
    {
        "id": 102,
        "pid": 502,
        "app": "Safari",
        "title": "Start",
        "frame": {"x": 640.0000, "y": 0.0000, "w": 640.0000, "h": 800.0000},
        "split": "vertical",
        "has-focus": False,
        "space": 2,
        "display": 1,
    },
    {
        "id": 103,
        "pid": 503,
        "app": "Finder",
        "title": "",
        "frame": {"x": 100.0, "y": 100.0, "w": 300.0, "h": 200.0},
        "split": "none",
        "has-focus": False,
        "space": 2,
        "display": 1,
    },
]


class FakeRun:
    """Records subprocess.run calls and answers with a canned result."""

    def __init__(self, stdout="", returncode=0, stderr="", error=None):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.error = error
        self.calls = []

    def __call__(self, argv, **kwargs):
        self.calls.append(argv)
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(
            argv, self.returncode, stdout=self.stdout, stderr=self.stderr
        )


@pytest.fixture
def fake_run(monkeypatch):
    def install(**kwargs):
        run = FakeRun(**kwargs)
        monkeypatch.setattr(yabai.subprocess, "run", run)
        return run

    return install


@pytest.mark.unit
class TestProtocol:
    """Test parsing yabai query output."""

    def test_window_from_yabai(self):
        window = Window.from_yabai(WINDOWS[1])

        assert window.id == 102
        assert window.app == "Safari"
        assert window.frame == Frame(640, 0, 640, 800)
        assert window.split is Split.VERTICAL
        assert not window.focused
        assert window.is_tileable

    def test_frames_are_rounded(self):
        assert Window.from_yabai(WINDOWS[0]).frame.w == 640

    def test_legacy_focused_field(self):
        data = dict(WINDOWS[0])
        del data["has-focus"]
        data["focused"] = 1

        assert Window.from_yabai(data).focused

    def test_split_type_field(self):
        data = {
            "id": 7,
            "frame": {"x": 0.0, "y": 0.0, "w": 640.0, "h": 800.0},
            "split-type": "vertical",
            "has-focus": True,
        }

        window = Window.from_yabai(data)

        assert window.split is Split.VERTICAL
        assert window.is_tileable
        assert len(Snapshot.from_yabai([data])) == 1

    def test_split_type_wins_over_legacy_split(self):
        data = dict(WINDOWS[0], **{"split-type": "vertical"})

        assert Window.from_yabai(data).split is Split.VERTICAL

    def test_unknown_split_is_not_tileable(self):
        data = dict(WINDOWS[0], split="sideways")

        assert Window.from_yabai(data).split is Split.NONE

    def test_snapshot_drops_floating_windows(self):
        snapshot = Snapshot.from_yabai(WINDOWS)

        assert [w.id for w in snapshot] == [101, 102]
        assert snapshot.focused_window().id == 101

    def test_snapshot_find(self):
        snapshot = Snapshot.from_yabai(WINDOWS)

        assert snapshot.find(window_id=102).app == "Safari"
        assert snapshot.find(pid=501).id == 101
        assert snapshot.get(999) is None

        with pytest.raises(WindowNotFoundError, match="Window with id 999 not found."):
            snapshot.find(window_id=999)
        with pytest.raises(ValueError):
            snapshot.find()


@pytest.mark.unit
class TestYabaiClient:
    """Test the yabai command line wrapper."""

    def test_query_windows(self, fake_run):
        run = fake_run(stdout=json.dumps(WINDOWS))

        snapshot = YabaiClient().query_windows()

        assert run.calls == [["yabai", "-m", "query", "--windows", "--space"]]
        assert len(snapshot) == 2

    def test_query_focused_space(self, fake_run):
        fake_run(
            stdout=json.dumps(
                {"id": 7, "index": 2, "display": 1, "windows": [101, 102], "has-focus": True}
            )
        )

        space = YabaiClient().query_focused_space()

        assert space.id == 7
        assert space.windows == (101, 102)
        assert space.focused

    def test_query_spaces(self, fake_run):
        fake_run(stdout=json.dumps([{"id": 1, "index": 1}, {"id": 4, "index": 2}]))

        assert [s.id for s in YabaiClient().query_spaces()] == [1, 4]

    def test_query_focused_display(self, fake_run):
        fake_run(
            stdout=json.dumps(
                {
                    "id": 1,
                    "index": 1,
                    "frame": {"x": 0, "y": 0, "w": 1440.0, "h": 900.0},
                    "spaces": [1, 2],
                }
            )
        )

        display = YabaiClient().query_focused_display()

        assert display.frame == Frame(0, 0, 1440, 900)
        assert display.spaces == (1, 2)

    @pytest.mark.parametrize(
        "call, argv",
        [
            (lambda c: c.toggle_split(5), ["window", "5", "--toggle", "split"]),
            (lambda c: c.warp(5, 6), ["window", "5", "--warp", "6"]),
            (lambda c: c.swap(5, 6), ["window", "5", "--swap", "6"]),
            (lambda c: c.swap(5, Direction.SOUTH), ["window", "5", "--swap", "south"]),
            (lambda c: c.focus_window(5), ["window", "--focus", "5"]),
            (lambda c: c.focus_direction(Direction.FIRST), ["window", "--focus", "first"]),
        ],
    )
    def test_commands(self, fake_run, call, argv):
        run = fake_run()

        call(YabaiClient("/opt/bin/yabai"))

        assert run.calls == [["/opt/bin/yabai", "-m", *argv]]

    def test_non_zero_exit(self, fake_run):
        fake_run(returncode=1, stderr="could not locate window\n")

        with pytest.raises(YabaiCommandError) as excinfo:
            YabaiClient().warp(1, 2)

        assert excinfo.value.returncode == 1
        assert "could not locate window" in str(excinfo.value)

    def test_missing_executable(self, fake_run):
        fake_run(error=FileNotFoundError("yabai"))

        with pytest.raises(YabaiCommandError) as excinfo:
            YabaiClient().query_windows()

        assert excinfo.value.returncode is None

    def test_invalid_json(self, fake_run):
        fake_run(stdout="not json")

        with pytest.raises(YabaiCommandError):
            YabaiClient().query_spaces()
