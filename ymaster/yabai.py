"""
yabai Client

Thin wrapper around the ``yabai -m`` command line. Queries come back as
protocol objects; mutations are fire-and-forget and the caller is
responsible for taking a new snapshot before deciding anything else.
"""

from __future__ import annotations
import json
import logging
import subprocess
from typing import Any, List, Union

from .errors import YabaiCommandError
from .protocol import Direction, Display, Space
from .snapshot import Snapshot

log = logging.getLogger(__name__)


class YabaiClient:
    """Runs yabai commands synchronously, one at a time."""

    def __init__(self, yabai_path: str = "yabai"):
        """Initialize the client.

        Args:
            yabai_path: Path to (or name of) the yabai executable
        """
        self.yabai_path = yabai_path

    def run(self, *args: str) -> str:
        """Run ``yabai -m <args>`` and return its stdout.

        Raises:
            YabaiCommandError: if yabai cannot be started or exits non-zero
        """
        argv = [self.yabai_path, "-m", *args]
        log.debug("Running %s", " ".join(argv))
        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as e:
            raise YabaiCommandError(argv, None, str(e)) from e

        if result.returncode != 0:
            raise YabaiCommandError(argv, result.returncode, result.stderr)
        return result.stdout

    def _query(self, *args: str) -> Any:
        output = self.run("query", *args)
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise YabaiCommandError(
                [self.yabai_path, "-m", "query", *args], 0, f"invalid JSON: {e}"
            ) from e

    # Queries

    def query_windows(self) -> Snapshot:
        """Snapshot of the tileable windows on the focused space."""
        return Snapshot.from_yabai(self._query("--windows", "--space"))

    def query_spaces(self) -> List[Space]:
        return [Space.from_yabai(entry) for entry in self._query("--spaces")]

    def query_focused_space(self) -> Space:
        return Space.from_yabai(self._query("--spaces", "--space"))

    def query_displays(self) -> List[Display]:
        return [Display.from_yabai(entry) for entry in self._query("--displays")]

    def query_focused_display(self) -> Display:
        return Display.from_yabai(self._query("--displays", "--display"))

    # Mutations

    def toggle_split(self, window_id: int):
        self.run("window", str(window_id), "--toggle", "split")

    def warp(self, window_id: int, target_id: int):
        """Move a window into the container of another window."""
        self.run("window", str(window_id), "--warp", str(target_id))

    def swap(self, window_id: int, target: Union[int, Direction]):
        self.run("window", str(window_id), "--swap", _target(target))

    def focus_window(self, window_id: int):
        self.run("window", "--focus", str(window_id))

    def focus_direction(self, direction: Direction):
        self.run("window", "--focus", direction.value)


def _target(target: Union[int, Direction]) -> str:
    if isinstance(target, Direction):
        return target.value
    return str(target)
