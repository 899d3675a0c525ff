"""
Exceptions raised by ymaster.

Everything a handler can fail with derives from YMasterError so the
command-line entry point can tell expected contention apart from real
failures.
"""

from __future__ import annotations
from typing import Optional, Sequence


class YMasterError(Exception):
    """Base class for ymaster errors."""


class LockedError(YMasterError):
    """Another invocation already holds the handler lock."""

    code = "ELOCKED"

    def __init__(self, path):
        super().__init__(f"Handler lock is held: {path}")
        self.path = path


class WindowNotFoundError(YMasterError, LookupError):
    """A window could not be found in the current snapshot."""


class LayoutInvariantError(YMasterError):
    """The rebalancer finished but the layout is still invalid."""

    def __init__(self, reason: Optional[str]):
        super().__init__(
            f"update_windows() ended with an invalid layout; reason: {reason}"
        )
        self.reason = reason


class YabaiCommandError(YMasterError):
    """A yabai invocation failed."""

    def __init__(
        self, argv: Sequence[str], returncode: Optional[int], stderr: str = ""
    ):
        command = " ".join(argv)
        message = f"yabai command failed ({returncode}): {command}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr


class StateError(YMasterError):
    """The target-count store could not be read."""
