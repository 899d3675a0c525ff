"""
Handler Lock

File-based mutual exclusion between ymaster processes. yabai can fire
signals faster than one rebalance finishes; a second process that finds
the lock held gives up at once instead of waiting, and the next yabai
event triggers a fresh pass.

A lock left behind by a crash would silently disable every later
rebalance, so release is wired to normal return, interpreter exit and
termination signals.
"""

from __future__ import annotations
import atexit
import logging
import os
import signal
from pathlib import Path
from typing import Union

from .errors import LockedError

log = logging.getLogger(__name__)

EXIT_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


class HandlerLock:
    """
    Marker file whose existence means a rebalance is in progress.

    The file holds the owner's pid for diagnostics only; presence alone
    decides ownership.
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize the lock.

        Args:
            path: Location of the marker file
        """
        self.path = Path(path)
        self.held = False

    def acquire(self):
        """Create the marker file.

        Raises:
            LockedError: if the marker already exists (never blocks)
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            raise LockedError(self.path) from None

        # Owned as soon as the file exists; exit hooks may fire mid-write
        self.held = True
        try:
            os.write(fd, str(os.getpid()).encode())
        finally:
            os.close(fd)

        log.debug("Acquired handler lock %s", self.path)

    def release(self, force: bool = False):
        """Remove the marker file.

        Without ``force`` only a lock held by this object is removed, so
        it is safe to call from exit hooks whether or not acquire()
        succeeded. ``force`` clears the marker unconditionally, which is
        how a crashed run's stale lock is cleaned up.
        """
        if not (self.held or force):
            return

        try:
            self.path.unlink()
            log.debug("Released handler lock %s", self.path)
        except FileNotFoundError:
            pass
        self.held = False

    def is_locked(self) -> bool:
        return self.path.exists()

    def owner_pid(self) -> int:
        """Pid written by the current holder, or 0 if unknown."""
        try:
            return int(self.path.read_text().strip() or 0)
        except (FileNotFoundError, ValueError):
            return 0

    def __enter__(self) -> "HandlerLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()


def install_exit_hooks(lock: HandlerLock):
    """Release the lock at interpreter exit and on termination signals.

    The signal handler releases the lock and then exits with the
    conventional ``128 + signum`` status, which unwinds ``finally``
    blocks and runs atexit callbacks.
    """
    atexit.register(lock.release)

    def _signal_handler(signum: int, frame: object):
        log.info("Signal %d received, releasing handler lock", signum)
        lock.release()
        raise SystemExit(128 + signum)

    for sig in EXIT_SIGNALS:
        signal.signal(sig, _signal_handler)

    return _signal_handler
