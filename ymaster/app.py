"""
ymaster Application

Short-lived process started by yabai signals and keybindings. Each run
takes the handler lock, publishes one command on the event bus and exits.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from pubsub import pub

from . import topics
from .errors import LockedError, YMasterError
from .focus_manager import FocusManager
from .handler_lock import HandlerLock, install_exit_hooks
from .layout_controller import LayoutController
from .state import StateStore
from .window_controller import WindowController
from .yabai import YabaiClient

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_LOCKED = 75  # EX_TEMPFAIL


def _default_lock_path() -> Path:
    return Path(tempfile.gettempdir()) / "ymaster" / "handler.lock"


def _default_state_path() -> Path:
    state_home = os.getenv("XDG_STATE_HOME") or Path.home() / ".local" / "state"
    return Path(state_home) / "ymaster" / "state.json"


@dataclass
class YMasterConfig:
    """ymaster configuration."""

    # Path to the yabai executable
    yabai_path: str = "yabai"

    # Log every command and bus event
    debug: bool = False

    # Marker file guarding one rebalance at a time
    lock_path: Union[str, Path] = field(default_factory=_default_lock_path)

    # Per-space master counts
    state_path: Union[str, Path] = field(default_factory=_default_state_path)

    def __post_init__(self):
        """Normalise paths."""
        self.lock_path = Path(self.lock_path).expanduser()
        self.state_path = Path(self.state_path).expanduser()

    @classmethod
    def from_env(cls, environ=None) -> "YMasterConfig":
        """Build the configuration from environment variables."""
        environ = os.environ if environ is None else environ
        kwargs = {
            "yabai_path": environ.get("YABAI_PATH", "yabai"),
            "debug": (environ.get("YMASTER_DEBUG") or environ.get("DEBUG")) == "1",
        }
        if environ.get("YMASTER_LOCK_PATH"):
            kwargs["lock_path"] = environ["YMASTER_LOCK_PATH"]
        if environ.get("YMASTER_STATE_PATH"):
            kwargs["state_path"] = environ["YMASTER_STATE_PATH"]
        return cls(**kwargs)


def setup_logging(debug: bool = False):
    """Configure logging for one ymaster run."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S"
        )
    )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    root.addHandler(handler)


class YMaster:
    """
    ymaster application

    Wires the components to the event bus and runs one command under the
    handler lock.
    """

    def __init__(
        self,
        config: Optional[YMasterConfig] = None,
        client: Optional[YabaiClient] = None,
        bus=pub,
    ):
        """Initialize ymaster.

        Architecture:
        1. Create the yabai client, state store and handler lock
        2. Create components - they self-subscribe to events
        3. Publish one command per run
        """
        self.config = config or YMasterConfig()
        self.bus = bus
        self.client = client or YabaiClient(self.config.yabai_path)
        self.store = StateStore(self.config.state_path, client=self.client)
        self.lock = HandlerLock(self.config.lock_path)

        if self.config.debug:
            self.bus.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self.layout_controller = LayoutController(
            bus=self.bus, client=self.client, store=self.store
        )
        self.focus_manager = FocusManager(
            bus=self.bus, client=self.client, store=self.store
        )
        self.window_controller = WindowController(
            bus=self.bus, client=self.client, store=self.store
        )

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        log.debug("EVENT: %s | %s", topic.getName(), data_str)

    def run(self, command_topic: str):
        """Publish a command while holding the handler lock.

        Raises:
            LockedError: if another run holds the lock
        """
        with self.lock:
            self.bus.sendMessage(command_topic)

    def on_yabai_start(self):
        """Clear a lock left behind by a crashed run, then rebalance."""
        self.lock.release(force=True)
        self.run(topics.CMD_UPDATE_LAYOUT)


# Sub-command name -> command topic
COMMANDS = {
    "on-window-created": topics.CMD_UPDATE_LAYOUT,
    "on-window-moved": topics.CMD_UPDATE_LAYOUT,
    "focus-down": topics.CMD_FOCUS_DOWN,
    "focus-up": topics.CMD_FOCUS_UP,
    "move-down": topics.CMD_MOVE_DOWN,
    "move-up": topics.CMD_MOVE_UP,
    "increase-master": topics.CMD_INCREASE_MASTER,
    "decrease-master": topics.CMD_DECREASE_MASTER,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ymaster", description="Master/stack layout for yabai"
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("on-yabai-start", help="yabai started; rebalance")
    for name in ("on-window-created", "on-window-moved"):
        sub = subparsers.add_parser(name, help="yabai signal; rebalance")
        sub.add_argument("window_id", nargs="?", type=int)
    for name in COMMANDS:
        if not name.startswith("on-"):
            subparsers.add_parser(name)
    return parser


def handle_master_error(error: YMasterError) -> int:
    """Log an error that ended a run and map it to an exit code."""
    if isinstance(error, LockedError):
        log.info("Lock found...aborting")
        return EXIT_LOCKED
    log.error("%s", error, exc_info=error)
    return EXIT_FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config = YMasterConfig.from_env()
    if args.debug:
        config.debug = True
    setup_logging(config.debug)

    app = YMaster(config)
    install_exit_hooks(app.lock)

    if getattr(args, "window_id", None) is not None:
        log.debug("%s for window %d", args.command, args.window_id)

    try:
        if args.command == "on-yabai-start":
            app.on_yabai_start()
        else:
            app.run(COMMANDS[args.command])
    except YMasterError as e:
        return handle_master_error(e)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
