"""
Master Count State

Persists the target number of master windows for every space in a JSON
file. The file format is::

    {"<space id>": {"numMasterWindows": 1}, ...}
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, TYPE_CHECKING, Union

from .errors import StateError

if TYPE_CHECKING:
    from .yabai import YabaiClient

log = logging.getLogger(__name__)

DEFAULT_NUM_MASTER_WINDOWS = 1


@dataclass
class SpaceState:
    """Stored layout settings of one space."""

    num_master_windows: int = DEFAULT_NUM_MASTER_WINDOWS

    def to_json(self) -> dict:
        return {"numMasterWindows": self.num_master_windows}

    @classmethod
    def from_json(cls, data: dict) -> "SpaceState":
        return cls(num_master_windows=int(data["numMasterWindows"]))


State = Dict[str, SpaceState]


class StateStore:
    """Reads and writes the per-space master counts."""

    def __init__(self, path: Union[str, Path], client: Optional["YabaiClient"] = None):
        """Initialize the store.

        Args:
            path: Location of the state file
            client: yabai client used to list spaces when seeding a new file
        """
        self.path = Path(path)
        self.client = client

    def read(self) -> State:
        """Load the state, seeding a default file when there is none.

        Raises:
            StateError: if the file exists but cannot be parsed
        """
        if not self.path.exists():
            return self._seed()

        try:
            data = json.loads(self.path.read_text())
            return {
                str(space_id): SpaceState.from_json(entry)
                for space_id, entry in data.items()
            }
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StateError(f"Cannot read state file {self.path}: {e}") from e

    def write(self, state: State):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {space_id: entry.to_json() for space_id, entry in state.items()}
        self.path.write_text(json.dumps(data))

    def target_for(self, space_id: Union[int, str]) -> int:
        """Stored master count of a space, 1 when the space has no record."""
        entry = self.read().get(str(space_id))
        if entry is None:
            return DEFAULT_NUM_MASTER_WINDOWS
        return entry.num_master_windows

    def set_target(self, space_id: Union[int, str], num_master_windows: int):
        state = self.read()
        state[str(space_id)] = SpaceState(num_master_windows)
        self.write(state)
        log.debug("Stored %d master window(s) for space %s", num_master_windows, space_id)

    def _seed(self) -> State:
        state: State = {}
        if self.client is not None:
            for space in self.client.query_spaces():
                state[str(space.id)] = SpaceState()
        self.write(state)
        log.info("Created state file %s", self.path)
        return state
