"""Workspace state ownership and persistence.

The application has one piece of shared mutable state: the currently selected
workspace root. ``WorkspaceState`` owns it behind a single lock, and
``StateStore`` loads/saves it as a small JSON file.
"""

import dataclasses
import json
import os
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from . import PetPrintError


class StateError(PetPrintError):
    """Raised when the workspace state file cannot be written."""
    pass


@dataclass
class AppState:
    """Persisted application state.

    Attributes:
        workspace: Absolute path of the workspace root folder, if one was chosen
    """
    workspace: Optional[str] = None

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AppState":
        workspace = data.get("workspace")
        if workspace is not None and not isinstance(workspace, str):
            raise ValueError(f"Invalid workspace value: {workspace!r}")
        return cls(workspace=workspace)


class WorkspaceState:
    """Lock-guarded owner of the process-wide ``AppState``."""

    def __init__(self, initial: Optional[AppState] = None) -> None:
        self._lock = threading.Lock()
        self._state = initial or AppState()

    def get(self) -> AppState:
        """Return a copy of the current state."""
        with self._lock:
            return dataclasses.replace(self._state)

    def set(self, state: AppState) -> None:
        """Replace the current state."""
        with self._lock:
            self._state = dataclasses.replace(state)

    def update(self, change: Callable[[AppState], AppState],
               persist: Optional[Callable[[AppState], None]] = None) -> AppState:
        """Apply ``change`` and ``persist`` as one atomic step.

        The lock is held across reading the old state, computing the new one
        and persisting it, so two concurrent updates cannot interleave their
        writes to disk. If ``persist`` raises, the in-memory state is left
        unchanged and the error propagates.

        Args:
            change: Function returning the new state from the current one
            persist: Optional function that stores the new state

        Returns:
            A copy of the new state
        """
        with self._lock:
            new_state = change(dataclasses.replace(self._state))
            if persist is not None:
                persist(new_state)
            self._state = new_state
            return dataclasses.replace(new_state)


class StateStore:
    """JSON file persistence for ``AppState``."""

    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> Optional[AppState]:
        """Load state from disk.

        Returns:
            The stored state, or None if the file is missing, empty or invalid
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError:
            return None

        if not content.strip():
            return None

        try:
            return AppState.from_dict(json.loads(content))
        except (ValueError, AttributeError):
            return None

    def save(self, state: AppState) -> None:
        """Write state to disk, creating the parent directory if needed.

        Raises:
            StateError: If the file cannot be written
        """
        try:
            state_dir = os.path.dirname(self.path)
            if state_dir:
                os.makedirs(state_dir, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(state.to_dict(), f)
        except OSError as e:
            raise StateError(f"Failed to save workspace state to {self.path}: {e}") from e
