"""Workspace selection and re-scanning driven by events."""

import dataclasses
from typing import Callable, List, Optional

from petprint import PetPrint, PetPrintError
from petprint.events import (
    EventBus,
    FOLDER_CHOSEN,
    FOLDER_PROCESSED,
    STATE_LOADED,
    STATE_UPDATED,
)
from petprint.state import AppState, StateError, StateStore, WorkspaceState
from .indexer import ScanError, ScanResult, scan_folder


class WorkspaceError(PetPrintError):
    """Raised when an operation needs a workspace and none is set."""
    pass


class Workspace:
    """Owns the workspace root and turns folder events into scan batches.

    Every scan result is emitted on the bus as FOLDER_PROCESSED with the
    ScanResult as payload. Scans triggered by events log their errors;
    ``trigger_scan`` raises them to the caller.
    """

    def __init__(self, bus: EventBus,
                 state: Optional[WorkspaceState] = None,
                 store: Optional[StateStore] = None,
                 scanner: Callable[[str], ScanResult] = scan_folder) -> None:
        self.bus = bus
        self.state = state or WorkspaceState()
        self.store = store or StateStore(PetPrint.state_path())
        self.scanner = scanner
        self._unsubscribe: List[Callable[[], None]] = []

    def start(self) -> None:
        """Subscribe to workspace events and load the persisted state."""
        for event in (STATE_LOADED, STATE_UPDATED):
            self._unsubscribe.append(self.bus.listen(event, self._on_state_changed))
        self._unsubscribe.append(self.bus.listen(FOLDER_CHOSEN, self.folder_chosen))

        if self.load_state() is not None:
            self.bus.emit(STATE_LOADED)

    def load_state(self) -> Optional[AppState]:
        """Replace the in-memory state with the persisted one, if any."""
        loaded = self.store.load()
        if loaded is not None:
            self.state.set(loaded)
        return loaded

    def stop(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def workspace_root(self) -> str:
        """Current root folder.

        Raises:
            WorkspaceError: If no workspace has been selected
        """
        root = self.state.get().workspace
        if root is None:
            raise WorkspaceError("No workspace set")
        return root

    def folder_chosen(self, path: str) -> bool:
        """Make ``path`` the workspace root and persist it.

        The state change and the save happen under one lock. STATE_UPDATED
        is emitted only when the save succeeded.

        Returns:
            True if the new state was saved
        """
        def change(state: AppState) -> AppState:
            return dataclasses.replace(state, workspace=path)

        try:
            self.state.update(change, persist=self.store.save)
        except StateError as e:
            PetPrint.print_right(f"[red]{e}[/red]")
            return False

        PetPrint.print_right(f"Workspace set to {path}")
        self.bus.emit(STATE_UPDATED)
        return True

    def select_workspace(self, path: str) -> bool:
        """Entry point for an explicit folder selection."""
        return self.folder_chosen(path)

    def trigger_scan(self, folder: str) -> ScanResult:
        """Scan ``folder`` and publish the batch.

        Raises:
            ScanError: If the folder can't be enumerated
        """
        result = self.scanner(folder)
        self.bus.emit(FOLDER_PROCESSED, result)
        return result

    def load_dir(self, folder: str) -> Optional[ScanResult]:
        """Scan a folder on request (e.g. a directory expanded in the UI)."""
        try:
            return self.trigger_scan(folder)
        except ScanError as e:
            PetPrint.print_right(f"[red]{e}[/red]")
            return None

    def frontend_ready(self) -> Optional[ScanResult]:
        """Scan the current root, if any, once the UI is listening."""
        try:
            root = self.workspace_root()
        except WorkspaceError:
            return None
        return self.load_dir(root)

    def _on_state_changed(self, _payload: object = None) -> None:
        self.frontend_ready()
