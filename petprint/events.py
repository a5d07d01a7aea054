"""In-process event bus.

Listeners are kept in an explicit per-event list and called synchronously, in
subscription order, on the thread that emits the event.
"""

import threading
from typing import Any, Callable, Dict, List

FOLDER_CHOSEN = "folder-chosen"
STATE_LOADED = "state-loaded"
STATE_UPDATED = "state-updated"
FOLDER_PROCESSED = "folder-processed"
PRINTING_COMPLETED = "printing-completed"

Listener = Callable[[Any], None]


class EventBus:
    """Observer list keyed by event name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: Dict[str, List[Listener]] = {}

    def listen(self, event: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` for ``event``.

        Returns:
            A function that removes the registration again
        """
        with self._lock:
            self._listeners.setdefault(event, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(event, [])
                if callback in listeners:
                    listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: Any = None) -> None:
        """Deliver ``payload`` to every listener of ``event``."""
        with self._lock:
            listeners = list(self._listeners.get(event, []))
        for callback in listeners:
            callback(payload)
