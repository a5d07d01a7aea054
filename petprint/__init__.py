"""PetPrint - Application state and configuration."""

import os
import re
from typing import Optional, Any, TYPE_CHECKING

if TYPE_CHECKING:
    import argparse

__version__ = "0.1.0"

# macOS Application Support directory
DEFAULT_STATE_DIR = os.path.expanduser("~/Library/Application Support/petprint")


class PetPrintError(Exception):
    """Base exception for PetPrint workflows."""
    pass


def _strip_rich_markup(text: str) -> str:
    """Remove Rich markup tags like [red], [/red], [bold], etc."""
    return re.sub(r'\[/?[a-zA-Z_]+\]', '', text)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


class PetPrint:
    """Central configuration and output routing for PetPrint."""

    # Config options
    state_dir: str = DEFAULT_STATE_DIR
    job_name: str = "Pet Print PDF Job"
    poll_attempts: int = 10
    poll_interval: float = 0.5

    # UI app reference (None = CLI mode)
    _app: Optional[Any] = None

    @classmethod
    def configure(cls, args: Optional["argparse.Namespace"] = None) -> None:
        """Initialize configuration from environment and parsed CLI args."""
        cls.state_dir = os.environ.get('PETPRINT_STATE_DIR', DEFAULT_STATE_DIR)
        cls.job_name = os.environ.get('PETPRINT_JOB_NAME', "Pet Print PDF Job")
        cls.poll_attempts = _env_int('PETPRINT_POLL_ATTEMPTS', 10)
        cls.poll_interval = _env_float('PETPRINT_POLL_INTERVAL', 0.5)

        state_dir = getattr(args, 'state_dir', None)
        if state_dir:
            cls.state_dir = state_dir

    @classmethod
    def state_path(cls) -> str:
        """Path of the persisted workspace state file."""
        return os.path.join(cls.state_dir, "workspace.json")

    @classmethod
    def set_app(cls, app: Any) -> None:
        """Set the Textual app reference for UI updates."""
        cls._app = app

    @classmethod
    def print_left(cls, line1: str, line2: str) -> None:
        """Add entry to activity log (left panel in TUI, stdout in CLI)."""
        if cls._app is not None:
            cls._app.call_from_thread(cls._app.add_activity, line1, line2)
        else:
            # Strip Rich markup for CLI output
            print(_strip_rich_markup(line1))
            print(_strip_rich_markup(line2))

    @classmethod
    def print_right(cls, message: str) -> None:
        """Add line to debug log (right panel in TUI, stdout in CLI)."""
        if cls._app is not None:
            cls._app.call_from_thread(cls._app.add_debug, message)
        else:
            # Strip Rich markup for CLI output
            print(_strip_rich_markup(message))
