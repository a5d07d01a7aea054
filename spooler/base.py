"""Base classes for print spooler drivers.

This module defines the abstract interface the print workflow uses to hand
a file to the operating system's spooler and to watch the job afterwards.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from petprint import PetPrintError


class PrintError(PetPrintError):
    """Base exception for spooler operations."""
    pass


@dataclass
class PrintOptions:
    """Options passed along with a print request.

    Attributes:
        job_name: Title shown in the printer queue
        raw_properties: Backend-specific key/value options (e.g. CUPS -o options)
    """
    job_name: str = "Pet Print PDF Job"
    raw_properties: Dict[str, str] = field(default_factory=dict)


class PrinterDriver(ABC):
    """Abstract base class for spooler backends."""

    @abstractmethod
    def default_printer(self) -> Optional[str]:
        """Name of the system default printer, or None if there is none.

        Raises:
            PrintError: If the spooler cannot be queried
        """
        pass

    @abstractmethod
    def print_file(self, printer: str, path: str, options: PrintOptions) -> str:
        """Submit a file for printing.

        Args:
            printer: Printer name as returned by default_printer()
            path: Local path of the file to print
            options: Job options

        Returns:
            Job handle identifying the submitted job

        Raises:
            PrintError: If the job could not be submitted
        """
        pass

    @abstractmethod
    def active_jobs(self, printer: str) -> Set[str]:
        """Snapshot of job handles still queued or printing on ``printer``.

        Raises:
            PrintError: If the spooler cannot be queried
        """
        pass
