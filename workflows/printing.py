"""Print and save workflows for assembled documents."""

import os
import tempfile
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from documents import DocumentError
from petprint import PetPrint, PetPrintError
from petprint.events import EventBus, PRINTING_COMPLETED
from spooler import PrinterDriver, PrintError, PrintOptions
from utils.polling import poll_until, PollOutcome
from .assembler import AssembledDocument, AssemblyError, PrintSelection, assemble


@dataclass(frozen=True)
class SubmittedJob:
    """A job accepted by the spooler."""
    printer: str
    job_id: str
    path: str    # temp file handed to the spooler (kept after submission)


class JobState(Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    GAVE_UP = "gave_up"
    CANCELLED = "cancelled"


def submit(document: AssembledDocument, driver: PrinterDriver,
           options: Optional[PrintOptions] = None) -> SubmittedJob:
    """Write ``document`` to a temp file and send it to the default printer.

    Raises:
        PrintError: If the document can't be written, there is no default
                    printer, or the spooler rejects the job
    """
    options = options or PrintOptions(job_name=PetPrint.job_name)

    fd, temp_path = tempfile.mkstemp(suffix='.pdf')
    try:
        with os.fdopen(fd, 'wb') as f:
            document.write(f)

        printer = driver.default_printer()
        if printer is None:
            raise PrintError("Could not get default printer")

        job_id = driver.print_file(printer, temp_path, options)
    except DocumentError as e:
        os.unlink(temp_path)
        raise PrintError(f"Failed to write print file: {e}") from e
    except PrintError:
        os.unlink(temp_path)
        raise

    PetPrint.print_right(f"Submitted job {job_id} to {printer}")
    return SubmittedJob(printer=printer, job_id=job_id, path=temp_path)


class PrintJobMonitor:
    """Watches a submitted job until it leaves the printer queue.

    The monitor only observes; it never cancels the print job. If the job
    is still queued after every attempt, it stops in GAVE_UP without
    notifying anyone.
    """

    def __init__(self, driver: PrinterDriver, job: SubmittedJob,
                 on_complete: Optional[Callable[[SubmittedJob], None]] = None,
                 attempts: Optional[int] = None,
                 interval: Optional[float] = None,
                 wait: Optional[Callable[[float], bool]] = None) -> None:
        self.driver = driver
        self.job = job
        self.on_complete = on_complete
        self.attempts = attempts if attempts is not None else PetPrint.poll_attempts
        self.interval = interval if interval is not None else PetPrint.poll_interval
        self.state = JobState.SUBMITTED
        self.polls = 0
        self._cancel = threading.Event()
        self._wait = wait or self._cancel.wait
        self._thread: Optional[threading.Thread] = None

    def _job_finished(self) -> bool:
        if self._cancel.is_set():
            return False
        self.polls += 1
        try:
            active = self.driver.active_jobs(self.job.printer)
        except PrintError as e:
            PetPrint.print_right(f"⚠ Could not query printer queue: {e}")
            return False
        return self.job.job_id not in active

    def _wait_or_cancel(self, seconds: float) -> bool:
        return self._wait(seconds) or self._cancel.is_set()

    def run(self) -> JobState:
        """Poll synchronously and return the final state."""
        self.state = JobState.POLLING
        outcome = poll_until(
            self._job_finished,
            max_attempts=self.attempts,
            interval=self.interval,
            wait=self._wait_or_cancel,
        )

        if outcome is PollOutcome.SATISFIED:
            self.state = JobState.COMPLETED
            PetPrint.print_left("[green]Printing completed[/green]",
                                f"  Job {self.job.job_id} on {self.job.printer}")
            if self.on_complete:
                self.on_complete(self.job)
        elif outcome is PollOutcome.CANCELLED:
            self.state = JobState.CANCELLED
        else:
            self.state = JobState.GAVE_UP
        return self.state

    def start(self) -> threading.Thread:
        """Run the poll loop on a background thread."""
        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def cancel(self) -> None:
        """Stop watching; the print job itself is left alone."""
        self._cancel.set()


def print_to_default(selections: Sequence[PrintSelection], driver: PrinterDriver,
                     bus: Optional[EventBus] = None,
                     on_complete: Optional[Callable[[SubmittedJob], None]] = None,
                     start: bool = True,
                     wait: Optional[Callable[[float], bool]] = None) -> PrintJobMonitor:
    """Assemble ``selections`` and print them on the default printer.

    Returns as soon as the spooler has accepted the job; completion is
    reported later through ``bus`` (PRINTING_COMPLETED) and ``on_complete``.

    Raises:
        AssemblyError: If the combined document can't be built
        PrintError: If the job can't be submitted
    """
    document = assemble(selections)
    job = submit(document, driver)

    def completed(finished: SubmittedJob) -> None:
        if bus is not None:
            bus.emit(PRINTING_COMPLETED, finished)
        if on_complete is not None:
            on_complete(finished)

    monitor = PrintJobMonitor(driver, job, on_complete=completed, wait=wait)
    if start:
        monitor.start()
    return monitor


def save_to_file(selections: Sequence[PrintSelection], output_path: str) -> Optional[str]:
    """Assemble ``selections`` and write them to ``output_path``.

    If the document can't be assembled nothing is written and no error is
    raised; only write failures are reported.

    Returns:
        output_path if a file was written, None otherwise

    Raises:
        PetPrintError: If the output file can't be written
    """
    try:
        document = assemble(selections)
    except AssemblyError as e:
        PetPrint.print_right(f"Not saving {output_path}: {e}")
        return None

    try:
        document.write(output_path)
    except DocumentError as e:
        raise PetPrintError(f"Failed to save {output_path}: {e}") from e

    PetPrint.print_left(f"[green]Saved[/green] {os.path.basename(output_path)}",
                        f"  {document.page_count} pages → {output_path}")
    return output_path
