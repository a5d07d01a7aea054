"""Tests for PrintJobMonitor and the polling helper."""

import pytest

from spooler import PrinterDriver, PrintError
from utils.polling import PollOutcome, poll_until
from workflows import JobState, PrintJobMonitor, SubmittedJob


class QueueDriver(PrinterDriver):
    """Fake spooler whose queue empties after a number of queries."""

    def __init__(self, active_for=None, fail_queries=0):
        self.active_for = active_for    # None = never leaves the queue
        self.fail_queries = fail_queries
        self.queries = 0

    def default_printer(self):
        return "Office"

    def print_file(self, printer, path, options):
        return "Office-1"

    def active_jobs(self, printer):
        self.queries += 1
        if self.queries <= self.fail_queries:
            raise PrintError("lpstat failed")
        if self.active_for is None or self.queries <= self.active_for:
            return {"Office-1", "Office-0"}
        return {"Office-0"}


def no_wait(seconds):
    return False


@pytest.fixture
def job():
    return SubmittedJob(printer="Office", job_id="Office-1", path="/tmp/job.pdf")


class TestPollUntil:
    """Tests for poll_until()."""

    def test_satisfied_stops_early(self):
        calls = []
        outcome = poll_until(lambda: len(calls) == 2, max_attempts=5,
                             wait=lambda s: calls.append(s) or False)
        assert outcome is PollOutcome.SATISFIED
        assert len(calls) == 2

    def test_exhausted(self):
        attempts = []
        outcome = poll_until(lambda: False, max_attempts=4, wait=no_wait,
                             on_attempt=lambda n, ok: attempts.append(n))
        assert outcome is PollOutcome.EXHAUSTED
        assert attempts == [1, 2, 3, 4]

    def test_waits_before_each_attempt(self):
        events = []
        poll_until(lambda: events.append("check") or False, max_attempts=2, interval=0.25,
                   wait=lambda s: events.append(s) or False)
        assert events == [0.25, "check", 0.25, "check"]

    def test_cancelled_by_wait(self):
        checks = []
        outcome = poll_until(lambda: checks.append(1) or False, wait=lambda s: True)
        assert outcome is PollOutcome.CANCELLED
        assert checks == []


class TestPrintJobMonitor:
    """Tests for PrintJobMonitor.run()."""

    def test_completes_when_job_leaves_queue(self, job):
        driver = QueueDriver(active_for=2)
        notified = []
        monitor = PrintJobMonitor(driver, job, on_complete=notified.append,
                                  attempts=10, interval=0, wait=no_wait)

        assert monitor.run() is JobState.COMPLETED
        assert notified == [job]
        assert monitor.polls == 3

    def test_gives_up_silently(self, job):
        driver = QueueDriver(active_for=None)
        notified = []
        monitor = PrintJobMonitor(driver, job, on_complete=notified.append,
                                  attempts=10, interval=0, wait=no_wait)

        assert monitor.run() is JobState.GAVE_UP
        assert notified == []
        assert monitor.polls == 10

    def test_query_error_counts_as_still_active(self, job):
        driver = QueueDriver(active_for=0, fail_queries=2)
        monitor = PrintJobMonitor(driver, job, attempts=10, interval=0, wait=no_wait)

        assert monitor.run() is JobState.COMPLETED
        assert monitor.polls == 3

    def test_cancel_stops_polling(self, job):
        driver = QueueDriver(active_for=None)
        notified = []
        monitor = PrintJobMonitor(driver, job, on_complete=notified.append,
                                  attempts=10, interval=0, wait=no_wait)
        monitor.cancel()

        assert monitor.run() is JobState.CANCELLED
        assert driver.queries == 0
        assert notified == []

    def test_background_thread(self, job):
        driver = QueueDriver(active_for=1)
        notified = []
        monitor = PrintJobMonitor(driver, job, on_complete=notified.append,
                                  attempts=5, interval=0.01)
        monitor.start()
        monitor.join(timeout=5)

        assert monitor.state is JobState.COMPLETED
        assert notified == [job]

    def test_defaults_come_from_config(self, job, monkeypatch):
        from petprint import PetPrint

        monkeypatch.setattr(PetPrint, "poll_attempts", 3)
        monkeypatch.setattr(PetPrint, "poll_interval", 0.1)
        monitor = PrintJobMonitor(QueueDriver(), job)
        assert monitor.attempts == 3
        assert monitor.interval == 0.1
