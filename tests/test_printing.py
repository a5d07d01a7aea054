"""Tests for the print and save workflows."""

import os
import tempfile

import pytest
from pypdf import PdfReader, PdfWriter

from petprint import PetPrintError
from petprint.events import EventBus, PRINTING_COMPLETED
from spooler import PrinterDriver, PrintError
from workflows import (
    AssemblyError,
    JobState,
    PrintSelection,
    assemble,
    print_to_default,
    save_to_file,
    submit,
)


class RecordingDriver(PrinterDriver):
    """Fake spooler that records submitted files."""

    def __init__(self, printer="Office", reject=False):
        self.printer = printer
        self.reject = reject
        self.submitted = []

    def default_printer(self):
        return self.printer

    def print_file(self, printer, path, options):
        if self.reject:
            raise PrintError("printer offline")
        self.submitted.append((printer, path, options.job_name))
        return "Office-7"

    def active_jobs(self, printer):
        # The job is done by the time anyone asks
        return set()


def no_wait(seconds):
    return False


@pytest.fixture
def spool_dir(temp_dir, monkeypatch):
    """Point tempfile at a private folder so leftover print files show up."""
    path = os.path.join(temp_dir, "spool")
    os.makedirs(path)
    monkeypatch.setattr(tempfile, "tempdir", path)
    return path


@pytest.fixture
def selections(pdf_factory):
    return [
        PrintSelection(path=pdf_factory("a.pdf", pages=3), name="a.pdf"),
        PrintSelection(path=pdf_factory("b.pdf", pages=2), name="b.pdf", print_range=[1]),
    ]


class TestSubmit:
    """Tests for submit()."""

    def test_writes_temp_file_and_submits(self, selections, spool_dir):
        driver = RecordingDriver()
        job = submit(assemble(selections), driver)
        try:
            assert job.printer == "Office"
            assert job.job_id == "Office-7"
            assert driver.submitted[0][1] == job.path
            assert driver.submitted[0][2] == "Pet Print PDF Job"
            assert len(PdfReader(job.path).pages) == 6
        finally:
            os.unlink(job.path)

    def test_no_default_printer(self, selections, spool_dir):
        driver = RecordingDriver(printer=None)
        with pytest.raises(PrintError):
            submit(assemble(selections), driver)
        assert os.listdir(spool_dir) == []

    def test_rejected_job_removes_temp_file(self, selections, spool_dir):
        driver = RecordingDriver(reject=True)
        with pytest.raises(PrintError):
            submit(assemble(selections), driver)
        assert os.listdir(spool_dir) == []


class TestPrintToDefault:
    """Tests for print_to_default()."""

    def test_completion_is_published(self, selections):
        bus = EventBus()
        published = []
        notified = []
        bus.listen(PRINTING_COMPLETED, published.append)

        monitor = print_to_default(selections, RecordingDriver(), bus=bus,
                                   on_complete=notified.append,
                                   start=False, wait=no_wait)
        try:
            assert monitor.run() is JobState.COMPLETED
            assert published == [monitor.job]
            assert notified == [monitor.job]
        finally:
            os.unlink(monitor.job.path)

    def test_bad_source_raises_before_submitting(self, temp_dir):
        driver = RecordingDriver()
        with pytest.raises(AssemblyError):
            print_to_default([PrintSelection(path=os.path.join(temp_dir, "missing.pdf"))],
                             driver, start=False)
        assert driver.submitted == []


class TestSaveToFile:
    """Tests for save_to_file()."""

    def test_saves_combined_document(self, selections, temp_dir):
        output = os.path.join(temp_dir, "out.pdf")
        assert save_to_file(selections, output) == output
        # 3 pages + blank, 1 page + blank
        assert len(PdfReader(output).pages) == 6

    def test_assembly_failure_writes_nothing(self, temp_dir):
        output = os.path.join(temp_dir, "out.pdf")
        result = save_to_file([PrintSelection(path=os.path.join(temp_dir, "missing.pdf"))], output)
        assert result is None
        assert not os.path.exists(output)

    def test_write_failure_raises(self, selections, temp_dir):
        output = os.path.join(temp_dir, "no", "such", "dir", "out.pdf")
        with pytest.raises(PetPrintError):
            save_to_file(selections, output)

    def test_failed_write_keeps_existing_file(self, selections, temp_dir, monkeypatch):
        output = os.path.join(temp_dir, "out.pdf")
        with open(output, "wb") as f:
            f.write(b"previous")

        def broken_write(self, stream):
            stream.write(b"%PDF-1.7 partial")
            raise OSError("disk full")

        monkeypatch.setattr(PdfWriter, "write", broken_write)
        with pytest.raises(PetPrintError):
            save_to_file(selections, output)

        with open(output, "rb") as f:
            assert f.read() == b"previous"
        assert sorted(os.listdir(temp_dir)) == ["a.pdf", "b.pdf", "out.pdf"]

    def test_failed_write_leaves_no_file(self, selections, temp_dir, monkeypatch):
        output = os.path.join(temp_dir, "out.pdf")

        def broken_write(self, stream):
            stream.write(b"%PDF-1.7 partial")
            raise OSError("disk full")

        monkeypatch.setattr(PdfWriter, "write", broken_write)
        with pytest.raises(PetPrintError):
            save_to_file(selections, output)
        assert not os.path.exists(output)
        assert sorted(os.listdir(temp_dir)) == ["a.pdf", "b.pdf"]
