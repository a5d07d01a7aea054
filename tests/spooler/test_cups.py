"""Tests for CupsDriver.

subprocess.run is replaced, so no CUPS installation is needed.
"""

import subprocess
import pytest

from spooler import CupsDriver, PrintError, PrintOptions


class FakeRun:
    """Stand-in for subprocess.run returning canned results per command."""

    def __init__(self, results):
        self.results = results
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append(args)
        returncode, stdout, stderr = self.results[args[0]]
        return subprocess.CompletedProcess(args, returncode, stdout, stderr)


@pytest.fixture
def fake_run(monkeypatch):
    def install(results):
        fake = FakeRun(results)
        monkeypatch.setattr(subprocess, "run", fake)
        return fake
    return install


class TestDefaultPrinter:
    """Tests for default_printer()."""

    def test_parses_lpstat(self, fake_run):
        fake_run({"lpstat": (0, "system default destination: Office_Laser\n", "")})
        assert CupsDriver().default_printer() == "Office_Laser"

    def test_no_default(self, fake_run):
        fake_run({"lpstat": (1, "", "lpstat: No destinations added.\n")})
        assert CupsDriver().default_printer() is None

    def test_unexpected_output(self, fake_run):
        fake_run({"lpstat": (0, "no system default destination\n", "")})
        assert CupsDriver().default_printer() is None

    def test_missing_binary(self, monkeypatch):
        def missing(args, **kwargs):
            raise FileNotFoundError(args[0])
        monkeypatch.setattr(subprocess, "run", missing)
        with pytest.raises(PrintError):
            CupsDriver().default_printer()


class TestPrintFile:
    """Tests for print_file()."""

    def test_returns_job_id(self, fake_run):
        fake = fake_run({"lp": (0, "request id is Office_Laser-42 (1 file(s))\n", "")})
        job_id = CupsDriver().print_file(
            "Office_Laser", "/tmp/out.pdf",
            PrintOptions(job_name="Pets", raw_properties={"sides": "two-sided-long-edge"}),
        )

        assert job_id == "Office_Laser-42"
        assert fake.calls[0] == ["lp", "-d", "Office_Laser", "-t", "Pets",
                                 "-o", "sides=two-sided-long-edge", "/tmp/out.pdf"]

    def test_rejected(self, fake_run):
        fake_run({"lp": (1, "", "lp: The printer or class does not exist.\n")})
        with pytest.raises(PrintError) as excinfo:
            CupsDriver().print_file("Nope", "/tmp/out.pdf", PrintOptions())
        assert "does not exist" in str(excinfo.value)

    def test_unexpected_output(self, fake_run):
        fake_run({"lp": (0, "ok\n", "")})
        with pytest.raises(PrintError):
            CupsDriver().print_file("Office_Laser", "/tmp/out.pdf", PrintOptions())


class TestActiveJobs:
    """Tests for active_jobs()."""

    def test_lists_job_ids(self, fake_run):
        fake_run({"lpstat": (0,
                             "Office_Laser-41  alice  1024  Mon 19 Oct 2026\n"
                             "Office_Laser-42  alice  2048  Mon 19 Oct 2026\n", "")})
        assert CupsDriver().active_jobs("Office_Laser") == {"Office_Laser-41", "Office_Laser-42"}

    def test_empty_queue(self, fake_run):
        fake_run({"lpstat": (0, "", "")})
        assert CupsDriver().active_jobs("Office_Laser") == set()

    def test_failure_raises(self, fake_run):
        fake_run({"lpstat": (1, "", "lpstat: Invalid destination name\n")})
        with pytest.raises(PrintError):
            CupsDriver().active_jobs("Office_Laser")
