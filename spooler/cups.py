"""CUPS spooler driver using the ``lp`` and ``lpstat`` command-line tools."""

import re
import subprocess
from typing import List, Optional, Set

from .base import PrinterDriver, PrintError, PrintOptions

_DEFAULT_RE = re.compile(r"system default destination:\s*(\S+)")
_REQUEST_RE = re.compile(r"request id is\s+(\S+)")


class CupsDriver(PrinterDriver):
    """Spooler driver for CUPS (Linux and macOS)."""

    def __init__(self, lp: str = "lp", lpstat: str = "lpstat") -> None:
        self.lp = lp
        self.lpstat = lpstat

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(args, capture_output=True, text=True, check=False)
        except OSError as e:
            raise PrintError(f"Failed to run {args[0]}: {e}")

    def default_printer(self) -> Optional[str]:
        result = self._run([self.lpstat, "-d"])
        if result.returncode != 0:
            # lpstat exits non-zero when no default destination is configured
            return None
        match = _DEFAULT_RE.search(result.stdout)
        return match.group(1) if match else None

    def print_file(self, printer: str, path: str, options: PrintOptions) -> str:
        args = [self.lp, "-d", printer, "-t", options.job_name]
        for key, value in options.raw_properties.items():
            args += ["-o", f"{key}={value}"]
        args.append(path)

        result = self._run(args)
        if result.returncode != 0:
            message = result.stderr.strip() or f"exit code {result.returncode}"
            raise PrintError(f"Failed to print {path} on {printer}: {message}")

        match = _REQUEST_RE.search(result.stdout)
        if not match:
            raise PrintError(f"Unexpected lp output: {result.stdout.strip()!r}")
        return match.group(1)

    def active_jobs(self, printer: str) -> Set[str]:
        result = self._run([self.lpstat, "-o", printer])
        if result.returncode != 0:
            message = result.stderr.strip() or f"exit code {result.returncode}"
            raise PrintError(f"Failed to list jobs on {printer}: {message}")

        jobs = set()
        for line in result.stdout.splitlines():
            parts = line.split()
            if parts:
                jobs.add(parts[0])
        return jobs
