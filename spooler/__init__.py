"""Print spooler abstraction for petprint.

Usage:
    from spooler import CupsDriver, PrintOptions

    driver = CupsDriver()
    printer = driver.default_printer()
    job = driver.print_file(printer, "/tmp/combined.pdf", PrintOptions())
"""

from .base import PrinterDriver, PrintError, PrintOptions
from .cups import CupsDriver


__all__ = [
    'PrinterDriver',
    'PrintError',
    'PrintOptions',
    'CupsDriver',
]
