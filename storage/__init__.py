"""Storage driver abstraction for petprint.

Provides a uniform read interface for browsing a workspace folder:
- LocalDriver: Local filesystem

Usage:
    from storage import LocalDriver

    driver = LocalDriver("/path/to/folder")
    pdfs = driver.list_files(extension=".pdf")
"""

from .base import StorageDriver, StorageError, FileInfo, FolderInfo
from .local import LocalDriver


__all__ = [
    'StorageDriver',
    'StorageError',
    'FileInfo',
    'FolderInfo',
    'LocalDriver',
]
