"""Base classes for storage drivers.

This module defines the abstract interface that storage backends implement
for browsing a workspace folder.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


@dataclass
class FileInfo:
    """Information about a file in storage.

    Attributes:
        path: Relative path within the storage root
        name: Filename only (no directory)
        size: File size in bytes (None if it could not be read)
    """
    path: str
    name: str
    size: Optional[int] = None


@dataclass
class FolderInfo:
    """Information about a folder in storage.

    Attributes:
        path: Relative path within the storage root
        name: Folder name only (no parent path)
    """
    path: str
    name: str


class StorageDriver(ABC):
    """Abstract base class for storage backends.

    Drivers are read-only views of a root folder: they enumerate the
    immediate files and subfolders of a path below that root.
    """

    @abstractmethod
    def absolute_path(self, path: str = "") -> str:
        """Return the absolute location of a relative path.

        Args:
            path: Relative path within storage (empty string for root)
        """
        pass

    @abstractmethod
    def list_files(self, path: str = "",
                   extension: Optional[str] = None) -> List[FileInfo]:
        """List files at the given path.

        Args:
            path: Relative path within storage (empty string for root)
            extension: Filter by file extension (e.g., ".pdf"), case-insensitive

        Returns:
            List of FileInfo objects

        Raises:
            StorageError: If path doesn't exist or can't be accessed
        """
        pass

    @abstractmethod
    def list_folders(self, path: str = "") -> List[FolderInfo]:
        """List immediate subfolders at the given path.

        Args:
            path: Relative path within storage (empty string for root)

        Returns:
            List of FolderInfo objects

        Raises:
            StorageError: If path doesn't exist or can't be accessed
        """
        pass
