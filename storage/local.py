"""Local filesystem storage driver."""

import os
from typing import List, Optional

from .base import StorageDriver, StorageError, FileInfo, FolderInfo


class LocalDriver(StorageDriver):
    """Storage driver for local filesystem.

    All paths are relative to the root_path provided at construction.
    """

    def __init__(self, root_path: str) -> None:
        """Initialize local storage driver.

        Args:
            root_path: Path to the root directory

        Raises:
            StorageError: If root_path doesn't exist or is not a directory
        """
        self.root_path = os.path.abspath(root_path)
        if not os.path.exists(self.root_path):
            raise StorageError(f"Directory does not exist: {self.root_path}")
        if not os.path.isdir(self.root_path):
            raise StorageError(f"Not a directory: {self.root_path}")

    def _full_path(self, path: str) -> str:
        """Convert relative path to absolute path."""
        if not path:
            return self.root_path
        return os.path.join(self.root_path, path)

    def absolute_path(self, path: str = "") -> str:
        return self._full_path(path)

    def _list_dir(self, path: str) -> List[str]:
        """Return the names in a directory, sorted for stable output."""
        full_path = self._full_path(path)

        if not os.path.exists(full_path):
            raise StorageError(f"Path does not exist: {full_path}")
        if not os.path.isdir(full_path):
            raise StorageError(f"Not a directory: {full_path}")

        try:
            return sorted(os.listdir(full_path))
        except OSError as e:
            raise StorageError(f"Failed to list {full_path}: {e}")

    def list_files(self, path: str = "",
                   extension: Optional[str] = None) -> List[FileInfo]:
        """List regular files at the given path."""
        full_path = self._full_path(path)
        extension_lower = extension.lower() if extension else None
        results = []

        for filename in self._list_dir(path):
            abs_path = os.path.join(full_path, filename)
            if not os.path.isfile(abs_path):
                continue
            if extension_lower and not filename.lower().endswith(extension_lower):
                continue

            rel_path = os.path.relpath(abs_path, self.root_path)

            try:
                size = os.path.getsize(abs_path)
            except OSError:
                size = None

            results.append(FileInfo(
                path=rel_path,
                name=filename,
                size=size
            ))

        return results

    def list_folders(self, path: str = "") -> List[FolderInfo]:
        """List immediate subfolders at the given path."""
        full_path = self._full_path(path)

        results = []
        for name in self._list_dir(path):
            abs_path = os.path.join(full_path, name)
            if os.path.isdir(abs_path):
                rel_path = os.path.relpath(abs_path, self.root_path)
                results.append(FolderInfo(
                    path=rel_path,
                    name=name
                ))

        return results
