"""Workspace indexer: one-level folder scan into identified entries."""

import os
import re
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Union

from documents import DocumentError, page_count_of
from petprint import PetPrint, PetPrintError
from storage import LocalDriver, StorageError
from .identity import path_id

DOCUMENT_EXTENSION = ".pdf"

# Folders with these suffixes are document bundles of other applications
# (Pages, Numbers, Keynote), not real folders.
EXCLUDED_BUNDLE_SUFFIXES = frozenset({"pages", "numbers", "key"})


class ScanError(PetPrintError):
    """Raised when a folder cannot be enumerated."""
    pass


@dataclass(frozen=True)
class DocumentEntry:
    """A PDF found in a scanned folder."""
    type: ClassVar[str] = "pdf"

    name: str      # "invoice.pdf"
    path: str      # absolute path
    pages: int
    size: int      # bytes
    parent: int    # path_id of the scanned folder
    id: int        # path_id of path


@dataclass(frozen=True)
class DirectoryEntry:
    """A subfolder found in a scanned folder."""
    type: ClassVar[str] = "dir"

    name: str
    path: str
    parent: int
    id: int


WorkspaceEntry = Union[DocumentEntry, DirectoryEntry]


@dataclass(frozen=True)
class ScanResult:
    """One batch of entries for a scanned folder."""
    folder: str
    entries: List[WorkspaceEntry]


@dataclass
class TreeNode:
    """An entry plus the entries found inside it (directories only)."""
    entry: WorkspaceEntry
    children: List["TreeNode"] = field(default_factory=list)


def _suffix(name: str) -> str:
    """Extension-like suffix without the dot, lowercased ('' if none)."""
    return os.path.splitext(name)[1][1:].lower()


def natural_key(name: str) -> list:
    """Sort key that orders 'page2' before 'page10'."""
    return [int(part) if part.isdigit() else part.lower()
            for part in re.split(r'(\d+)', name)]


def sort_entries(entries: List[WorkspaceEntry]) -> List[WorkspaceEntry]:
    """Directories first, then documents, each in natural name order."""
    return sorted(entries, key=lambda e: (e.type != "dir", natural_key(e.name)))


def scan_folder(path: str,
                page_counter: Callable[[str], int] = page_count_of) -> ScanResult:
    """Scan one folder (not recursive) for subfolders and PDFs.

    Args:
        path: Folder to scan
        page_counter: Returns the page count of a PDF path; raises
                      DocumentError if the file cannot be read

    Returns:
        ScanResult with the absolute folder path and its entries

    Raises:
        ScanError: If the folder doesn't exist or can't be listed
    """
    try:
        driver = LocalDriver(path)
        folders = driver.list_folders()
        files = driver.list_files(extension=DOCUMENT_EXTENSION)
    except StorageError as e:
        raise ScanError(str(e)) from e

    folder = driver.absolute_path()
    parent = path_id(folder)
    PetPrint.print_right(f"Processing folder: {folder}")

    entries: List[WorkspaceEntry] = []

    for info in folders:
        if _suffix(info.name) in EXCLUDED_BUNDLE_SUFFIXES:
            continue
        abs_path = driver.absolute_path(info.path)
        entries.append(DirectoryEntry(
            name=info.name,
            path=abs_path,
            parent=parent,
            id=path_id(abs_path),
        ))

    for info in files:
        abs_path = driver.absolute_path(info.path)
        if info.size is None:
            PetPrint.print_right(f"Skipping {info.name}: size unavailable")
            continue
        try:
            pages = page_counter(abs_path)
        except DocumentError as e:
            PetPrint.print_right(f"Skipping {info.name}: {e}")
            continue
        entries.append(DocumentEntry(
            name=info.name,
            path=abs_path,
            pages=pages,
            size=info.size,
            parent=parent,
            id=path_id(abs_path),
        ))

    entries = sort_entries(entries)
    documents = sum(1 for e in entries if e.type == "pdf")
    PetPrint.print_right(f"Found {documents} pdfs in folder")
    return ScanResult(folder=folder, entries=entries)


def entry_to_dict(entry: WorkspaceEntry) -> dict:
    """Wire form of an entry, tagged with its type."""
    data = {"type": entry.type}
    data.update(entry.__dict__)
    return data


def group_entries(entries: List[WorkspaceEntry]) -> List[TreeNode]:
    """Arrange accumulated scan entries into a tree.

    Entries are keyed by id; when the same id appears more than once (a
    folder scanned twice) the latest entry wins but keeps its first
    position. An entry whose parent is a known directory becomes that
    directory's child; every other entry is a root.
    """
    by_id: Dict[int, WorkspaceEntry] = {}
    for entry in entries:
        by_id[entry.id] = entry

    nodes = {entry_id: TreeNode(entry) for entry_id, entry in by_id.items()}
    roots = []
    for entry_id, node in nodes.items():
        parent = nodes.get(node.entry.parent)
        if parent is not None and parent.entry.type == "dir" and parent is not node:
            parent.children.append(node)
        else:
            roots.append(node)
    return roots
