"""Workflow layer for petprint.

Contains the business logic behind the UI and CLI:
- Indexing: Scan a workspace folder into identified entries
- Assembly: Merge selected pages of several PDFs into one document
- Printing: Submit to the default printer and watch the job; save to file
- Workspace: Track the selected root folder and re-scan on changes
"""

from .identity import path_id
from .indexer import (
    DOCUMENT_EXTENSION,
    EXCLUDED_BUNDLE_SUFFIXES,
    ScanError,
    DocumentEntry,
    DirectoryEntry,
    ScanResult,
    TreeNode,
    scan_folder,
    sort_entries,
    entry_to_dict,
    group_entries,
)
from .assembler import (
    AssemblyError,
    PrintSelection,
    AssembledDocument,
    assemble,
)
from .print_range import (
    parse_print_range,
    to_page_indices,
    parse_selection_arg,
)
from .printing import (
    SubmittedJob,
    JobState,
    PrintJobMonitor,
    submit,
    print_to_default,
    save_to_file,
)
from .workspace import Workspace, WorkspaceError


__all__ = [
    # Identity
    'path_id',

    # Indexing
    'DOCUMENT_EXTENSION',
    'EXCLUDED_BUNDLE_SUFFIXES',
    'ScanError',
    'DocumentEntry',
    'DirectoryEntry',
    'ScanResult',
    'TreeNode',
    'scan_folder',
    'sort_entries',
    'entry_to_dict',
    'group_entries',

    # Assembly
    'AssemblyError',
    'PrintSelection',
    'AssembledDocument',
    'assemble',

    # Page ranges
    'parse_print_range',
    'to_page_indices',
    'parse_selection_arg',

    # Printing
    'SubmittedJob',
    'JobState',
    'PrintJobMonitor',
    'submit',
    'print_to_default',
    'save_to_file',

    # Workspace
    'Workspace',
    'WorkspaceError',
]
