#!/usr/bin/env python3
"""PetPrint - Combine and print pages from a folder of PDFs."""

import argparse
import os
import sys
from typing import List

from petprint import PetPrint, PetPrintError, __version__
from petprint.events import EventBus, FOLDER_PROCESSED
from spooler import CupsDriver
from workflows import (
    ScanResult,
    Workspace,
    WorkspaceError,
    group_entries,
    parse_selection_arg,
    print_to_default,
    save_to_file,
)


def print_scan(result: ScanResult) -> None:
    """Print a scan batch as an indented listing."""
    print(f"{result.folder}")
    for node in group_entries(result.entries):
        entry = node.entry
        if entry.type == "dir":
            print(f"  {entry.name}/")
        else:
            print(f"  {entry.name}  ({entry.pages} pages, {entry.size} bytes)")
    if not result.entries:
        print("  No PDFs within the folder")


def run_scan(folder: str = None) -> int:
    """Scan FOLDER (or the workspace root) and list its entries.

    Args:
        folder: Folder to scan; None uses the persisted workspace root
    """
    bus = EventBus()
    workspace = Workspace(bus)
    workspace.load_state()

    try:
        target = folder or workspace.workspace_root()
    except WorkspaceError:
        print("Error: no folder given and no workspace selected")
        print("Use --select FOLDER first, or pass a folder to --scan")
        return 1

    try:
        print_scan(workspace.trigger_scan(target))
    except PetPrintError as e:
        print(f"Error: {e}")
        return 1
    return 0


def run_select(folder: str) -> int:
    """Set and persist the workspace root, then list it."""
    bus = EventBus()
    workspace = Workspace(bus)
    workspace.start()
    bus.listen(FOLDER_PROCESSED, print_scan)
    return 0 if workspace.select_workspace(os.path.abspath(folder)) else 1


def run_print(documents: List[str]) -> int:
    """Assemble DOCUMENTS and print them on the default printer."""
    try:
        selections = [parse_selection_arg(arg) for arg in documents]
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        monitor = print_to_default(selections, CupsDriver())
    except PetPrintError as e:
        print(f"Error: {e}")
        return 1

    PetPrint.print_right(f"Watching job {monitor.job.job_id}...")
    monitor.join()
    PetPrint.print_right(f"Job state: {monitor.state.value}")
    return 0


def run_save(output_path: str, documents: List[str]) -> int:
    """Assemble DOCUMENTS into OUTPUT_PATH."""
    try:
        selections = [parse_selection_arg(arg) for arg in documents]
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        save_to_file(selections, output_path)
    except PetPrintError as e:
        print(f"Error: {e}")
        return 1
    return 0


def main_tui() -> None:
    """Main entry point for the interactive TextUI."""
    from textui import run_app

    run_app(driver=CupsDriver())


def cli(argv: List[str] = None) -> int:
    parser = argparse.ArgumentParser(description="Combine and print pages from a folder of PDFs")
    parser.add_argument("documents", nargs="*",
                        help="PDFs for --print/--save, optionally with a page range (file.pdf:1-3,5)")
    parser.add_argument("--scan", nargs="?", const="", metavar="FOLDER",
                        help="List PDFs and folders in FOLDER (default: workspace root)")
    parser.add_argument("--select", type=str, metavar="FOLDER",
                        help="Set the workspace root folder")
    parser.add_argument("--print", dest="print_docs", action="store_true",
                        help="Combine DOCUMENTS and print on the default printer")
    parser.add_argument("--save", type=str, metavar="OUTPUT",
                        help="Combine DOCUMENTS into the PDF file OUTPUT")
    parser.add_argument("--state-dir", type=str,
                        help="Directory holding workspace.json (overrides PETPRINT_STATE_DIR)")
    parser.add_argument("--version", action="version", version=f"petprint {__version__}")
    args = parser.parse_args(argv)

    PetPrint.configure(args)

    if args.select:
        return run_select(args.select)

    elif args.scan is not None:
        return run_scan(args.scan or None)

    elif args.print_docs or args.save:
        if not args.documents:
            print("Error: no documents given")
            print("Example: petprint --print a.pdf b.pdf:1-3")
            return 1
        if args.save:
            return run_save(args.save, args.documents)
        return run_print(args.documents)

    else:
        # TUI mode (default) - Textual interface
        main_tui()
        return 0


if __name__ == "__main__":
    sys.exit(cli())
