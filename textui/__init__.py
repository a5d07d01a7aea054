"""TextUI - Textual-based terminal UI for PetPrint."""

import os
from typing import Dict, List, Optional

from rich.markup import escape
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, RichLog, Static, Tree
from textual.widgets.tree import TreeNode as UITreeNode

from petprint import PetPrint, PetPrintError, __version__
from petprint.events import EventBus, FOLDER_PROCESSED, STATE_UPDATED
from spooler import CupsDriver, PrinterDriver
from workflows import (
    PrintSelection,
    ScanResult,
    TreeNode,
    Workspace,
    group_entries,
    parse_print_range,
    print_to_default,
    save_to_file,
    to_page_indices,
)
from workflows.indexer import natural_key


def format_size(size: int) -> str:
    """Human-readable byte count."""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def _node_order(node: TreeNode) -> tuple:
    return (node.entry.type != "dir", natural_key(node.entry.name))


class HeaderInfo(Static):
    """Header widget showing the workspace root and selection count."""

    def __init__(self, workspace: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.workspace = workspace

    def compose(self) -> ComposeResult:
        yield Static(f"Workspace: {self.workspace or '(none)'}", id="workspace-line")
        yield Static("Selected: 0 documents", id="selection-line")

    def update_info(self, workspace: str, selected: int) -> None:
        """Update workspace and selection display."""
        self.workspace = workspace
        self.query_one("#workspace-line", Static).update(f"Workspace: {workspace or '(none)'}")
        self.query_one("#selection-line", Static).update(f"Selected: {selected} documents")


class PetPrintApp(App):
    """Textual app for PetPrint: workspace tree plus activity and debug logs."""

    CSS = """
    Screen {
        layout: grid;
        grid-size: 1;
        grid-rows: auto 1fr auto auto;
    }

    #header-info {
        height: auto;
        padding: 0 1;
        background: $surface;
        border-bottom: solid $primary;
    }

    #main-content {
        height: 1fr;
    }

    #left-panel {
        width: 3fr;
        border-right: solid $primary;
    }

    #right-panel {
        width: 2fr;
    }

    .panel-title {
        height: 1;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    .log-panel {
        height: 1fr;
    }

    #workspace-tree {
        height: 1fr;
    }

    #command-input {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("o", "open_folder", "Open Folder"),
        Binding("x", "toggle_select", "Select"),
        Binding("r", "set_range", "Page Range"),
        Binding("p", "print", "Print"),
        Binding("s", "save", "Save PDF"),
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, driver: Optional[PrinterDriver] = None,
                 workspace: Optional[Workspace] = None) -> None:
        super().__init__()
        self.bus = workspace.bus if workspace is not None else EventBus()
        self.workspace = workspace or Workspace(self.bus)
        self.driver = driver or CupsDriver()
        self.entries: List = []
        self.selected: List[int] = []
        self.print_ranges: Dict[int, str] = {}
        self._by_id: Dict[int, object] = {}
        self._expanded: set = set()
        self._input_mode: Optional[str] = None
        self._range_target: Optional[int] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield HeaderInfo(id="header-info")

        with Horizontal(id="main-content"):
            with Vertical(id="left-panel"):
                yield Static("WORKSPACE", classes="panel-title")
                yield Tree("Workspace", id="workspace-tree")

            with Vertical(id="right-panel"):
                yield Static("ACTIVITY", classes="panel-title")
                yield RichLog(id="activity-log", classes="log-panel", highlight=True, markup=True)
                yield Static("DEBUG LOG", classes="panel-title")
                yield RichLog(id="debug-log", classes="log-panel", highlight=True, markup=True)

        yield Input(placeholder="Press o to open a folder", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted - wire up PetPrint UI references."""
        self.title = f"PetPrint v{__version__}"
        self.theme = "textual-light"

        tree = self.query_one("#workspace-tree", Tree)
        tree.show_root = False

        PetPrint.set_app(self)

        # Registered before the workspace subscribes, so a new root clears
        # the tree before the rescan batch arrives
        self.bus.listen(STATE_UPDATED, self._on_state_updated)
        self.bus.listen(FOLDER_PROCESSED, self._on_folder_processed)

        self._start_workspace()

    def on_unmount(self) -> None:
        """Called when app is unmounted - clear PetPrint UI references."""
        self.workspace.stop()
        PetPrint.set_app(None)

    # ------------------------------------------------------------------
    # Log panels (called via PetPrint.print_left / print_right)
    # ------------------------------------------------------------------

    def add_activity(self, line1: str, line2: str) -> None:
        """Add an activity entry to the upper right log."""
        log = self.query_one("#activity-log", RichLog)
        log.write(f"{line1}\n{line2}\n")

    def add_debug(self, message: str) -> None:
        """Add a debug message to the lower right log."""
        log = self.query_one("#debug-log", RichLog)
        log.write(message)

    # ------------------------------------------------------------------
    # Background work
    # ------------------------------------------------------------------

    @work(thread=True)
    def _start_workspace(self) -> None:
        self.workspace.start()

    @work(thread=True)
    def _select_workspace(self, path: str) -> None:
        self.workspace.select_workspace(path)

    @work(thread=True)
    def _load_dir(self, folder: str) -> None:
        self.workspace.load_dir(folder)

    @work(thread=True)
    def _print(self, selections: List[PrintSelection]) -> None:
        try:
            print_to_default(selections, self.driver, bus=self.bus)
        except PetPrintError as e:
            PetPrint.print_right(f"[red]Print failed: {e}[/red]")
            return
        PetPrint.print_left("[blue]Sent to printer[/blue]",
                            f"  {len(selections)} documents")

    @work(thread=True)
    def _save(self, selections: List[PrintSelection], output_path: str) -> None:
        try:
            save_to_file(selections, output_path)
        except PetPrintError as e:
            PetPrint.print_right(f"[red]{e}[/red]")

    def _on_state_updated(self, _payload: object = None) -> None:
        self.call_from_thread(self._reset_entries)

    def _on_folder_processed(self, result: ScanResult) -> None:
        self.call_from_thread(self.add_batch, result)

    # ------------------------------------------------------------------
    # Tree
    # ------------------------------------------------------------------

    def _reset_entries(self) -> None:
        self.entries = []
        self._by_id = {}
        self._expanded = set()
        self._clear_selection()
        self._rebuild_tree()

    def add_batch(self, result: ScanResult) -> None:
        """Merge a scan batch into the tree."""
        self.entries.extend(result.entries)
        for entry in result.entries:
            self._by_id[entry.id] = entry
        self._rebuild_tree()

    def _label(self, entry) -> str:
        if entry.type == "dir":
            return f"📁 {escape(entry.name)}"
        mark = "☑" if entry.id in self.selected else "☐"
        label = f"{mark} {escape(entry.name)}  ({entry.pages} pages, {format_size(entry.size)})"
        if entry.id in self.print_ranges:
            label += f"  pages {self.print_ranges[entry.id]}"
        return label

    def _add_node(self, parent: UITreeNode, node: TreeNode) -> None:
        entry = node.entry
        if entry.type == "dir":
            branch = parent.add(self._label(entry), data=entry,
                                expand=entry.id in self._expanded, allow_expand=True)
            for child in sorted(node.children, key=_node_order):
                self._add_node(branch, child)
        else:
            parent.add_leaf(self._label(entry), data=entry)

    def _rebuild_tree(self) -> None:
        tree = self.query_one("#workspace-tree", Tree)
        tree.clear()
        for node in sorted(group_entries(self.entries), key=_node_order):
            self._add_node(tree.root, node)
        tree.root.expand()
        self._update_header()

    def _update_header(self) -> None:
        root = self.workspace.state.get().workspace or ""
        self.query_one("#header-info", HeaderInfo).update_info(root, len(self.selected))

    def _cursor_entry(self):
        node = self.query_one("#workspace-tree", Tree).cursor_node
        return node.data if node is not None else None

    def on_tree_node_expanded(self, event: Tree.NodeExpanded) -> None:
        entry = event.node.data
        if entry is not None and entry.type == "dir" and entry.id not in self._expanded:
            self._expanded.add(entry.id)
            self._load_dir(entry.path)

    def on_tree_node_collapsed(self, event: Tree.NodeCollapsed) -> None:
        entry = event.node.data
        if entry is not None:
            self._expanded.discard(entry.id)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        entry = event.node.data
        if entry is not None and entry.type == "pdf":
            self._toggle(entry, event.node)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _toggle(self, entry, node: UITreeNode) -> None:
        if entry.id in self.selected:
            self.selected.remove(entry.id)
        else:
            self.selected.append(entry.id)
        node.set_label(self._label(entry))
        self._update_header()

    def _clear_selection(self) -> None:
        self.selected = []
        self.print_ranges = {}

    def build_selections(self) -> List[PrintSelection]:
        """Selected documents in the order they were picked."""
        selections = []
        for entry_id in self.selected:
            entry = self._by_id.get(entry_id)
            if entry is None or entry.type != "pdf":
                continue
            print_range = None
            if entry_id in self.print_ranges:
                print_range = to_page_indices(parse_print_range(self.print_ranges[entry_id]))
            selections.append(PrintSelection(
                path=entry.path,
                pages=entry.pages,
                size=entry.size,
                name=entry.name,
                print_range=print_range,
            ))
        return selections

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _prompt(self, mode: str, placeholder: str) -> None:
        self._input_mode = mode
        command_input = self.query_one("#command-input", Input)
        command_input.placeholder = placeholder
        command_input.value = ""
        command_input.focus()

    def action_open_folder(self) -> None:
        self._prompt("open", "Folder to open, then Enter")

    def action_toggle_select(self) -> None:
        tree = self.query_one("#workspace-tree", Tree)
        node = tree.cursor_node
        if node is not None and node.data is not None and node.data.type == "pdf":
            self._toggle(node.data, node)

    def action_set_range(self) -> None:
        entry = self._cursor_entry()
        if entry is None or entry.type != "pdf":
            return
        self._range_target = entry.id
        self._prompt("range", f"Pages of {entry.name} (e.g. 1-5, 7), empty for all")

    def action_print(self) -> None:
        if not self.selected:
            return
        self._print(self.build_selections())
        self._clear_selection()
        self._rebuild_tree()

    def action_save(self) -> None:
        if not self.selected:
            return
        self._prompt("save", "Save combined PDF as, then Enter")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        mode = self._input_mode
        self._input_mode = None
        event.input.value = ""
        event.input.placeholder = "Press o to open a folder"
        self.query_one("#workspace-tree", Tree).focus()

        if mode == "open" and value:
            self._select_workspace(os.path.abspath(os.path.expanduser(value)))
        elif mode == "range" and self._range_target is not None:
            self._apply_range(self._range_target, value)
        elif mode == "save" and value:
            self._save(self.build_selections(), value)
            self._clear_selection()
            self._rebuild_tree()

    def _apply_range(self, entry_id: int, value: str) -> None:
        if not value:
            self.print_ranges.pop(entry_id, None)
        else:
            try:
                parse_print_range(value)
            except ValueError as e:
                self.add_debug(f"[red]{e}[/red]")
                return
            self.print_ranges[entry_id] = value
        self._rebuild_tree()


def run_app(driver: Optional[PrinterDriver] = None) -> None:
    """Run the PetPrint TextUI app."""
    app = PetPrintApp(driver=driver)
    app.run()
