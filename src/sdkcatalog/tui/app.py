"""Textual TUI for browsing an Android SDK package catalog."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, LoadingIndicator, Static, Tree
from textual.widgets.tree import TreeNode
from textual.worker import Worker, WorkerState

from sdkcatalog.api import filter_packages, group_by_category, load_catalog, summarize
from sdkcatalog.core.catalog import sort_packages
from sdkcatalog.core.parser import InstallState, Package
from sdkcatalog.core.sections import DEFAULT_LAYOUT, ReportLayout

# Welcome banner: SDKCAT (all lines must be same length for proper centering)
WELCOME_BANNER = """\
[bold green]
███████╗██████╗ ██╗  ██╗ ██████╗ █████╗ ████████╗
██╔════╝██╔══██╗██║ ██╔╝██╔════╝██╔══██╗╚══██╔══╝
███████╗██║  ██║█████╔╝ ██║     ███████║   ██║   
╚════██║██║  ██║██╔═██╗ ██║     ██╔══██║   ██║   
███████║██████╔╝██║  ██╗╚██████╗██║  ██║   ██║   
╚══════╝╚═════╝ ╚═╝  ╚═╝ ╚═════╝╚═╝  ╚═╝   ╚═╝   
[/bold green]"""

WELCOME_DESC = """[dim]Browse the packages of an Android SDK root.
Load the output of 'sdkmanager --list' to see what is installed,
what can be updated, and what else is available.[/]"""

# Limits to keep the tree responsive on full channel listings
MAX_PACKAGES_PER_CATEGORY = 200

# Colors: install states and tree
COLOR_INSTALLED = "bold green"
COLOR_UPDATEABLE = "bold yellow"
COLOR_AVAILABLE = "dim"
COLOR_HEADER = "bold magenta"
COLOR_CATEGORY = "bold cyan"
COLOR_STATS = "cyan"
COLOR_PATH = "dim"

_STATE_COLORS = {
    InstallState.INSTALLED: COLOR_INSTALLED,
    InstallState.UPDATEABLE: COLOR_UPDATEABLE,
    InstallState.AVAILABLE: COLOR_AVAILABLE,
}


def _state_color(state: InstallState) -> str:
    return _STATE_COLORS.get(state, COLOR_AVAILABLE)


def _package_label(pkg: Package) -> str:
    """Tree label: name and version, colored by state."""
    color = _state_color(pkg.state)
    version = pkg.version or "?"
    return f"[{color}]{pkg.name}[/] [dim]{version}[/]"


def _category_label(category: str, packages: list[Package]) -> str:
    installed = sum(1 for p in packages if p.is_installed)
    updates = sum(1 for p in packages if p.state is InstallState.UPDATEABLE)
    extra = f", [{COLOR_UPDATEABLE}]{updates} update(s)[/]" if updates else ""
    return f"[{COLOR_CATEGORY}]{category}[/] [dim]({installed}/{len(packages)} installed{extra})[/]"


def _format_package(pkg: Package) -> str:
    """Details panel text for one package."""
    color = _state_color(pkg.state)
    lines = [
        f"[{COLOR_HEADER}]Package[/]",
        f"  {pkg.raw_name}",
        "",
        f"[{COLOR_HEADER}]State[/]",
        f"  [{color}]{pkg.state.value}[/]",
        "",
        f"[{COLOR_HEADER}]Version[/]",
    ]
    if pkg.state is InstallState.UPDATEABLE:
        lines.append(
            f"  Installed: [{COLOR_STATS}]{pkg.installed_version}[/]  ·  "
            f"Available: [{COLOR_UPDATEABLE}]{pkg.available_version}[/]"
        )
    else:
        lines.append(f"  [{COLOR_STATS}]{pkg.version or '?'}[/]")
    lines += [
        "",
        f"[{COLOR_HEADER}]Description[/]",
        f"  {pkg.description or '(no description)'}",
    ]
    if pkg.location:
        lines += ["", f"[{COLOR_HEADER}]Location[/]", f"  [{COLOR_PATH}]{pkg.location}[/]"]
    return "\n".join(lines)


def _format_summary(packages: list[Package]) -> str:
    summary = summarize(packages)
    return (
        f"[{COLOR_HEADER}]Catalog[/]\n\n"
        f"Total: [{COLOR_STATS}]{summary['total']}[/] packages  ·  "
        f"[{COLOR_INSTALLED}]Installed: {summary['installed']}[/]  ·  "
        f"[{COLOR_UPDATEABLE}]Updateable: {summary['updateable']}[/]  ·  "
        f"Available: {summary['available']}\n\n"
        "[dim]↑/↓[/] move  ·  [dim]Enter[/]/[dim]Space[/] select  ·  "
        "[dim]s[/] = Sort  ·  [dim]u[/] = Updates only  ·  [dim]o[/] = Open report"
    )


class SearchScreen(ModalScreen[str | None]):
    """Modal to search for packages in the tree. Keyboard-only."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    SearchScreen {
        align: center middle;
        padding: 2 4;
    }
    SearchScreen #search_title {
        text-align: center;
        padding-bottom: 1;
    }
    SearchScreen #search_input {
        width: 60;
        margin: 1 0;
    }
    SearchScreen #search_hint {
        text-align: center;
        padding-top: 1;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._input: Input | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(
                "[bold cyan]Search[/]\n\n"
                "Type part of a package path or description.",
                id="search_title",
                markup=True,
            )
            yield Input(
                placeholder="e.g. android-30, build-tools...",
                id="search_input",
            )
            yield Static(
                "[dim]Enter[/] = Search  ·  [dim]Escape[/] = Cancel\n"
                "[dim]After search: [bold]n[/bold] = next match, [bold]N[/bold] = previous[/]",
                id="search_hint",
                markup=True,
            )

    def on_mount(self) -> None:
        self._input = self.query_one("#search_input", Input)
        self._input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "search_input":
            return
        value = self._input.value.strip() if self._input else ""
        self.dismiss(value if value else None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class OpenReportScreen(ModalScreen[Path | None]):
    """Modal to enter the path of a report file. Keyboard-only: type path, Enter to open, Escape to cancel."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    OpenReportScreen {
        align: center middle;
        padding: 2 4;
    }
    OpenReportScreen #open_report_title {
        text-align: center;
        padding-bottom: 1;
    }
    OpenReportScreen #open_report_input {
        width: 60;
        margin: 1 0;
    }
    OpenReportScreen #open_report_hint {
        text-align: center;
        padding-top: 1;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._input: Input | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(
                "[bold cyan]Open report[/]\n\n"
                "Path to a file holding the output of 'sdkmanager --list'.",
                id="open_report_title",
                markup=True,
            )
            yield Input(
                placeholder="/path/to/sdkmanager-list.txt",
                id="open_report_input",
            )
            yield Static(
                "[dim]Enter[/] = Open  ·  [dim]Escape[/] = Cancel",
                id="open_report_hint",
                markup=True,
            )

    def on_mount(self) -> None:
        self._input = self.query_one("#open_report_input", Input)
        self._input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Submit on Enter so no mouse/click needed."""
        if event.input.id != "open_report_input":
            return
        self._do_submit()

    def _do_submit(self) -> None:
        value = self._input.value.strip() if self._input else ""
        if not value:
            self.dismiss(None)
            return
        p = Path(value).expanduser().resolve()
        if not p.exists():
            self.notify(f"File does not exist: {p}", severity="warning", timeout=3)
            return
        if not p.is_file():
            self.notify(f"Not a file: {p}", severity="warning", timeout=3)
            return
        self.dismiss(p)

    def action_cancel(self) -> None:
        self.dismiss(None)


class CatalogApp(App[None]):
    """Terminal UI to explore the packages of an Android SDK root."""

    TITLE = "sdkcatalog"
    BINDINGS = [
        Binding("enter", "start_main", "Start", show=False),
        Binding("o", "open_report", "Open report"),
        Binding("/", "search", "Search"),
        Binding("f", "search", "Search", show=False),
        Binding("n", "next_match", "Next match", show=False),
        Binding("N", "prev_match", "Prev match", show=False),
        Binding("s", "toggle_sort", "Sort"),
        Binding("u", "toggle_updates", "Updates only"),
        Binding("d", "toggle_details", "Details"),
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Reload"),
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse"),
    ]

    def __init__(
        self,
        report_path: Path | None = None,
        layout: ReportLayout = DEFAULT_LAYOUT,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._report_path = report_path
        self._layout = layout
        self._main_started = False
        self._sort_order = "asc"
        self._updates_only = False
        self._search_query: str = ""
        self._search_matches: list[TreeNode] = []
        self._search_index: int = 0
        self._details_visible: bool = True
        # Background loading state
        self._catalog: list[Package] | None = None
        self._loading: bool = False
        self._load_error: str | None = None

    DEFAULT_CSS = """
    /* Welcome screen styles */
    #welcome_container {
        align: center middle;
        width: 100%;
        height: 100%;
    }
    #welcome_banner {
        text-align: center;
        content-align: center middle;
        width: 100%;
    }
    #welcome_desc {
        text-align: center;
        padding: 2 4;
    }
    #welcome_hint {
        text-align: center;
        padding-top: 1;
    }
    #welcome_loading {
        text-align: center;
        padding-top: 1;
        display: none;
    }
    #welcome_loading.loading {
        display: block;
    }
    #welcome_loading LoadingIndicator {
        background: transparent;
    }
    /* Main view styles */
    #main_container {
        display: none;
    }
    #details {
        padding: 1 2;
        border: solid $primary;
        height: auto;
        min-height: 8;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        # Welcome view (initial)
        with Container(id="welcome_container"):
            yield Static(WELCOME_BANNER, id="welcome_banner", markup=True)
            yield Static(WELCOME_DESC, id="welcome_desc", markup=True)
            yield Static(
                "[cyan]Enter[/] to explore  ·  [dim]o[/] to open a report  ·  [dim]q[/] to quit",
                id="welcome_hint",
                markup=True,
            )
            # Loading indicator (shown while parsing)
            with Container(id="welcome_loading"):
                yield LoadingIndicator()
                yield Static("[dim]Reading report...[/]", id="loading_text", markup=True)
        # Main view (hidden initially)
        with Container(id="main_container"):
            yield Tree("Packages", id="pkg_tree")
            yield Static(
                "[dim]↑/↓[/] move  ·  [dim]Enter[/]/[dim]Space[/] select  ·  [dim]o[/] = Open report",
                id="details",
            )
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "SDK Package Catalog"
        self._start_load()

    def on_key(self, event: Any) -> None:
        """Handle key events - specifically Enter on welcome screen."""
        if not self._main_started and event.key == "enter":
            event.prevent_default()
            event.stop()
            self.action_start_main()

    def _start_load(self) -> None:
        """Start reading the report in the background."""
        if self._report_path is None or self._loading:
            return
        self._loading = True
        self._load_error = None
        try:
            self.query_one("#welcome_loading").add_class("loading")
        except Exception:
            pass
        self.run_worker(self._load_worker, thread=True, exit_on_error=False)

    def _load_worker(self) -> list[Package]:
        """Worker that reads and parses the report in a background thread."""
        catalog = load_catalog(self._report_path, layout=self._layout)
        if catalog is None:
            raise OSError(f"Cannot read report: {self._report_path}")
        return catalog

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Handle worker completion."""
        if event.state == WorkerState.SUCCESS:
            self._catalog = event.worker.result
            self._loading = False
            self._load_error = None
            self._update_loading_status()
            if self._main_started:
                self._load_main_view()
        elif event.state == WorkerState.ERROR:
            self._loading = False
            self._load_error = str(event.worker.error)
            self._update_loading_status()
            if self._main_started:
                self._load_main_view()

    def _update_loading_status(self) -> None:
        """Update loading indicator status."""
        try:
            loading_container = self.query_one("#welcome_loading")
            loading_text = self.query_one("#loading_text", Static)
            if self._catalog is not None:
                loading_container.remove_class("loading")
                hint = self.query_one("#welcome_hint", Static)
                hint.update(
                    f"[green]✓[/] {len(self._catalog)} packages loaded  ·  "
                    "[cyan]Enter[/] to explore  ·  [dim]q[/] to quit"
                )
            elif self._load_error:
                loading_text.update(f"[red]Error: {self._load_error}[/]")
        except Exception:
            pass

    def action_start_main(self) -> None:
        """Transition from welcome screen to main view."""
        if self._main_started:
            return
        self._main_started = True
        try:
            self.query_one("#welcome_container").styles.display = "none"
            self.query_one("#main_container").styles.display = "block"
        except Exception:
            pass
        self._load_main_view()

    def _clear_tree(self, tree: Tree) -> None:
        while tree.root.children:
            tree.root.children[0].remove()

    def _visible_packages(self) -> list[Package]:
        packages = self._catalog or []
        if self._updates_only:
            packages = filter_packages(packages, states=[InstallState.UPDATEABLE])
        return sort_packages(packages, self._sort_order)

    def _load_main_view(self) -> None:
        tree = self.query_one("#pkg_tree", Tree)
        self._clear_tree(tree)
        self._search_matches = []
        try:
            if self._loading:
                tree.root.label = f"[{COLOR_HEADER}]Loading report...[/]"
                tree.root.add_leaf("[dim]Parsing, please wait...[/]")
                self._set_details("[dim]Reading report in background...[/]")
                return
            if self._load_error:
                tree.root.label = f"[{COLOR_HEADER}]Packages[/]"
                tree.root.add_leaf("[dim]Error loading report[/]")
                self._set_details(f"[red]Error: {self._load_error}[/]\n\n[dim]o[/] = Open report")
                return
            if self._catalog is None:
                tree.root.label = f"[{COLOR_HEADER}]Packages[/]"
                tree.root.add_leaf("[dim]No report loaded[/]")
                self._set_details(
                    "No report loaded. Save the output of 'sdkmanager --list' to a file "
                    "and open it.\n\n[dim]o[/] = Open report"
                )
                return

            packages = self._visible_packages()
            order = "A→Z" if self._sort_order == "asc" else "Z→A"
            scope = "updates" if self._updates_only else "all"
            tree.root.label = f"[{COLOR_HEADER}]Packages ({scope}, {order})[/]"
            if not packages:
                tree.root.add_leaf("[dim]No packages[/]")
            for category, pkgs in group_by_category(packages).items():
                category_node = tree.root.add(
                    _category_label(category, pkgs),
                    expand=self._updates_only,
                )
                for pkg in pkgs[:MAX_PACKAGES_PER_CATEGORY]:
                    leaf = category_node.add_leaf(_package_label(pkg))
                    leaf.data = pkg
                if len(pkgs) > MAX_PACKAGES_PER_CATEGORY:
                    category_node.add_leaf(
                        f"[dim]… and {len(pkgs) - MAX_PACKAGES_PER_CATEGORY} more[/]"
                    )
            tree.root.expand()
            self._set_details(_format_summary(self._catalog))
        finally:
            try:
                tree.focus()
            except Exception:
                pass

    def _set_details(self, text: str) -> None:
        details = self.query_one("#details", Static)
        details.update(text)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        pkg = event.node.data
        if isinstance(pkg, Package):
            self._set_details(_format_package(pkg))

    def action_refresh(self) -> None:
        """Reload the report from disk."""
        if self._report_path is None:
            self.notify("No report to reload. Press o to open one.", severity="information", timeout=2)
            return
        self._catalog = None
        self._start_load()
        if self._main_started:
            self._load_main_view()

    def action_open_report(self) -> None:
        """Open modal to choose a report file."""
        self.push_screen(OpenReportScreen(), self._on_open_report_done)

    def _on_open_report_done(self, path: Path | None) -> None:
        if path is None:
            return
        self._report_path = path
        self.notify(f"Opening: {path}", severity="information", timeout=2)
        if not self._main_started:
            self.action_start_main()
        self.action_refresh()

    def action_toggle_sort(self) -> None:
        self._sort_order = "desc" if self._sort_order == "asc" else "asc"
        if self._main_started:
            self._load_main_view()

    def action_toggle_updates(self) -> None:
        self._updates_only = not self._updates_only
        if self._main_started:
            self._load_main_view()

    def action_expand_all(self) -> None:
        tree = self.query_one("#pkg_tree", Tree)
        try:
            tree.root.expand_all()
        except Exception:
            tree.root.expand()

    def action_collapse_all(self) -> None:
        tree = self.query_one("#pkg_tree", Tree)
        try:
            tree.root.collapse_all()
            tree.root.expand()
        except Exception:
            pass

    def action_search(self) -> None:
        """Open search modal."""
        if not self._main_started:
            return
        self.push_screen(SearchScreen(), self._on_search_done)

    def _on_search_done(self, query: str | None) -> None:
        if not query:
            return
        self._search_query = query.lower()
        self._search_matches = []
        self._search_index = 0

        tree = self.query_one("#pkg_tree", Tree)
        self._collect_matches(tree.root, query.lower())

        if not self._search_matches:
            self.notify(f"No matches for '{query}'", severity="warning", timeout=2)
            return

        self.notify(
            f"Found {len(self._search_matches)} match(es) for '{query}'",
            severity="information",
            timeout=2,
        )
        self._goto_match(0)

    def _collect_matches(self, node: TreeNode, query: str) -> None:
        """Recursively collect package nodes matching the search query."""
        pkg = node.data
        if isinstance(pkg, Package):
            if query in pkg.raw_name.lower() or query in pkg.description.lower():
                self._search_matches.append(node)
        for child in node.children:
            self._collect_matches(child, query)

    def _goto_match(self, index: int) -> None:
        """Navigate to and select a specific match."""
        if not self._search_matches:
            return
        self._search_index = index % len(self._search_matches)
        match_node = self._search_matches[self._search_index]

        # Expand all ancestors so the node is visible
        parent = match_node.parent
        while parent is not None:
            parent.expand()
            parent = parent.parent

        tree = self.query_one("#pkg_tree", Tree)
        tree.select_node(match_node)
        tree.scroll_to_node(match_node)

        total = len(self._search_matches)
        current = self._search_index + 1
        self.notify(
            f"Match {current}/{total}: {match_node.data.raw_name}",
            severity="information",
            timeout=2,
        )

    def action_next_match(self) -> None:
        """Go to next search match."""
        if not self._search_matches:
            self.notify("No active search. Press / to search.", severity="information", timeout=2)
            return
        self._goto_match(self._search_index + 1)

    def action_prev_match(self) -> None:
        """Go to previous search match."""
        if not self._search_matches:
            self.notify("No active search. Press / to search.", severity="information", timeout=2)
            return
        self._goto_match(self._search_index - 1)

    def action_toggle_details(self) -> None:
        """Toggle visibility of the details panel."""
        self._details_visible = not self._details_visible
        try:
            details = self.query_one("#details", Static)
            details.styles.display = "block" if self._details_visible else "none"
        except Exception:
            pass

    def action_quit(self) -> None:
        self.exit()


def main() -> None:
    """Entry point for the sdkcatalog TUI."""
    report = None
    if len(sys.argv) > 1:
        report = Path(sys.argv[1].strip())
    app = CatalogApp(report_path=report)
    app.run()


if __name__ == "__main__":
    main()
