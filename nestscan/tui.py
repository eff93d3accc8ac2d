"""Textual TUI — browse nested working copies while the scan runs in the background."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Label

from nestscan.config import ScanConfig
from nestscan.models import Cancelled, Completed, ScanResult
from nestscan.scanner import CancellationToken, find_working_copies
from nestscan.theme import RED, TAGLINE, status_text


class BoundaryTable(DataTable):
    """Scrollable table of discovered working copies."""

    def update_data(self, result: Completed) -> None:
        self.clear(columns=True)
        self.add_columns("Directory", "URL", "Repository root", "Status")
        for node in result.nodes:
            if node.error:
                url = Text(str(node.error), style=RED)
                repo_root = Text("")
            else:
                url, repo_root = Text(node.url), Text(node.repository_root_url)
            self.add_row(Text(node.directory), url, repo_root, status_text(node))


class NestscanApp(App):
    """nestscan — nested svn working copies."""

    CSS = """
    #status {
        height: auto;
        padding: 0 1;
        border: solid $accent;
    }

    #boundaries {
        height: 1fr;
        border: solid $secondary;
    }
    """

    TITLE = "nestscan"
    SUB_TITLE = TAGLINE

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("c", "cancel_scan", "Cancel"),
        Binding("r", "rescan", "Rescan"),
    ]

    def __init__(self, scan_path: str, config: Optional[ScanConfig] = None) -> None:
        super().__init__()
        self.scan_path = scan_path
        self.config = config
        self.token: Optional[CancellationToken] = None
        self.result: Optional[ScanResult] = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label("  Scanning for working copies...", id="status")
        yield BoundaryTable(id="boundaries")
        yield Footer()

    def on_mount(self) -> None:
        self.start_scan()

    def start_scan(self) -> None:
        if self.token is not None:
            self.token.cancel()
        self.token = CancellationToken()
        self._set_status(f"  Scanning {self.scan_path} for working copies...")
        self.run_scan(self.token)

    @work(thread=True)
    def run_scan(self, token: CancellationToken) -> None:
        """Scan in a background thread; results are dropped if cancelled."""
        result = find_working_copies(self.scan_path, self.config, cancelled=token)
        self.call_from_thread(self._show_result, result, token)

    def _show_result(self, result: ScanResult, token: CancellationToken) -> None:
        if token is not self.token:
            # Superseded by a rescan
            return
        self.result = result
        if isinstance(result, Cancelled):
            self._set_status("  Scan cancelled. Press r to rescan.")
            self.query_one(BoundaryTable).clear(columns=True)
            return

        failed = len(result.errors)
        status = f"  {len(result.nodes)} working copies under {result.root}"
        if failed:
            status += f" ({failed} with errors)"
        self._set_status(status)
        self.query_one(BoundaryTable).update_data(result)

    def _set_status(self, text: str) -> None:
        self.query_one("#status", Label).update(Text(text))

    def action_cancel_scan(self) -> None:
        if self.token is not None:
            self.token.cancel()

    def action_rescan(self) -> None:
        self.start_scan()

    async def action_quit(self) -> None:
        if self.token is not None:
            self.token.cancel()
        self.exit()


def run_tui(scan_path: str, config: Optional[ScanConfig] = None) -> None:
    """Launch the nestscan TUI."""
    app = NestscanApp(scan_path, config)
    app.run()
