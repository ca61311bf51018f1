from __future__ import annotations
from typing import List
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text

from .config import StoreOptions, UNSET
from .models import FileStatus

# fields where UNSET means "let the consumer decide"
SENTINEL_FIELDS = ("read_ahead_queue_depth", "default_timeout")


class Reporter:
    def __init__(self, console: Console) -> None:
        self.console = console

    def options(self, opts: StoreOptions) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Option", style="bold")
        table.add_column("Value")
        for key, value in opts.as_dict().items():
            if value is None or (key in SENTINEL_FIELDS and value == UNSET):
                shown = Text("unset", style="dim")
            else:
                shown = Text(str(value))
            table.add_row(key, shown)
        self.console.print(Panel.fit(table, title=Text("Store options", style="bold blue")))

    def statuses(self, title: str, entries: List[FileStatus]) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Type", width=4)
        table.add_column("Name", style="bold")
        table.add_column("Length", justify="right")
        table.add_column("Owner")
        table.add_column("Permission")
        for e in entries:
            kind = "d" if e.is_directory else "-"
            table.add_row(kind, e.path_suffix or ".", str(e.length), e.owner or "-", e.permission or "-")
        self.console.print(Panel.fit(table, title=Text(title, style="bold blue")))

    def error(self, err: Exception) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {err}")
