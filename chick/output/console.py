"""
Rich console output for chick
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text

from ..models import EnrichmentRecord


class ConsoleOutput:
    """
    Rich console output for enrichment results.

    Label colors: cyan for field names, yellow for the address,
    green for values and red for errors.
    """

    def __init__(self, console: Optional[Console] = None, no_color: bool = False):
        self.console = console or Console(no_color=no_color, highlight=False, soft_wrap=True)

    def _field(self, label: str, value: str, style: str = "green",
               label_style: str = "cyan") -> Text:
        line = Text("  ")
        line.append(label, style=label_style)
        line.append(": ")
        line.append(value, style=style)
        return line

    def print_record(self, record: EnrichmentRecord):
        """Print everything known about one address"""
        header = Text()
        header.append(f"{record.record_type} Record", style="cyan")
        header.append(": ")
        header.append(record.address, style="yellow")
        self.console.print(header)

        if record.reverse_names:
            self.console.print(self._field("PTR Records", ", ".join(record.reverse_names)))

        if record.org_info is not None:
            self.console.print(self._field("Country", record.org_info.country))
            self.console.print(self._field("Organization", record.org_info.org))

        if record.network_servers:
            self.console.print(self._field("I-Line Servers", ", ".join(record.network_servers)))

        if record.failure:
            self.console.print(self._field("Error", record.failure, style="red", label_style="red"))

        self.console.print()

    def print_records(self, records: list[EnrichmentRecord]):
        for record in records:
            self.print_record(record)

    @contextmanager
    def progress(self, total: int) -> Iterator[Progress]:
        """
        Transient "Checking records..." line, refreshed by the caller.

        Yields a Progress whose single task is updated through
        update_progress(); the line is erased when the block exits.
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[yellow]Checking records..."),
            TextColumn("{task.completed}/{task.total} completed"),
            console=self.console,
            transient=True,
            auto_refresh=False
        )
        progress.add_task("check", total=total)
        with progress:
            progress.refresh()
            yield progress

    def update_progress(self, progress: Progress, completed: int, total: int):
        for task in progress.tasks:
            progress.update(task.id, completed=completed, total=total)
        progress.refresh()

    def print_error(self, message: str):
        """Print error message"""
        line = Text()
        line.append("Error", style="bold red")
        line.append(": ")
        line.append(message, style="red")
        self.console.print(line)

    def print_warning(self, message: str):
        """Print warning message"""
        line = Text()
        line.append("Warning", style="yellow")
        line.append(": ")
        line.append(message)
        self.console.print(line)

    def print_cancelled(self):
        self.console.print(Text("Interrupt received, shutting down...", style="yellow"))
        self.console.print(Text("Operation cancelled", style="yellow"))
