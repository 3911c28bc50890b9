"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables/panels are reusable across commands.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.services.publish_pipeline import PublishResult


def print_banner(console: Console, date: str) -> None:
    title = Text("wallcat-relay", style="bold cyan")
    subtitle = Text(f"Let's publish photos of {date}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_summary_table(result: PublishResult) -> Table:
    """One row per channel: published, skipped, or document failed."""

    failed_docs = {image.channel.id: error for image, error in result.document_failures}
    skipped = {channel.id: error for channel, error in result.skipped}

    table = Table(title="Channels")
    table.add_column("Channel", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    for channel in result.channels:
        if channel.id in skipped:
            error = skipped[channel.id]
            table.add_row(channel.title, "[yellow]SKIPPED[/yellow]", f"{error.kind}: {error}")
        elif channel.id in failed_docs:
            table.add_row(channel.title, "[red]FAILED[/red]", str(failed_docs[channel.id]))
        elif result.published:
            table.add_row(channel.title, "[green]SENT[/green]", "")
        else:
            table.add_row(channel.title, "-", "")
    return table
