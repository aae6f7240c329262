"""Rich-powered console output for Chronos."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from chronos.context.models import ContextReport, ExclusionReason
from chronos.graph.models import Entity


class Console:
    """Terminal output for Chronos using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole()

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def show_report(self, report: ContextReport, show_excluded: bool = False) -> None:
        """Display a context report: budget panel, breakdown and entity table."""
        pct = report.budget_used_pct
        color = "green" if pct < 80 else "yellow" if pct <= 100 else "red"
        b = report.breakdown

        self.console.print(
            Panel(
                f"[bold]Anchor:[/bold] {report.anchor_id}\n"
                f"[bold]Tokens:[/bold] [{color}]~{report.estimated_tokens:,}[/{color}]"
                f" / {report.token_budget:,} ({pct:.0f}%)\n"
                f"[bold]Included:[/bold] {len(report.included_entities)}"
                f"   [bold]Excluded:[/bold] {len(report.excluded_entities)}"
                f"   [bold]Candidates:[/bold] {report.candidates_considered}\n"
                f"{b.characters} characters · {b.locations} locations · "
                f"{b.timelines} timelines · {b.events} events · "
                f"{b.themes} themes · {b.concepts} concepts",
                title="[bold]Smart Context[/bold]",
                border_style=color,
            )
        )

        if not report.anchor_included:
            self.warning("The anchor itself did not fit the token budget")

        table = Table(title="Included Entities", border_style="cyan")
        table.add_column("Entity", style="bold")
        table.add_column("Type", style="dim")
        table.add_column("Reason")
        for entity in report.included_entities:
            table.add_row(
                entity.name, entity.entity_type, report.inclusion_reasons.get(entity.id, "")
            )
        self.console.print(table)

        over_budget = [
            e for e in report.excluded_entities
            if report.exclusion_reasons.get(e.id) == ExclusionReason.OVER_BUDGET
        ]
        if over_budget:
            self.warning(f"{len(over_budget)} selected entities dropped for budget:")
            for entity in over_budget:
                self.console.print(f"  [yellow]{entity.name}[/yellow] [dim]({entity.entity_type})[/dim]")

        if show_excluded:
            self.console.print("\n[bold]Excluded:[/bold]")
            for entity in report.excluded_entities:
                self.console.print(f"  [dim]{entity.name} ({entity.entity_type})[/dim]")

    def show_events(self, events: list[Entity]) -> None:
        """Display anchorable events in story order."""
        table = Table(title="Events", border_style="cyan")
        table.add_column("Order", justify="right", style="cyan")
        table.add_column("Id", style="dim")
        table.add_column("Name", style="bold")
        for event in events:
            order = "" if event.sort_order is None else str(event.sort_order)
            table.add_row(order, event.id, event.name)
        self.console.print(table)

    def show_stats(self, stats: dict[str, int]) -> None:
        """Display snapshot statistics."""
        table = Table(title="Graph Statistics", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Count", justify="right", style="cyan")
        for key, count in sorted(stats.items()):
            table.add_row(key, str(count))
        self.console.print(table)
