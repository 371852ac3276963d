from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from attribution_cli.models import Report

console = Console()
err_console = Console(stderr=True)


def warn(message: str):
    err_console.print(f"[yellow]Warning[/yellow]: {escape(message)}", highlight=False)


def error(message: str):
    err_console.print(f"[bold red]Error[/bold red]: {escape(message)}", highlight=False)


def info(message: str):
    err_console.print(f"[dim]{escape(message)}[/dim]", highlight=False)


def build_details_table(report: Report) -> Table:
    table = Table(
        title=f"AI Attribution {report.base_sha[:7]}..{report.head_sha[:7]}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Commit", style="dim", width=9)
    table.add_column("Author")
    table.add_column("Changed (±)", justify="right")
    table.add_column("Label", justify="center")
    for d in report.details:
        label = f"[bold red]{d.label}[/bold red]" if d.is_ai else f"[green]{d.label}[/green]"
        table.add_row(d.short_sha, escape(d.author), str(d.volume), label)
    return table


def format_percent(pct: int) -> str:
    if pct >= 70:
        color = "red bold"
    elif pct >= 30:
        color = "yellow"
    else:
        color = "green"
    return f"[{color}]{pct}%[/{color}]"


def render_verdict(report: Report):
    """Summary panel printed after the per-commit table."""
    totals = report.totals
    declared = f"{report.declared_percent}%" if report.declared_percent is not None else "[dim]not declared[/dim]"
    summary_text = (
        f"  Computed AI% (by diff volume) : {format_percent(report.computed_percent)}\n"
        f"  Declared AI% (from PR body)   : {declared}\n"
        f"  Final AI% (max of both)       : {format_percent(report.final_percent)}\n\n"
        f"  [dim]AI volume {totals.ai_volume} · Human volume {totals.human_volume} · "
        f"Total {totals.total_volume}[/dim]"
    )
    console.print()
    console.print(Panel(
        summary_text,
        title="[bold]Attribution[/bold]",
        border_style="cyan",
        expand=False,
        padding=(1, 4),
    ))
    console.print()
