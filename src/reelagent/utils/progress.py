"""Console reporting with Rich.

Every line goes to stderr so that ``--json`` output and printed filter
graphs on stdout stay machine-readable. Export steps pass their request id,
which is shown as a short tag so interleaved renders can be told apart.
"""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console(stderr=True)


def _prefix(request_id: str | None) -> str:
    ts = datetime.now().strftime("%H:%M:%S")
    tag = f" [magenta]{request_id}[/magenta]" if request_id else ""
    return f"[dim]\\[{ts}][/dim]{tag}"


def format_seconds(seconds: float) -> str:
    """``4.25s`` below a minute, ``2m05.0s`` above."""
    if seconds < 60:
        return f"{seconds:.2f}s"
    mins, secs = divmod(seconds, 60)
    return f"{int(mins)}m{secs:04.1f}s"


def log(message: str, *, style: str = "bold", request_id: str | None = None) -> None:
    console.print(f"{_prefix(request_id)} {message}", style=style, highlight=False)


def log_step(step: str, message: str, *, request_id: str | None = None) -> None:
    """Log one stage of work, e.g. ``log_step("Compile", "3 clip(s)")``."""
    console.print(
        f"{_prefix(request_id)} [bold cyan]{step}[/bold cyan] {message}",
        highlight=False,
    )


def log_success(message: str, *, request_id: str | None = None) -> None:
    log(f"[green]✓[/green] {message}", style="", request_id=request_id)


def log_warning(message: str, *, request_id: str | None = None) -> None:
    log(f"[yellow]⚠[/yellow] {message}", style="", request_id=request_id)


def log_error(message: str, *, request_id: str | None = None) -> None:
    log(f"[red]✗[/red] {message}", style="", request_id=request_id)


def show_stage_summary(stage: str, elapsed_seconds: float, details: dict) -> None:
    """Panel with one row per detail plus the elapsed wall time."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    for key, value in details.items():
        table.add_row(key, str(value))
    table.add_row("Elapsed", format_seconds(elapsed_seconds))

    console.print(Panel(table, title=f"[bold]{stage} Complete[/bold]", border_style="green"))
