"""Rich terminal output for nodesweep outside the TUI."""

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from nodesweep.session import Session
from nodesweep.sizes import format_size_exact

console = Console()
err_console = Console(stderr=True)


def show_scanning_progress() -> Progress:
    """Create progress bar for the startup scan."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    )


def show_error(message: str) -> None:
    """Print an error line to stderr."""
    err_console.print(f"[red]Error: {message}[/red]")


def show_session_summary(session: Session) -> None:
    """Print what happened during the session, after the TUI closes."""
    if not session.deleted_count:
        console.print("[dim]Nothing deleted.[/dim]")
        return

    console.print(
        f"[green]✓[/green] Deleted {session.deleted_count} folders, "
        f"{format_size_exact(session.freed_bytes)} freed"
    )
