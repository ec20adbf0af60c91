"""CLI interface for nodesweep."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from nodesweep import __version__
from nodesweep.display import (
    console,
    err_console,
    show_error,
    show_scanning_progress,
    show_session_summary,
)
from nodesweep.models import DisplayMode, SizeFormat, SweepConfig
from nodesweep.session import scan_session

log = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="nodesweep",
    help="Find node_modules folders in your home directory and delete the ones you pick",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"nodesweep version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Send package logs to stderr, and to a file if one is given."""
    logger = logging.getLogger("nodesweep")
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(console=err_console, show_path=False)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if verbose or log_file else logging.WARNING)


def resolve_home() -> Path:
    """The invoking user's home directory; exits if it cannot be found."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        show_error(f"Could not determine home directory: {e}")
        raise typer.Exit(1)

    if not home.is_dir():
        show_error(f"Home directory does not exist: {home}")
        raise typer.Exit(1)

    return home


@app.command()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    absolute: bool = typer.Option(
        False, "--absolute/--relative", help="Show full paths instead of paths below home"
    ),
    size_format: SizeFormat = typer.Option(
        SizeFormat.EXACT, "--size-format", help="Exact ('1.2 MB') or abbreviated ('1.2M') sizes"
    ),
    no_sort: bool = typer.Option(False, "--no-sort", help="Disable the sort key (Tab)"),
    no_reverse: bool = typer.Option(False, "--no-reverse", help="Disable the reverse key (R)"),
    numeric_size_sort: bool = typer.Option(
        False, "--numeric-size-sort", help="Sort sizes by byte count instead of by label"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Number of parallel workers"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to a file"),
) -> None:
    """Scan your home directory for node_modules and browse them interactively."""
    configure_logging(verbose, log_file)

    config = SweepConfig(
        display_mode=DisplayMode.ABSOLUTE if absolute else DisplayMode.RELATIVE,
        size_format=size_format,
        enable_sort=not no_sort,
        enable_reverse=not no_reverse,
        numeric_size_sort=numeric_size_sort,
        max_workers=workers,
    )

    home = resolve_home()

    with show_scanning_progress() as progress:
        task = progress.add_task(f"Searching {home}...", total=None)

        def update_progress(stage: str, current: int, total: int):
            if stage == "Measuring":
                progress.update(
                    task, completed=current, total=total, description="Measuring folders..."
                )

        try:
            session = scan_session(home, config, progress_callback=update_progress)
        except OSError as e:
            show_error(f"Could not scan {home}: {e}")
            raise typer.Exit(1)

    log.info("Found %d folders below %s", len(session.entries), home)

    from nodesweep.tui import run_tui

    run_tui(session)
    show_session_summary(session)


if __name__ == "__main__":
    app()
