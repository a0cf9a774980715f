"""Typer CLI root application."""

import typer

from ballot_tracker.core.config import get_settings
from ballot_tracker.core.logging import setup_logging

app = typer.Typer(name="ballot-tracker", help="Ballot tracker code verification CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


def _register_subcommands() -> None:
    """Register all CLI commands."""
    from ballot_tracker.cli.tracker_cmd import search, track

    app.command("track")(track)
    app.command("search")(search)


_register_subcommands()
