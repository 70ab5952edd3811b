"""Horizon command-line interface."""

import typer

from horizon.cli.compare import register
from horizon.infrastructure.containers import get_container
from horizon.infrastructure.logging_config import configure_logging

app = typer.Typer(
    name="horizon",
    help="Compare caución, money market and LECAP returns on the Argentine market",
    no_args_is_help=True,
)


@app.callback()
def main_callback() -> None:
    """Configure logging from the environment before any command runs."""
    settings = get_container().settings()
    configure_logging(settings.log_level, settings.log_json)


register(app)


def main() -> None:
    app()
