"""Uniform rendering of unexpected CLI errors."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
import typer
from rich.console import Console

from horizon.exceptions import HorizonError

logger = structlog.get_logger(__name__)
console = Console(stderr=True)


def handle_cli_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """Log the error, print a short message and exit with status 1."""
    context = context or {}
    logger.error("CLI command failed", error=str(error), error_type=type(error).__name__, **context)

    if isinstance(error, httpx.HTTPError):
        console.print(f"✗ Network error: {error}", style="bold red")
    elif isinstance(error, HorizonError):
        console.print(f"✗ {error}", style="bold red")
    else:
        console.print(f"✗ Unexpected error ({type(error).__name__}): {error}", style="bold red")
    raise typer.Exit(code=1)
