"""
stepcalc CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import os
import platform
from pathlib import Path

import typer

from stepcalc._version import get_version
from stepcalc.core.config import LOG_LEVEL_VAR, CalculatorSettings, load_settings
from stepcalc.core.errors import ConfigError

DEFAULT_LOG_LEVEL = "ERROR"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        try:
            import stepcalc

            install_location = Path(stepcalc.__file__).parent
        except Exception:
            install_location = Path.cwd()

        typer.echo(f"stepcalc version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Location:      {install_location}")

        raise typer.Exit()


def configure_logging(level: str | None) -> None:
    """Configure root logging from --log-level or STEPCALC_LOG_LEVEL."""
    name = (level or os.getenv(LOG_LEVEL_VAR, DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.ERROR),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_cli_settings(transcripts_dir: Path | None = None) -> CalculatorSettings:
    """Load settings for a command, exiting with code 1 on a bad config."""
    try:
        settings = load_settings()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if transcripts_dir is not None:
        settings.transcripts_dir = transcripts_dir
    return settings
