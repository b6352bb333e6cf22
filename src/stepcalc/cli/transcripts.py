"""
Saved evaluation commands.

Commands:
- list: List saved evaluations
- show: Print the steps of one saved evaluation
- delete: Delete every saved evaluation
"""

from pathlib import Path

import typer

from stepcalc.cli.utils import load_cli_settings
from stepcalc.cli_ui import console, print_error, print_info, print_steps, print_success
from stepcalc.core.errors import TranscriptError
from stepcalc.core.transcripts import delete_transcripts, list_transcripts, load_transcript

transcripts_app = typer.Typer(
    help="Manage saved step-by-step evaluations.",
    no_args_is_help=True,
)

DIR_OPTION_HELP = "Transcripts directory (default: ./evaluations)"


@transcripts_app.command("list")
def list_command(
    transcripts_dir: Path = typer.Option(None, "--dir", help=DIR_OPTION_HELP),  # noqa: B008
) -> None:
    """List saved evaluations."""
    settings = load_cli_settings(transcripts_dir)
    paths = list_transcripts(settings.transcripts_dir)
    if not paths:
        print_info("No saved evaluations.")
        return
    for path in paths:
        console.print(path.name, markup=False, highlight=False)


@transcripts_app.command("show")
def show_command(
    name: str = typer.Argument(..., help="File name of the saved evaluation"),
    transcripts_dir: Path = typer.Option(None, "--dir", help=DIR_OPTION_HELP),  # noqa: B008
) -> None:
    """Print the steps of a saved evaluation."""
    settings = load_cli_settings(transcripts_dir)
    try:
        steps = load_transcript(name, settings.transcripts_dir)
    except TranscriptError as e:
        print_error(e.message)
        raise typer.Exit(code=1)
    print_steps(steps)


@transcripts_app.command("delete")
def delete_command(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    transcripts_dir: Path = typer.Option(None, "--dir", help=DIR_OPTION_HELP),  # noqa: B008
) -> None:
    """Delete every saved evaluation."""
    settings = load_cli_settings(transcripts_dir)
    if not yes and not typer.confirm("Delete all saved evaluations?", default=False):
        print_info("Cancelled.")
        return
    try:
        removed = delete_transcripts(settings.transcripts_dir)
    except TranscriptError as e:
        print_error(e.message)
        raise typer.Exit(code=1)
    print_success(f"Deleted {removed} saved evaluation(s)")
