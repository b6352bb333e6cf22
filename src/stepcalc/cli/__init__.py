"""
stepcalc command line interface.

    stepcalc eval "(2 + 3) * 4"
    stepcalc repl
    stepcalc ops
    stepcalc transcripts list
"""

import typer

from stepcalc.cli.calc import eval_command, ops_command, repl_command
from stepcalc.cli.transcripts import transcripts_app
from stepcalc.cli.utils import configure_logging, version_callback

# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="""stepcalc – step-by-step expression calculator

Commands:
  • eval: evaluate one expression and print every reduction step
  • repl: interactive calculator menu
  • ops: list operators, functions and constants
  • transcripts: list, show or delete saved evaluations
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Default: ERROR",
    ),
) -> None:
    """stepcalc CLI main callback for global options."""
    configure_logging(log_level)


app.command(name="eval")(eval_command)
app.command(name="repl")(repl_command)
app.command(name="ops")(ops_command)
app.add_typer(transcripts_app, name="transcripts")


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
