"""
Calculator CLI commands.

Commands:
- eval: Evaluate one expression step by step
- repl: Interactive menu (calculate, show operations, delete transcripts)
- ops: Show available operators, functions and constants
"""

from __future__ import annotations

from pathlib import Path

import typer

from stepcalc.cli.utils import load_cli_settings
from stepcalc.cli_ui import (
    console,
    print_error,
    print_header,
    print_info,
    print_operations,
    print_steps,
    print_success,
    print_warning,
)
from stepcalc.core.calculator import calculate
from stepcalc.core.config import CalculatorSettings
from stepcalc.core.errors import (
    ExpressionEvalError,
    ExpressionParseError,
    TranscriptError,
    make_parse_error,
)
from stepcalc.core.expression_lang import Evaluator, parse_expression, tokenize
from stepcalc.core.transcripts import delete_transcripts, save_transcript


def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate, e.g. '(2 + 3) * 4'"),
    save: str = typer.Option(
        None, "--save", "-s", help="Save the evaluation steps under this file name"
    ),
    transcripts_dir: Path = typer.Option(  # noqa: B008
        None, "--dir", help="Transcripts directory (default: ./evaluations)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the calculation as JSON"),
) -> None:
    """
    Evaluate an expression step by step.

    Examples:
        stepcalc eval "(2 + 3) * 4"
        stepcalc eval "sin(30) + 4!" --save trig
        stepcalc eval -- "-5 + 2"
    """
    settings = load_cli_settings(transcripts_dir)

    if as_json:
        try:
            calc = calculate(expression, settings)
        except (ExpressionParseError, ExpressionEvalError) as e:
            print_error(e.message)
            raise typer.Exit(code=1)
        typer.echo(calc.model_dump_json(indent=2))
        steps = calc.steps
    else:
        result = _run_expression(expression, settings)
        if result is None:
            raise typer.Exit(code=1)
        steps = result

    if save and not _save(save, steps, settings):
        raise typer.Exit(code=1)


def ops_command() -> None:
    """Show available operators, functions and constants."""
    print_operations()


def repl_command(
    transcripts_dir: Path = typer.Option(  # noqa: B008
        None, "--dir", help="Transcripts directory (default: ./evaluations)"
    ),
) -> None:
    """
    Interactive step-by-step calculator.

    Menu:
        1. Start a new calculation
        2. View available operations
        3. Delete saved evaluations
        4. Quit
    """
    settings = load_cli_settings(transcripts_dir)

    print_header(
        "Welcome to the Step-by-Step Calculator!",
        "This calculator evaluates mathematical expressions step by step!",
    )
    while True:
        console.print("\nMain Menu:")
        console.print("1. Start a new calculation")
        console.print("2. View available commands and calculator operations")
        console.print("3. Delete saved evaluations")
        console.print("4. Quit")

        choice = _ask("Choose an option (1-4)")
        if choice is None or choice == "4":
            print_info("See you next time!")
            return
        if choice == "1":
            _calculator_loop(settings)
        elif choice == "2":
            print_operations()
        elif choice == "3":
            try:
                removed = delete_transcripts(settings.transcripts_dir)
            except TranscriptError as e:
                print_error(f"Failed to delete evaluations: {e.message}")
                continue
            print_success(f"Deleted {removed} saved evaluation(s)")
        else:
            print_error("Invalid option. Please choose a valid number (1-4).")


def _calculator_loop(settings: CalculatorSettings) -> None:
    """Read expressions until 'quit' (or end of input)."""
    while True:
        text = _ask('Enter a mathematical expression (or "quit" to return, "help" for help)')
        if text is None or text.lower() == "quit":
            return
        if text.lower() == "help":
            print_operations()
            continue
        if not text:
            print_error("Please enter a non-empty expression!")
            continue

        steps = _run_expression(text, settings)
        if steps is None:
            continue

        if _offer_save():
            name = _ask("Give the file a name")
            if name:
                _save(name, steps, settings)


def _run_expression(text: str, settings: CalculatorSettings) -> list[str] | None:
    """Run one expression, printing warnings and steps. Returns the steps on success.

    Steps reached before a domain error are still printed.
    """
    stream = tokenize(text, max_length=settings.max_input_length)
    for diagnostic in stream.diagnostics:
        print_warning(diagnostic.message)

    try:
        ast = parse_expression(stream)
    except ExpressionParseError as e:
        _print_parse_error(make_parse_error(e.message, text, e.pos))
        return None

    evaluator = Evaluator(precision=settings.precision)
    try:
        evaluator.evaluate(ast)
    except ExpressionEvalError as e:
        print_steps(evaluator.get_evaluation_steps())
        print_error(e.message)
        return None

    print_steps(evaluator.get_evaluation_steps())
    print_success("Evaluation Complete!")
    return evaluator.get_evaluation_steps()


def _save(name: str, steps: list[str], settings: CalculatorSettings) -> bool:
    try:
        path = save_transcript(name, steps, settings.transcripts_dir)
    except TranscriptError as e:
        print_error(e.message)
        return False
    print_success(f"Evaluation saved to {path}")
    return True


def _print_parse_error(error: ExpressionParseError) -> None:
    print_error(error.message)
    if error.context:
        console.print(error.context.format(), markup=False, highlight=False)


def _ask(prompt: str) -> str | None:
    """Prompt for a line; None on end of input."""
    try:
        return typer.prompt(prompt, default="", show_default=False).strip()
    except typer.Abort:
        return None


def _offer_save() -> bool:
    try:
        return typer.confirm("Would you like to save this evaluation process?", default=False)
    except typer.Abort:
        return False
