"""
Rich output helpers for the stepcalc CLI.
"""

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

console = Console()
err_console = Console(stderr=True)


# Style definitions
STYLES = {
    "title": Style(color="bright_cyan", bold=True),
    "subtitle": Style(color="bright_black"),
    "step": Style(color="white"),
    "result": Style(color="bright_white", bold=True),
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "info": Style(color="cyan"),
    "muted": Style(color="bright_black"),
}


def print_header(title: str, subtitle: str = "") -> None:
    """Print a styled header."""
    console.print()
    console.print(Text(title, style=STYLES["title"]))
    if subtitle:
        console.print(Text(subtitle, style=STYLES["subtitle"]))
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(message, style=STYLES["success"]))


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(Text(f"Error: {message}", style=STYLES["error"]))


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(Text(f"Warning: {message}", style=STYLES["warning"]))


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(Text(message, style=STYLES["info"]))


def print_steps(steps: Sequence[str]) -> None:
    """Print evaluation steps, one ``= step`` line each; the last is highlighted."""
    for i, step in enumerate(steps):
        style = STYLES["result"] if i == len(steps) - 1 else STYLES["step"]
        console.print(Text(f"= {step}", style=style))


OPERATIONS: list[tuple[str, str, str]] = [
    ("+  -  *  /", "Basic arithmetic", "2 + 3 * 4"),
    ("^", "Exponentiation", "2 ^ 3"),
    ("!", "Factorial (after a number, constant, group or call)", "5!"),
    ("sin cos tg cotg sec csc", "Trigonometric functions (degrees)", "sin(30)"),
    ("asin acos atg actg", "Inverse trigonometric functions (degrees)", "asin(0.5)"),
    ("log(base, number)", "Logarithm, base 2 when omitted", "log(2, 8)"),
    ("ln", "Natural logarithm", "ln(e)"),
    ("sqrt", "Square root", "sqrt(16)"),
    ("abs", "Absolute value", "abs(-3)"),
    ("pi  e", "Constants (3.14, 2.72)", "2 * pi"),
    ("( )", "Parentheses for grouping", "(2 + 3) * 4"),
]


def print_operations() -> None:
    """Print the table of supported operators, functions and constants."""
    table = Table(title="Available calculator operations", box=box.ROUNDED)
    table.add_column("Operator", style="bold cyan", no_wrap=True)
    table.add_column("Meaning")
    table.add_column("Example", style=STYLES["muted"])
    for symbol, meaning, example in OPERATIONS:
        table.add_row(symbol, meaning, example)
    console.print(table)
