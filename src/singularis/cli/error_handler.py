"""CLI error handler.

Turns SingularisError (and anything else that escapes a command) into either
a short rich-formatted report or a JSON object on stderr.
"""

import json
import sys
from typing import NoReturn

from rich.console import Console
from rich.text import Text

from singularis.core.errors import ErrorCode, SingularisError

_ICONS = {
    "runtime": "⚡",
    "quantum": "⚛",
    "validation": "✓",
    "config": "⚙",
    "io": "📁",
}


def as_singularis_error(error: Exception) -> SingularisError:
    if isinstance(error, SingularisError):
        return error
    return SingularisError(
        code=ErrorCode.RUNTIME_STATE_INVALID,
        context={"detail": str(error)},
        cause=error,
    )


def handle_error(error: Exception, json_output: bool = False) -> NoReturn:
    """Report ``error`` and exit with status 1.

    Args:
        error: The error to report
        json_output: If True, write the error as JSON to stderr

    Raises:
        SystemExit: Always exits with code 1
    """
    error = as_singularis_error(error)

    if json_output:
        error_dict = error.to_dict()
        if error.cause:
            error_dict["cause"] = str(error.cause)
        print(json.dumps(error_dict), file=sys.stderr)
        sys.exit(1)

    _print_human_error(error)
    sys.exit(1)


def _print_human_error(error: SingularisError) -> None:
    console = Console(stderr=True)

    header = Text()
    header.append(f"{_ICONS.get(error.category, '✗')} ", style="bold")
    header.append(error.error_id, style="bold red")
    header.append(f" {error.message}")
    console.print(header)

    if error.recovery_hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(error.recovery_hints, 1):
            console.print(f"  {i}. {hint}")
