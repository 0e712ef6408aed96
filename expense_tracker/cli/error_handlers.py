"""Error handling for CLI commands.

Domain errors are shown as one coloured line plus an optional hint and
mapped to distinct exit codes:

====  ==========================================
1     configuration error (invalid settings)
2     email delivery failed
3     validation failed or value already taken
4     any other domain error
5     authentication failed
7     record not found
130   cancelled by the user
255   unexpected error
====  ==========================================
"""

import sys
import traceback

import click
from pydantic import ValidationError

from expense_tracker.cli.utils.formatters import format_error, format_warning
from expense_tracker.errors import (
    AuthenticationError,
    ConflictError,
    EmailDeliveryError,
    NotFoundError,
    TrackerError,
    ValidationFailedError,
)

# Most specific first
EXIT_CODES = [
    (NotFoundError, 7, "Not Found"),
    (AuthenticationError, 5, "Authentication Failed"),
    (ValidationFailedError, 3, "Validation Error"),
    (ConflictError, 3, "Conflict"),
    (EmailDeliveryError, 2, "Email Error"),
    (TrackerError, 4, "Error"),
]


def handle_cli_error(error: BaseException, debug: bool = False) -> int:
    """Print a user-friendly message for an error.

    Args:
        error: The exception that occurred
        debug: Whether to print the full stack trace for unexpected errors

    Returns:
        Exit code for the process
    """
    for error_type, exit_code, title in EXIT_CODES:
        if isinstance(error, error_type):
            click.echo(format_error(f"{title}: {error.message}"))
            for issue in getattr(error, "issues", [])[1:]:
                click.echo(f"  - {issue}")
            if error.recovery_hint:
                click.echo(format_warning(f"Hint: {error.recovery_hint}"))
            return exit_code

    if isinstance(error, ValidationError):
        click.echo(format_error("Configuration Error"))
        for problem in error.errors():
            location = ".".join(str(part) for part in problem["loc"])
            click.echo(f"  - {location}: {problem['msg']}")
        click.echo(format_warning("Hint: Check your environment variables and .env file"))
        return 1

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))
    if debug:
        click.echo("\nFull stack trace:")
        click.echo(
            "".join(traceback.format_exception(type(error), error, error.__traceback__))
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))
    return 255


class ErrorHandler:
    """Context manager that turns errors into an exit code.

    Example:
        with ErrorHandler(debug):
            run_export()
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is not None and not isinstance(exc_val, (SystemExit, click.exceptions.Exit)):
            sys.exit(handle_cli_error(exc_val, self.debug))
        return False
