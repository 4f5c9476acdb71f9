"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use a red "Error:"
prefix and exit with the code that matches the failure: 1 when something was
not found, 2 when the input itself was malformed.
"""

import click

from ddsreg.cli.constants import EXIT_MALFORMED, EXIT_NOT_FOUND
from ddsreg.cli.output import user_output
from ddsreg.core.types import GuidKind


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def fail(error_message: str, exit_code: int = EXIT_NOT_FOUND) -> None:
        """Output styled error and exit.

        Raises:
            SystemExit: Always, with exit_code
        """
        user_output(click.style("Error: ", fg="red") + error_message)
        raise SystemExit(exit_code)

    @staticmethod
    def invariant(condition: bool, error_message: str, exit_code: int = EXIT_NOT_FOUND) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.
            exit_code: Exit code to use if condition is false

        Raises:
            SystemExit: If condition is false
        """
        if not condition:
            Ensure.fail(error_message, exit_code)

    @staticmethod
    def non_empty_query(text: str, what: str) -> str:
        """Ensure a search string is not blank, otherwise exit as malformed input.

        Returns the text unchanged: surrounding spaces are part of the query.
        """
        Ensure.invariant(bool(text.strip()), f"{what} must not be empty", EXIT_MALFORMED)
        return text


def kind_from_choice(choice: str | None) -> GuidKind | None:
    """Convert a --kind choice to GuidKind."""
    if choice is None:
        return None
    return GuidKind(choice.upper())
