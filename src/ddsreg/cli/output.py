"""Output routing for CLI commands.

Human-readable messages and errors go to stderr via user_output; data meant
for other programs (JSON, query results) goes to stdout via machine_output.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a message for the user to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write command output to stdout."""
    click.echo(message, nl=nl)
