"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from collections.abc import Callable
from dataclasses import asdict, is_dataclass
from enum import Enum
from functools import wraps
from pathlib import Path
from typing import Any

import click
from pydantic import BaseModel, ConfigDict, Field

from ddsreg.cli.constants import EXIT_MALFORMED, EXIT_NOT_FOUND
from ddsreg.cli.output import machine_output, user_output
from ddsreg.core.context import DdsregContext
from ddsreg.core.errors import DdsregError, MalformedEntryError


class ErrorResponse(BaseModel):
    """What a query command prints on stdout instead of its response when it fails.

    exit_code repeats the process exit status (1 not found, 2 malformed input)
    so scripts reading only stdout can tell the two apart.
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)


def _serialize_for_json(obj: Any) -> Any:
    """Turn core types into JSON values: GuidKind and other enums by value,
    entries and other dataclasses as dicts, paths as strings.

    Response models are dumped with model_dump(mode="json") before they get here.
    """
    match obj:
        case Enum():
            return obj.value
        case Path():
            return str(obj)
        case dict():
            return {key: _serialize_for_json(value) for key, value in obj.items()}
        case list() | tuple():
            return [_serialize_for_json(item) for item in obj]
        case _ if is_dataclass(obj) and not isinstance(obj, type):
            return _serialize_for_json(asdict(obj))
        case _:
            return obj


def emit_json(data: dict[str, Any]) -> None:
    """Print a command response as indented JSON on stdout."""
    machine_output(json.dumps(_serialize_for_json(data), indent=2))


def emit_json_error(error: str, error_type: str, exit_code: int = 1) -> None:
    """Print an ErrorResponse on stdout and exit with exit_code.

    Nothing goes to stderr, so --json output stays a single JSON document.
    """
    response = ErrorResponse(error=error, error_type=error_type, exit_code=exit_code)
    emit_json(response.model_dump(mode="json"))
    raise SystemExit(exit_code)


def exit_code_for(error: Exception) -> int:
    """Exit code for an error: malformed input or data is 2, anything else 1."""
    if isinstance(error, (ValueError, MalformedEntryError)):
        return EXIT_MALFORMED
    return EXIT_NOT_FOUND


def wants_json(args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
    """Whether a command invocation asked for JSON, by flag or by config."""
    if kwargs.get("output_json"):
        return True
    return bool(args) and isinstance(args[0], DdsregContext) and args[0].output_json


def json_error_boundary(func: Callable) -> Callable:
    """Decorator that turns errors into styled or JSON error output.

    In JSON mode (--json or output_format = "json") any exception becomes a
    JSON ErrorResponse. In text mode DdsregError subclasses become a red
    "Error:" message on stderr; other exceptions bubble up unchanged.
    Exit codes follow exit_code_for().

    Example:
        @click.command()
        @click.option("--json", "output_json", is_flag=True)
        @click.pass_obj
        @json_error_boundary
        def my_command(ctx: DdsregContext, output_json: bool) -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except Exception as e:
            exit_code = exit_code_for(e)
            if wants_json(args, kwargs):
                emit_json_error(str(e), type(e).__name__, exit_code=exit_code)
            if isinstance(e, DdsregError):
                user_output(click.style("Error: ", fg="red") + str(e))
                raise SystemExit(exit_code) from e
            raise

    return wrapper
