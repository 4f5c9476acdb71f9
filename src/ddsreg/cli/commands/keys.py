"""Keys command - show registry values under a key path."""

import click

from ddsreg.cli.constants import EXIT_NOT_FOUND
from ddsreg.cli.ensure import Ensure
from ddsreg.cli.json_output import emit_json, json_error_boundary
from ddsreg.cli.json_schemas import KeysCommandResponse, registry_value_info
from ddsreg.cli.rendering import render_registry_values
from ddsreg.core.context import DdsregContext


@click.command("keys")
@click.argument("prefix", required=False, default="")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
@json_error_boundary
def keys_cmd(ctx: DdsregContext, prefix: str, output_json: bool) -> None:
    """Show registry values under PREFIX (all values if omitted).

    PREFIX matches whole key names, case-insensitively; HKCR is accepted for
    HKEY_CLASSES_ROOT.
    """
    values = ctx.registry.find_keys(prefix)

    if output_json or ctx.output_json:
        response = KeysCommandResponse(
            prefix=prefix,
            count=len(values),
            values=[registry_value_info(v) for v in values],
        )
        emit_json(response.model_dump(mode="json"))
        if not values:
            raise SystemExit(EXIT_NOT_FOUND)
        return

    Ensure.invariant(bool(values), f"No registry values under {prefix}")
    render_registry_values(values)
