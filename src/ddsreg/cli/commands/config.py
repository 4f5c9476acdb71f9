"""Config commands - show and change ~/.ddsreg/config.toml.

These commands run on a context without a loaded config or registry, so a
config that stops every other command can still be shown and repaired.
"""

import click

from ddsreg.cli.constants import EXIT_MALFORMED
from ddsreg.cli.ensure import Ensure
from ddsreg.cli.json_output import emit_json
from ddsreg.cli.json_schemas import ConfigShowResponse
from ddsreg.cli.output import machine_output, user_output
from ddsreg.core.config_store import CONFIG_KEYS, ConfigStore, DdsregConfig, update_config
from ddsreg.core.context import DdsregContext


def _stored_settings(store: ConfigStore) -> tuple[list[str], str, str | None]:
    """Stored reference_paths and output_format, plus the validation error if any.

    An invalid config is returned as written rather than rejected.
    """
    try:
        config = store.load()
    except ValueError as e:
        error = str(e)
    else:
        return [str(p) for p in config.reference_paths], config.output_format, None

    try:
        data = store.load_data()
    except ValueError as e:
        Ensure.fail(str(e), EXIT_MALFORMED)
        return [], "", str(e)
    raw_paths = data.get("reference_paths", [])
    paths = [str(p) for p in raw_paths] if isinstance(raw_paths, list) else [str(raw_paths)]
    return paths, str(data.get("output_format", "text")), error


def _warn_invalid(error: str | None) -> None:
    if error is not None:
        user_output(click.style("Warning: ", fg="yellow") + error)


@click.group("config")
def config_group() -> None:
    """Manage ddsreg configuration."""


@config_group.command("show")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
def config_show(ctx: DdsregContext, output_json: bool) -> None:
    """Print the current configuration."""
    store = ctx.config_store
    reference_paths, output_format, error = _stored_settings(store)
    if output_json:
        response = ConfigShowResponse(
            path=str(store.path()),
            exists=store.exists(),
            reference_paths=reference_paths,
            output_format=output_format,
            error=error,
        )
        emit_json(response.model_dump(mode="json"))
        return

    if not store.exists():
        user_output(f"No config file at {store.path()}, showing defaults")
    _warn_invalid(error)
    machine_output(f"reference_paths = {','.join(reference_paths)}")
    machine_output(f"output_format = {output_format}")


@config_group.command("get")
@click.argument("key")
@click.pass_obj
def config_get(ctx: DdsregContext, key: str) -> None:
    """Print the value of KEY."""
    Ensure.invariant(key in CONFIG_KEYS, f"Unknown config key: {key}", EXIT_MALFORMED)
    reference_paths, output_format, error = _stored_settings(ctx.config_store)
    _warn_invalid(error)
    match key:
        case "reference_paths":
            machine_output(",".join(reference_paths))
        case "output_format":
            machine_output(output_format)


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(ctx: DdsregContext, key: str, value: str) -> None:
    """Set KEY to VALUE.

    reference_paths takes a comma-separated list of Markdown files; an empty
    value goes back to the bundled documents. Only KEY is written, so other
    stored values are kept even if they are invalid.
    """
    Ensure.invariant(key in CONFIG_KEYS, f"Unknown config key: {key}", EXIT_MALFORMED)
    try:
        updated = update_config(DdsregConfig(), key, value)
        ctx.config_store.save(updated, keys=(key,))
    except ValueError as e:
        Ensure.fail(str(e), EXIT_MALFORMED)
        return
    user_output(f"Set {key} in {ctx.config_store.path()}")
