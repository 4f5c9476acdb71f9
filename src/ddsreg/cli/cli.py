import logging
import os
from pathlib import Path

import click

from ddsreg.cli.commands.check import check_cmd
from ddsreg.cli.commands.config import config_group
from ddsreg.cli.commands.find import find_cmd
from ddsreg.cli.commands.keys import keys_cmd
from ddsreg.cli.commands.list_cmd import list_cmd
from ddsreg.cli.commands.lookup import lookup_cmd
from ddsreg.cli.commands.sources import sources_cmd
from ddsreg.cli.commands.validate import validate_cmd
from ddsreg.cli.constants import EXIT_MALFORMED
from ddsreg.cli.ensure import Ensure
from ddsreg.core.context import create_config_context, create_context
from ddsreg.core.errors import MalformedEntryError

# Enable debug logging if DDSREG_DEBUG environment variable is set
if os.getenv("DDSREG_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ddsreg")
@click.option(
    "--reference",
    "reference_paths",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="Reference document to load instead of the bundled ones (repeatable).",
)
@click.pass_context
def cli(ctx: click.Context, reference_paths: tuple[Path, ...]) -> None:
    """Look up MSDDS and Microsoft Data Tools COM identifiers and registry entries."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is not None:
        return
    if ctx.invoked_subcommand == config_group.name:
        ctx.obj = create_config_context()
        return
    try:
        ctx.obj = create_context(reference_paths)
    except MalformedEntryError as e:
        Ensure.fail(f"Malformed reference document: {e}", EXIT_MALFORMED)
    except (FileNotFoundError, ValueError) as e:
        Ensure.fail(str(e), EXIT_MALFORMED)


cli.add_command(lookup_cmd)
cli.add_command(find_cmd)
cli.add_command(validate_cmd)
cli.add_command(check_cmd)
cli.add_command(list_cmd)
cli.add_command(keys_cmd)
cli.add_command(sources_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `ddsreg` console script."""
    cli()
