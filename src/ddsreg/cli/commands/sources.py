"""Sources command - list loaded reference documents."""

import click

from ddsreg.cli.json_output import emit_json, json_error_boundary
from ddsreg.cli.json_schemas import SourcesCommandResponse, document_summary
from ddsreg.cli.rendering import render_documents
from ddsreg.core.context import DdsregContext


@click.command("sources")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
@json_error_boundary
def sources_cmd(ctx: DdsregContext, output_json: bool) -> None:
    """List the loaded reference documents and what they were transcribed from."""
    documents = ctx.registry.documents
    if output_json or ctx.output_json:
        response = SourcesCommandResponse(documents=[document_summary(d) for d in documents])
        emit_json(response.model_dump(mode="json"))
        return
    render_documents(documents)
