"""Check command - audit loaded documents for inconsistencies."""

import click

from ddsreg.cli.constants import EXIT_NOT_FOUND
from ddsreg.cli.json_output import emit_json, json_error_boundary
from ddsreg.cli.json_schemas import CheckCommandResponse, finding_info
from ddsreg.cli.output import user_output
from ddsreg.cli.rendering import render_findings
from ddsreg.core.audit import audit_registry
from ddsreg.core.context import DdsregContext


@click.command("check")
@click.option("--json", "output_json", is_flag=True, help="Output JSON format")
@click.pass_obj
@json_error_boundary
def check_cmd(ctx: DdsregContext, output_json: bool) -> None:
    """Report duplicate GUIDs, dangling ProgID references and ProgID mismatches.

    Exits 1 when there are findings.
    """
    report = audit_registry(ctx.registry)

    if output_json or ctx.output_json:
        response = CheckCommandResponse(
            ok=report.ok,
            findings=[finding_info(f) for f in report.findings],
        )
        emit_json(response.model_dump(mode="json"))
    else:
        count = render_findings(report.findings)
        user_output(f"{count} finding(s)" if count else "No findings")

    if not report.ok:
        raise SystemExit(EXIT_NOT_FOUND)
