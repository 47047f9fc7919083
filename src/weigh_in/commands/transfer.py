"""CSV import and export commands."""

from pathlib import Path

import click

from ..clients.gateway import GatewayError
from .base import echo_error, echo_success, format_cell, format_table, get_client


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_data(ctx, file: Path):
    """Import a CSV file of measurements.

    Accepts the raw export from the scale app (Time, Weight, Body Fat, ...)
    or a CSV previously exported from weigh-in. Entries for days that
    already exist are overwritten.
    """
    try:
        result = get_client(ctx).upload_csv(file.name, file.read_bytes())
    except GatewayError as e:
        echo_error(f"Import failed: {e}")
        ctx.exit(1)

    echo_success(f"Imported {result['count']} entries from {file.name}")
    preview = result.get("preview") or []
    if preview:
        headers = ["Date", "Weight", "BMI", "Body Fat %"]
        rows = [[format_cell(record.get(h)) for h in headers] for record in preview]
        click.echo()
        click.echo(format_table(headers, rows))


@click.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to file instead of stdout")
@click.pass_context
def export(ctx, output: str | None):
    """Export every entry as CSV."""
    try:
        content = get_client(ctx).export_csv()
    except GatewayError as e:
        echo_error(f"Export failed: {e}")
        ctx.exit(1)

    if output:
        Path(output).write_text(content)
        echo_success(f"Exported to {output}")
    else:
        click.echo(content, nl=False)


@click.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to file instead of stdout")
@click.pass_context
def template(ctx, output: str | None):
    """Download an empty CSV template for manual entry."""
    try:
        content = get_client(ctx).download_template()
    except GatewayError as e:
        echo_error(f"Could not download template: {e}")
        ctx.exit(1)

    if output:
        Path(output).write_text(content)
        echo_success(f"Template written to {output}")
    else:
        click.echo(content, nl=False)
