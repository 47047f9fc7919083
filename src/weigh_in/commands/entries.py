"""Weight entry commands: the table view and record operations."""

import click

from ..clients.gateway import GatewayError
from ..models.weight_entry import DATE_KEY, METRIC_FIELDS, is_valid_object_id
from ..table.operations import RecordOperations
from ..table.pagination import ROWS_PER_PAGE_OPTIONS, SHOW_ALL, TablePagination
from ..table.selection import SelectionState, toggle_all, toggle_row
from ..table.sort import SortDirection, SortState, apply_sort
from .base import (
    EchoNotifier,
    click_confirm,
    echo_error,
    echo_info,
    echo_warning,
    format_cell,
    format_table,
    get_client,
    get_preferences,
)

ROWS_CHOICES = [str(n) for n in ROWS_PER_PAGE_OPTIONS if n != SHOW_ALL] + ["all"]


def parse_metric_options(values: tuple[str, ...]) -> dict[str, float]:
    """Parse repeated ``KEY=VALUE`` metric options."""
    metrics = {}
    for item in values:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or key not in METRIC_FIELDS:
            raise click.BadParameter(
                f"Expected METRIC=VALUE with METRIC one of: {', '.join(METRIC_FIELDS)}",
                param_hint="--metric",
            )
        try:
            metrics[key] = float(raw)
        except ValueError:
            raise click.BadParameter(f"{key} must be a valid number", param_hint="--metric")
    return metrics


def build_operations(ctx: click.Context, yes: bool) -> RecordOperations:
    client = get_client(ctx)
    return RecordOperations(
        delete_record=client.delete_entry,
        update_record=client.update_entry,
        confirm=click_confirm(yes),
        notifier=EchoNotifier(),
    )


@click.group()
def entries():
    """Browse and manage weight entries."""
    pass


@entries.command("list")
@click.option("--page", "-p", default=1, type=int, help="Page to show (1-indexed)")
@click.option(
    "--rows",
    "-r",
    type=click.Choice(ROWS_CHOICES),
    help="Rows per page; remembered for next time",
)
@click.option("--sort", "sort_field", help="Column to sort by (default: Date)")
@click.option(
    "--order",
    type=click.Choice([d.value for d in SortDirection]),
    help="Sort direction (default: desc for Date, asc for other columns)",
)
@click.pass_context
def list_entries(ctx, page: int, rows: str | None, sort_field: str | None, order: str | None):
    """Show entries as a table using the configured columns.

    Examples:

        weigh-in entries list

        weigh-in entries list --rows 25 --page 2

        weigh-in entries list --sort Weight --order desc
    """
    client = get_client(ctx)
    try:
        records = client.list_entries()
        columns = client.get_settings()["tableMetrics"]
    except GatewayError as e:
        echo_error(f"Could not load entries: {e}")
        ctx.exit(1)

    sort_state = SortState()
    if sort_field:
        sort_state = sort_state.click(sort_field)
    if order:
        sort_state = SortState(field=sort_state.field, direction=SortDirection(order))

    pagination = TablePagination(get_preferences(ctx))
    if rows is not None:
        pagination.change_rows_per_page(SHOW_ALL if rows == "all" else int(rows))
    pagination.change_page(page)
    view = pagination.view(apply_sort(records, sort_state))

    if view.total_records == 0:
        echo_info("No entries yet. Add one with 'weigh-in entries add' or import a CSV.")
        return

    headers = ["ID", *columns]
    table_rows = [
        [record.get("id") or "-", *(format_cell(record.get(col)) for col in columns)]
        for record in view.current_rows
    ]
    click.echo(format_table(headers, table_rows))
    click.echo()
    click.echo(
        f"Showing {view.index_of_first_row + 1}-{view.index_of_last_row} "
        f"of {view.total_records} (page {view.current_page}/{view.total_pages}, "
        f"sorted by {sort_state.field or 'none'} {sort_state.direction.value})"
    )


@entries.command("add")
@click.option("--date", "entry_date", help="Measurement date (MM-DD-YY); defaults to today")
@click.option("--weight", "-w", required=True, type=float, help="Body weight")
@click.option("--metric", "-m", multiple=True, help="Extra metric as METRIC=VALUE (repeatable)")
@click.pass_context
def add(ctx, entry_date: str | None, weight: float, metric: tuple[str, ...]):
    """Record a new measurement.

    Example:

        weigh-in entries add --date 03-01-24 -w 182.4 -m "Body Fat %=21.3" -m BMI=25.1
    """
    payload: dict = {"Weight": weight, **parse_metric_options(metric)}
    if entry_date:
        payload[DATE_KEY] = entry_date
    try:
        created = get_client(ctx).create_entry(payload)
    except GatewayError as e:
        echo_error(f"Failed to create entry: {e}")
        ctx.exit(1)
    click.echo(f"Created entry {created['id']} for {created[DATE_KEY]}")


@entries.command("edit")
@click.argument("entry_id")
@click.option("--date", "entry_date", help="New measurement date (MM-DD-YY)")
@click.option("--metric", "-m", multiple=True, help="Metric to change as METRIC=VALUE (repeatable)")
@click.pass_context
def edit(ctx, entry_id: str, entry_date: str | None, metric: tuple[str, ...]):
    """Change fields of an existing entry."""
    updates: dict = parse_metric_options(metric)
    if entry_date:
        updates[DATE_KEY] = entry_date
    if not updates:
        echo_info("Nothing to change.")
        return
    if build_operations(ctx, yes=True).update_one(entry_id, updates) is None:
        ctx.exit(1)


@entries.command("delete")
@click.argument("entry_ids", nargs=-1)
@click.option("--all", "select_all", is_flag=True, help="Delete every entry (all pages)")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete(ctx, entry_ids: tuple[str, ...], select_all: bool, yes: bool):
    """Delete one or more entries by id.

    Entries are deleted one at a time; if one fails the earlier deletions
    stay in place and the rest are not attempted.
    """
    operations = build_operations(ctx, yes)

    if len(entry_ids) == 1 and not select_all:
        if not operations.delete_one(entry_ids[0]):
            ctx.exit(1)
        return

    state = SelectionState()
    if select_all:
        try:
            records = get_client(ctx).list_entries()
        except GatewayError as e:
            echo_error(f"Could not load entries: {e}")
            ctx.exit(1)
        state = toggle_all(state, records)
    for entry_id in entry_ids:
        if not is_valid_object_id(entry_id):
            echo_warning(f"Skipping {entry_id!r}: not a valid entry id")
            continue
        if not state.selected.get(entry_id):
            state = toggle_row(state, entry_id)

    _, ok = operations.delete_selected(state)
    if not ok:
        ctx.exit(1)


@entries.command("stats")
@click.pass_context
def stats(ctx):
    """Show entry count and overall weight change."""
    try:
        summary = get_client(ctx).get_stats()
    except GatewayError as e:
        echo_error(f"Could not load stats: {e}")
        ctx.exit(1)

    if summary["count"] == 0:
        echo_info("No data available.")
        return

    oldest, latest = summary["oldest"], summary["latest"]
    click.echo(f"Entries:  {summary['count']}")
    click.echo(f"First:    {oldest[DATE_KEY]}  {format_cell(oldest['Weight'])}")
    click.echo(f"Latest:   {latest[DATE_KEY]}  {format_cell(latest['Weight'])}")
    click.echo(f"Change:   {summary['weightChange']:+.1f}")
