"""Settings commands."""

import click

from ..clients.gateway import GatewayError
from ..models.weight_entry import AVAILABLE_METRICS, DATE_KEY
from .base import echo_error, echo_info, echo_success, get_client, parse_metric_list


def parse_goal_weight(value: str | None) -> float | None:
    """Parse a goal weight option; ``none`` or empty clears the goal.

    Raises:
        click.BadParameter: If the value is not a positive number
    """
    if value is None or value.strip().lower() in ("", "none", "null"):
        return None
    try:
        goal = float(value)
    except ValueError:
        raise click.BadParameter("Please enter a valid weight goal (positive number)")
    if goal <= 0:
        raise click.BadParameter("Please enter a valid weight goal (positive number)")
    return goal


def _check_known(metrics: list[str], option: str) -> None:
    unknown = [m for m in metrics if m not in AVAILABLE_METRICS]
    if unknown:
        raise click.BadParameter(
            f"Unknown metric(s): {', '.join(unknown)}", param_hint=option
        )


def show_settings(settings: dict) -> None:
    """Print a settings document."""
    goal = settings.get("goalWeight")
    click.echo(click.style(settings.get("displayName", ""), bold=True))
    click.echo(f"  Table columns:   {', '.join(settings['tableMetrics'])}")
    click.echo(f"  Chart metrics:   {', '.join(settings['chartMetrics'])}")
    click.echo(f"  Visible metrics: {', '.join(settings['defaultVisibleMetrics']) or '-'}")
    click.echo(f"  Goal weight:     {goal if goal is not None else 'not set'}")
    click.echo(f"  Dark mode:       {'on' if settings['darkMode'] else 'off'}")


@click.group()
def settings():
    """View and change display settings."""
    pass


@settings.command("show")
@click.pass_context
def show(ctx):
    """Show the current settings."""
    try:
        current = get_client(ctx).get_settings()
    except GatewayError as e:
        echo_error(f"Could not load settings: {e}")
        ctx.exit(1)
    show_settings(current)


@settings.command("set")
@click.option("--table", help="Comma-separated table columns (Date is always included)")
@click.option("--chart", help="Comma-separated chart metrics")
@click.option("--visible", help="Comma-separated metrics shown by default (subset of chart metrics)")
@click.option("--goal", help="Goal weight, or 'none' to clear it")
@click.option("--dark/--light", "dark_mode", default=None, help="Toggle dark mode")
@click.pass_context
def set_settings(
    ctx,
    table: str | None,
    chart: str | None,
    visible: str | None,
    goal: str | None,
    dark_mode: bool | None,
):
    """Change one or more settings; options left out stay as they are.

    Examples:

        weigh-in settings set --table "Weight,BMI,Body Fat %"

        weigh-in settings set --goal 175.5

        weigh-in settings set --goal none --dark
    """
    updates: dict = {}

    table_metrics = parse_metric_list(table)
    if table_metrics is not None:
        _check_known(table_metrics, "--table")
        updates["tableMetrics"] = table_metrics

    chart_metrics = parse_metric_list(chart)
    if chart_metrics is not None:
        chart_metrics = [m for m in chart_metrics if m != DATE_KEY]
        _check_known(chart_metrics, "--chart")
        updates["chartMetrics"] = chart_metrics

    visible_metrics = parse_metric_list(visible)
    if visible_metrics is not None:
        visible_metrics = [m for m in visible_metrics if m != DATE_KEY]
        updates["defaultVisibleMetrics"] = visible_metrics

    if goal is not None:
        updates["goalWeight"] = parse_goal_weight(goal)

    if dark_mode is not None:
        updates["darkMode"] = dark_mode

    if not updates:
        echo_info("Nothing to change.")
        return

    client = get_client(ctx)
    try:
        if visible_metrics is not None:
            allowed = chart_metrics if chart_metrics is not None else client.get_settings()["chartMetrics"]
            outside = [m for m in visible_metrics if m not in allowed]
            if outside:
                echo_error(f"Not in chart metrics: {', '.join(outside)}")
                ctx.exit(1)
        updated = client.update_settings(updates)
    except GatewayError as e:
        echo_error(f"Failed to save settings: {e}")
        ctx.exit(1)

    echo_success("Settings saved.")
    show_settings(updated)


@settings.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def reset(ctx, yes: bool):
    """Restore default metrics and clear the goal weight (dark mode is kept)."""
    if not yes and not click.confirm("Reset all metric settings to their defaults?"):
        return
    try:
        updated = get_client(ctx).reset_settings()
    except GatewayError as e:
        echo_error(f"Failed to reset settings: {e}")
        ctx.exit(1)
    echo_success("Settings reset to defaults.")
    show_settings(updated)
