"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..clients.gateway import DEFAULT_API_URL, WeighInClient
from ..db import get_data_dir
from ..table.preferences import PREFERENCES_FILENAME, JsonFilePreferenceStore, PreferenceStore


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_client(ctx: click.Context) -> WeighInClient:
    """Get the API client, connecting on first use."""
    obj = ctx.ensure_object(dict)
    if obj.get("client") is None:
        obj["client"] = WeighInClient.connect(obj.get("api_url") or DEFAULT_API_URL)
        ctx.call_on_close(obj["client"].close)
    return obj["client"]


def get_preferences(ctx: click.Context) -> PreferenceStore:
    """Get the client-local preference store."""
    obj = ctx.ensure_object(dict)
    if obj.get("preferences") is None:
        obj["preferences"] = JsonFilePreferenceStore(get_data_dir() / PREFERENCES_FILENAME)
    return obj["preferences"]


def parse_metric_list(value: str | None) -> list[str] | None:
    """Split a comma-separated metric list; None passes through."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


class EchoNotifier:
    """Shows record-operation toasts on the terminal."""

    def success(self, message: str) -> None:
        echo_success(message)

    def error(self, message: str) -> None:
        echo_error(message)

    def alert(self, message: str) -> None:
        echo_warning(message)


def click_confirm(assume_yes: bool = False):
    """Build a confirm callback for record operations."""

    def confirm(title: str, message: str) -> bool:
        if assume_yes:
            return True
        click.echo(click.style(title, bold=True))
        return click.confirm(message, default=False)

    return confirm


def format_cell(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.1f}"
    return str(value)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = [
        "".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)),
        "".join("-" * w + " " * padding for w in widths),
    ]
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
