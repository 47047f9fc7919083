"""CLI entry point for weigh-in."""

import logging

import click

from . import __version__
from .clients.gateway import DEFAULT_API_URL
from .commands import entries, export, import_data, init, serve, settings, template


@click.group()
@click.version_option(version=__version__, prog_name="weigh-in")
@click.option(
    "--api-url",
    envvar="WEIGH_IN_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="Base URL of the weigh-in API",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, api_url: str, verbose: bool):
    """weigh-in: track body-composition measurements from your smart scale.

    Run the API with 'weigh-in serve', then use the other commands to
    browse, import and manage your data.

    Example usage:

        # Initialize and start the API
        weigh-in init
        weigh-in serve

        # Import a scale export and browse it
        weigh-in import scale-export.csv
        weigh-in entries list --rows 25

        # Choose the table columns and set a goal
        weigh-in settings set --table "Weight,BMI,Body Fat %" --goal 175
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    obj = ctx.ensure_object(dict)
    obj.setdefault("api_url", api_url)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(settings)
main.add_command(entries)
main.add_command(import_data)
main.add_command(export)
main.add_command(template)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
