"""xspawn CLI main entry point with global options."""

import click

from ..context import resolve_settings
from ..logging_config import configure_logging


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    help="Log level (overrides $XSPAWN_LOG_LEVEL)",
)
def cli(log_level):
    """xspawn - run programs with an explicit argv, environment and stdout."""
    settings = resolve_settings(log_level)
    configure_logging(settings.log_level)


# Register commands at module level so tests can import cli with commands attached
from .commands.exec import exec_command

cli.add_command(exec_command)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
