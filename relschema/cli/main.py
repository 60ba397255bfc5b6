"""Main CLI entry point for relschema."""

import click

from relschema import __version__
from relschema.cli.commands.inspect import inspect_dataset
from relschema.cli.commands.list import list_adapters
from relschema.cli.commands.validate import validate
from relschema.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level",
)
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
def main(log_level: str, json_logs: bool):
    """relschema - Relation schema descriptors."""
    configure_logging(level=log_level, json_format=json_logs)


# Register commands
main.add_command(validate)
main.add_command(inspect_dataset)
main.add_command(list_adapters)


if __name__ == "__main__":
    main()
