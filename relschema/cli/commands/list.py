"""CLI command for listing available adapters."""

import click

from relschema.adapters import list_inferrer_types


@click.command("list-adapters")
def list_adapters():
    """List available adapters.

    Shows all registered inferrer types that can populate schemas.
    """
    click.echo("Available Adapters:")
    for adapter in list_inferrer_types():
        click.echo(f"  - {adapter}")
