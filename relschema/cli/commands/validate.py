"""CLI command for validating schema files."""

import sys

import click

from relschema import from_yaml
from relschema.core.exceptions import SchemaError


@click.command()
@click.argument("schema_path", type=click.Path(exists=True))
def validate(schema_path: str):
    """Validate a schema YAML file.

    Checks:
    - YAML syntax
    - Schema file structure
    - Primary keys reference declared attributes
    - Adapters are registered

    Examples:

        relschema validate schemas.yaml
    """
    try:
        schemas = from_yaml(schema_path)
    except SchemaError as e:
        click.echo(f"✗ Schema validation failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ {len(schemas)} schema(s) valid")
    for dataset, schema in schemas.items():
        if not schema.is_defined():
            click.echo(f"  {dataset}: inferred on first use")
            continue
        primary_key = ", ".join(a.name for a in schema.primary_key()) or "(none)"
        click.echo(
            f"  {dataset}: {len(schema)} attribute(s), primary key: {primary_key}"
        )
