"""CLI command for inferring and printing a dataset's schema."""

import sys
from typing import Any, Optional

import click
import yaml

from relschema import infer_schema
from relschema.core.exceptions import SchemaError
from relschema.core.type_mapping import arrow_type_to_string
from relschema.models.loader import dump_schema


def _open_gateway(duckdb_path: Optional[str], url: Optional[str]) -> tuple[str, Any]:
    if duckdb_path:
        import duckdb

        return "duckdb", duckdb.connect(duckdb_path, read_only=True)
    from sqlalchemy import create_engine

    return "sql", create_engine(url)


@click.command("inspect")
@click.argument("dataset")
@click.option(
    "--duckdb",
    "duckdb_path",
    type=click.Path(exists=True),
    help="DuckDB database file",
)
@click.option("--url", help="SQLAlchemy database URL")
@click.option("--db-schema", default=None, help="Database schema containing the table")
@click.option("--yaml", "as_yaml", is_flag=True, help="Print as a schema file entry")
def inspect_dataset(
    dataset: str,
    duckdb_path: Optional[str],
    url: Optional[str],
    db_schema: Optional[str],
    as_yaml: bool,
):
    """Infer the schema of DATASET and print its attributes.

    Examples:

        relschema inspect users --duckdb app.duckdb
        relschema inspect orders --url postgresql://localhost/shop --yaml
    """
    if bool(duckdb_path) == bool(url):
        click.echo("Error: pass exactly one of --duckdb or --url", err=True)
        sys.exit(1)

    adapter, gateway = _open_gateway(duckdb_path, url)
    options = {"db_schema": db_schema} if db_schema else {}
    try:
        schema = infer_schema(dataset, gateway, adapter, **options)
    except SchemaError as e:
        click.echo(f"✗ Inference failed: {e}", err=True)
        sys.exit(1)
    finally:
        if adapter == "duckdb":
            gateway.close()
        else:
            gateway.dispose()

    if as_yaml:
        try:
            entry = dump_schema(schema)
        except SchemaError as e:
            click.echo(f"✗ Cannot render schema: {e}", err=True)
            sys.exit(1)
        click.echo(yaml.safe_dump({"schemas": [entry]}, sort_keys=False))
        return

    click.echo(f"{dataset}:")
    for attribute in schema:
        tags = []
        if attribute.meta.primary_key:
            tags.append("primary key")
        if attribute.meta.foreign_key:
            tags.append(f"references {attribute.meta.relation}")
        if not attribute.meta.nullable:
            tags.append("not null")
        suffix = f" ({', '.join(tags)})" if tags else ""
        click.echo(f"  {attribute.name}: {arrow_type_to_string(attribute.type)}{suffix}")
