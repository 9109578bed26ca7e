"""Command line interface for inspecting the Elasticsearch catalog."""

from __future__ import annotations

import sys
from typing import List, Optional

import click

from ..catalog import Catalog, Schema, Table
from ..config import Config, load_config
from ..errors import CatalogLoadError
from ..utils.logging import setup_logging


class CatalogPrinter:
    """Prints catalog metadata in a readable format."""

    def __init__(self, emit):
        self.emit = emit

    def display_catalog(self, catalog: Catalog) -> None:
        schema_names = sorted(catalog.list_schema_names())
        if not schema_names:
            self.emit("Catalog is empty.")
            return
        self.emit("Catalog Contents:")
        self.emit("=" * 80)
        for schema_name in schema_names:
            self._print_schema(catalog.get_schema(schema_name))

    def display_table(self, table: Table) -> None:
        self.emit(f"Table: {table.fully_qualified_name()}")
        self._print_sources(table)
        self._print_columns(table)

    def _print_schema(self, schema: Schema) -> None:
        header = f"\nSchema: {schema.name}"
        self.emit(header)
        self.emit("-" * len(header.strip()))
        for table_name in sorted(schema.tables.keys()):
            self.emit("")
            self.display_table(schema.tables[table_name])

    def _print_sources(self, table: Table) -> None:
        self.emit("  Sources:")
        for source in table.sources:
            cluster = source.cluster_name or "-"
            self.emit(f"    - {source.describe()} (cluster: {cluster})")

    def _print_columns(self, table: Table) -> None:
        if not table.columns:
            self.emit("  Columns: (none)")
            return
        self.emit("  Columns:")
        for line in self._format_columns(table):
            self.emit(f"    {line}")

    def _format_columns(self, table: Table) -> List[str]:
        rows = [["name", "type", "field path", "remote type"]]
        for column in table.columns:
            rows.append([column.name, column.data_type.value, column.field_path, column.remote_type])

        widths = [0, 0, 0, 0]
        for row in rows:
            for i, value in enumerate(row):
                widths[i] = max(widths[i], len(value))

        lines = []
        for row in rows:
            cells = []
            for i, value in enumerate(row):
                cells.append(value.ljust(widths[i]))
            lines.append("  ".join(cells).rstrip())
        return lines


def _build_config(config_path: Optional[str], catalog_uri: Optional[str]) -> Config:
    config = load_config(config_path) if config_path else Config()
    if catalog_uri:
        config.catalog.uri = catalog_uri
    if not config.catalog.uri:
        raise click.UsageError("Provide --catalog-uri or a config file with catalog.uri")
    return config


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file.",
)
@click.option(
    "-u",
    "--catalog-uri",
    help="Location of the catalog document (overrides catalog.uri).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], catalog_uri: Optional[str]) -> None:
    """Inspect Elasticsearch document types as relational tables."""
    config = _build_config(config_path, catalog_uri)
    setup_logging(
        level=config.logging.level,
        structured=config.logging.structured,
        log_file=config.logging.log_file,
    )
    ctx.obj = Catalog.from_config(config)


@cli.command("schemas")
@click.pass_obj
def schemas_command(catalog: Catalog) -> None:
    """List schema names."""
    for name in sorted(_safe(catalog.list_schema_names)):
        click.echo(name)


@cli.command("tables")
@click.argument("schema")
@click.pass_obj
def tables_command(catalog: Catalog, schema: str) -> None:
    """List the tables of SCHEMA."""
    for name in sorted(_safe(lambda: catalog.list_table_names(schema))):
        click.echo(name)


@cli.command("describe")
@click.argument("schema")
@click.argument("table")
@click.pass_obj
def describe_command(catalog: Catalog, schema: str, table: str) -> None:
    """Fetch current mappings and print the columns of SCHEMA.TABLE."""
    resolved = _safe(lambda: catalog.get_table(schema, table))
    if resolved is None:
        click.echo(f"Table not found: {schema}.{table}", err=True)
        sys.exit(1)
    CatalogPrinter(click.echo).display_table(resolved)


@cli.command("show")
@click.pass_obj
def show_command(catalog: Catalog) -> None:
    """Print every schema, table and column."""
    _safe(catalog.refresh)
    CatalogPrinter(click.echo).display_catalog(catalog)


def _safe(call):
    try:
        return call()
    except CatalogLoadError as e:
        raise click.ClickException(str(e)) from e
