"""Inspeciona as tabelas do schema auth via linha de comando."""

import click
from sqlalchemy import inspect
from sqlalchemy.engine import Inspector
from sqlalchemy.exc import SQLAlchemyError

from fleet_auth.core.config import normalize_url, settings
from fleet_auth.db.session import make_engine

ROW_FORMAT = "{:<20} {:<15} {:<10} {:<20} {:<10}"


def describe_table(insp: Inspector, table: str, schema: str | None) -> None:
    click.echo("\n" + "=" * 50)
    click.echo(f"TABLE: {table}")
    click.echo("=" * 50)
    click.echo(ROW_FORMAT.format("COLUMN", "TYPE", "NULLABLE", "DEFAULT", "LENGTH"))
    click.echo("-" * 80)
    for col in insp.get_columns(table, schema=schema):
        col_type = col["type"]
        length = getattr(col_type, "length", None)
        click.echo(
            ROW_FORMAT.format(
                col["name"],
                str(col_type),
                "YES" if col.get("nullable", True) else "NO",
                str(col.get("default")) if col.get("default") is not None else "N/A",
                str(length) if length is not None else "N/A",
            )
        )

    click.echo("\nPRIMARY KEYS:")
    for name in insp.get_pk_constraint(table, schema=schema).get("constrained_columns", []):
        click.echo(f"• {name}")

    click.echo("\nFOREIGN KEYS:")
    for fk in insp.get_foreign_keys(table, schema=schema):
        for local, remote in zip(fk["constrained_columns"], fk["referred_columns"]):
            click.echo(f"• {local} -> {fk['referred_table']}.{remote}")


@click.command()
@click.option("--url", default=None, help="URL do banco (padrão: DIAGNOSTIC_DATABASE_URL).")
@click.option("--schema", default=None, help="Schema inspecionado (padrão: DB_SCHEMA).")
def cli(url: str | None, schema: str | None) -> None:
    """Lista tabelas, colunas, chaves primárias e estrangeiras de um schema."""
    target = normalize_url(url or settings.DIAGNOSTIC_DATABASE_URL)
    schema = schema or settings.DB_SCHEMA
    engine = make_engine(target)
    try:
        with engine.connect() as conn:
            click.echo(click.style("Connected to the database!", fg="green"))
            insp = inspect(conn)
            tables = insp.get_table_names(schema=schema)

            click.echo(f"\nTABLES IN SCHEMA '{schema}':")
            click.echo("-" * 30)
            if not tables:
                click.echo(f"No tables found in schema '{schema}'")
            for table in tables:
                click.echo(f"• {table}")

            for table in tables:
                describe_table(insp, table, schema)
    except SQLAlchemyError as exc:
        raise click.ClickException(f"Error connecting to the database: {exc}") from exc
    finally:
        engine.dispose()


if __name__ == "__main__":
    cli()
