"""Diagnóstico de conectividade com o PostgreSQL via linha de comando.

Roda seis verificações contra o banco configurado e imprime o resultado de
cada uma. Uma falha não interrompe as seguintes, exceto a do driver: sem ele
nenhuma conexão é possível.
"""

import importlib
import time

import click
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError

from fleet_auth.core.config import normalize_url, settings

APPLICATION_NAME = "VehicleMonitoringAuth"
POOL_CONNECTIONS = 3


def _ok(message: str) -> None:
    click.echo(click.style(message, fg="green"))


def _fail(message: str) -> None:
    click.echo(click.style(message, fg="red"), err=True)


def server_url(url: URL) -> URL:
    """Mesmo servidor, banco de manutenção."""
    return url.set(database="postgres")


def check_driver(url: URL) -> bool:
    click.echo("\nTest 1: PostgreSQL driver...")
    driver = url.get_driver_name() or "psycopg"
    try:
        module = importlib.import_module(driver)
    except ImportError as exc:
        _fail(f"Driver '{driver}' not available: {exc}")
        return False
    _ok(f"Driver '{driver}' available")
    click.echo(f"   Version: {getattr(module, '__version__', 'unknown')}")
    return True


def check_basic_connection(url: URL) -> bool:
    click.echo("\nTest 2: Basic connection...")
    click.echo(f"URL: {url.render_as_string(hide_password=True)}")
    click.echo(f"User: {url.username}")
    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            row = conn.execute(text("SELECT current_database(), current_schema()")).one()
            version = ".".join(str(v) for v in conn.dialect.server_version_info or ())
            _ok("Basic connection succeeded")
            click.echo(f"   Product: {conn.dialect.name}")
            click.echo(f"   Version: {version}")
            click.echo(f"   AutoCommit: {conn.get_isolation_level() == 'AUTOCOMMIT'}")
            click.echo(f"   Catalog: {row[0]}")
            click.echo(f"   Schema: {row[1]}")
        return True
    except SQLAlchemyError as exc:
        orig = getattr(exc, "orig", None)
        _fail("Basic connection failed:")
        _fail(f"   SQL state: {getattr(orig, 'sqlstate', None)}")
        _fail(f"   Message: {exc}")
        return False
    finally:
        engine.dispose()


def check_connection_with_properties(url: URL) -> bool:
    click.echo("\nTest 3: Connection with extra properties...")
    engine = create_engine(
        url,
        connect_args={
            "application_name": APPLICATION_NAME,
            "connect_timeout": 10,
            "keepalives": 1,
        },
    )
    try:
        with engine.connect() as conn:
            version = conn.execute(text("SELECT version()")).scalar_one()
        _ok("Connection with properties succeeded")
        click.echo(f"   PostgreSQL version: {version}")
        return True
    except SQLAlchemyError as exc:
        _fail(f"Connection with properties failed: {exc}")
        return False
    finally:
        engine.dispose()


def check_database_exists(url: URL) -> bool:
    database = url.database
    click.echo("\nTest 4: Target database...")
    engine = create_engine(server_url(url))
    try:
        with engine.connect() as conn:
            found = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"), {"name": database}
            ).first()
            if found:
                _ok(f"Database '{database}' exists")
                return True
            _fail(f"Database '{database}' does NOT exist")
            click.echo("Available databases:")
            for (name,) in conn.execute(text("SELECT datname FROM pg_database WHERE datistemplate = false")):
                click.echo(f"   • {name}")
            return False
    except SQLAlchemyError as exc:
        _fail(f"Could not check database: {exc}")
        return False
    finally:
        engine.dispose()


def check_schema_exists(url: URL, schema: str) -> bool:
    click.echo(f"\nTest 5: Schema '{schema}'...")
    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            found = conn.execute(
                text("SELECT 1 FROM information_schema.schemata WHERE schema_name = :schema"),
                {"schema": schema},
            ).first()
            if not found:
                _fail(f"Schema '{schema}' does NOT exist")
                return False
            tables = conn.execute(
                text("SELECT COUNT(*) FROM information_schema.tables WHERE table_schema = :schema"),
                {"schema": schema},
            ).scalar_one()
        _ok(f"Schema '{schema}' exists")
        click.echo(f"   Tables found: {tables}")
        return True
    except SQLAlchemyError as exc:
        _fail(f"Could not check schema: {exc}")
        return False
    finally:
        engine.dispose()


def check_connection_pool(url: URL, connections: int = POOL_CONNECTIONS, pause: float = 0.1) -> bool:
    click.echo("\nTest 6: Connection pool simulation...")
    engine = create_engine(url, pool_size=connections, max_overflow=0)
    ok = True
    try:
        for i in range(1, connections + 1):
            try:
                with engine.connect() as conn:
                    ts = conn.execute(text("SELECT current_timestamp")).scalar_one()
                _ok(f"Connection #{i} succeeded")
                click.echo(f"   Timestamp: {ts}")
            except SQLAlchemyError as exc:
                _fail(f"Connection #{i} failed: {exc}")
                ok = False
            time.sleep(pause)
    finally:
        engine.dispose()
    return ok


@click.command()
@click.option("--url", default=None, help="URL do banco (padrão: DIAGNOSTIC_DATABASE_URL).")
@click.option("--schema", default=None, help="Schema procurado (padrão: DB_SCHEMA).")
def cli(url: str | None, schema: str | None) -> None:
    """Diagnostica a conectividade com o banco de autenticação."""
    target = make_url(normalize_url(url or settings.DIAGNOSTIC_DATABASE_URL))
    schema = schema or settings.DB_SCHEMA

    click.echo("PostgreSQL connection diagnostic")
    click.echo("=" * 41)

    results = [check_driver(target)]
    if results[0]:
        results += [
            check_basic_connection(target),
            check_connection_with_properties(target),
            check_database_exists(target),
            check_schema_exists(target, schema),
            check_connection_pool(target),
        ]

    passed = sum(results)
    click.echo(f"\nDiagnostic complete: {passed}/{len(results)} checks passed")


if __name__ == "__main__":
    cli()
