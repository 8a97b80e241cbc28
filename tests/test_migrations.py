"""Migrações do Alembic contra um SQLite em arquivo: upgrade, seed, downgrade."""

import pytest
from alembic import command
from click.testing import CliRunner
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from fleet_auth.crud import client_crud, permission_crud, role_crud
from fleet_auth.db.base import Base
from fleet_auth.db.bootstrap import alembic_config, run_migrations
from fleet_auth.db.init_db import BASE_PERMISSIONS
from fleet_auth.db.session import make_engine
from fleet_auth.tools import migrate

AUTH_TABLES = {"clients", "users", "roles", "permissions", "user_roles", "role_permissions", "jwt_tokens"}


@pytest.fixture
def url(tmp_path):
    return f"sqlite:///{tmp_path / 'auth.db'}"


@pytest.fixture
def migrated_engine(url):
    run_migrations(url=url)
    engine = make_engine(url)
    yield engine
    engine.dispose()


def test_migrate_command_creates_schema_and_seeds(url, monkeypatch):
    # o CliRunner troca o stderr; o handler raiz não pode ficar preso a ele
    monkeypatch.setattr(migrate, "setup_logging", lambda: None)

    result = CliRunner().invoke(migrate.cli, ["--url", url, "--seed"])
    assert result.exit_code == 0, result.output

    engine = make_engine(url)
    try:
        assert AUTH_TABLES <= set(inspect(engine).get_table_names())
        with Session(engine) as db:
            demo = client_crud.get_by_slug(db, "demo")
            assert demo is not None
            assert permission_crud.count_all(db) == len(BASE_PERMISSIONS)
            assert {r.name for r in role_crud.list_system_roles(db, demo.id)} == {"admin", "viewer"}
    finally:
        engine.dispose()


def test_seed_requires_head(url, monkeypatch):
    monkeypatch.setattr(migrate, "setup_logging", lambda: None)
    result = CliRunner().invoke(migrate.cli, ["--url", url, "--revision", "base", "--seed"])
    assert result.exit_code == 2


def test_migrated_columns_match_models(migrated_engine):
    insp = inspect(migrated_engine)
    for table in Base.metadata.sorted_tables:
        reflected = {c["name"]: c for c in insp.get_columns(table.name)}
        assert set(reflected) == {c.name for c in table.columns}, table.name
        for column in table.columns:
            if column.primary_key:
                continue
            assert reflected[column.name]["nullable"] == column.nullable, f"{table.name}.{column.name}"


def test_migrated_unique_constraints_and_indexes(migrated_engine):
    insp = inspect(migrated_engine)
    uniques = {
        tuple(u["column_names"])
        for table in ("users", "roles")
        for u in insp.get_unique_constraints(table)
    }
    assert ("client_id", "email") in uniques
    assert ("client_id", "name") in uniques
    unique_indexes = {
        (table, tuple(ix["column_names"]))
        for table in ("clients", "permissions", "jwt_tokens")
        for ix in insp.get_indexes(table)
        if ix["unique"]
    }
    assert unique_indexes == {("clients", ("slug",)), ("permissions", ("name",)), ("jwt_tokens", ("jti",))}


def test_downgrade_drops_auth_tables(url, migrated_engine):
    command.downgrade(alembic_config(url), "base")
    assert not AUTH_TABLES & set(inspect(migrated_engine).get_table_names())
