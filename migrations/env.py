# migrations/env.py
from alembic import context
from sqlalchemy import engine_from_config, pool, text

from fleet_auth.core.config import settings, normalize_url
from fleet_auth.db.base import Base, SCHEMA

config = context.config

# URL explícita (bootstrap/CLI) tem precedência; senão usa as settings
if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", normalize_url(settings.DATABASE_URL).replace("%", "%%"))

target_metadata = Base.metadata


def _schema_map(dialect_name: str):
    # SQLite não tem schemas
    return {SCHEMA: None} if dialect_name == "sqlite" else None


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        include_schemas=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(config.get_section(config.config_ini_section), prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        schema_map = _schema_map(connection.dialect.name)
        if schema_map:
            connection = connection.execution_options(schema_translate_map=schema_map)
        else:
            connection.execute(text(f"CREATE SCHEMA IF NOT EXISTS {SCHEMA}"))
            connection.commit()
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_schemas=True,
            version_table_schema=None if schema_map else SCHEMA,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
