"""auth: schema inicial (clients, users, roles, permissions, jwt_tokens)

Revision ID: 20261019_auth_schema
Revises:
Create Date: 2026-10-19 10:00:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "20261019_auth_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None

SCHEMA = "auth"


def _schema(conn) -> str | None:
    return None if conn.dialect.name == "sqlite" else SCHEMA


def _json():
    return sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    conn = op.get_bind()
    schema = _schema(conn)
    fk = f"{schema}." if schema else ""

    op.create_table(
        "clients",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(160), nullable=False),
        sa.Column("slug", sa.String(64), nullable=False),
        sa.Column("metadata", _json(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_clients"),
        schema=schema,
    )
    op.create_index("ix_clients_slug", "clients", ["slug"], unique=True, schema=schema)

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("client_id", sa.Uuid(), sa.ForeignKey(f"{fk}clients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("email", sa.String(160), nullable=False),
        sa.Column("full_name", sa.String(160)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_email_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("last_login", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("client_id", "email", name="uq_users_client_email"),
        schema=schema,
    )
    op.create_index("ix_users_client_id", "users", ["client_id"], schema=schema)
    op.create_index("ix_users_email", "users", ["email"], schema=schema)

    op.create_table(
        "roles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("client_id", sa.Uuid(), sa.ForeignKey(f"{fk}clients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("client_id", "name", name="uq_roles_client_name"),
        schema=schema,
    )
    op.create_index("ix_roles_client_id", "roles", ["client_id"], schema=schema)

    op.create_table(
        "permissions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        schema=schema,
    )
    op.create_index("ix_permissions_name", "permissions", ["name"], unique=True, schema=schema)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey(f"{fk}users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("role_id", sa.Uuid(), sa.ForeignKey(f"{fk}roles.id", ondelete="CASCADE"), primary_key=True),
        schema=schema,
    )
    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.Uuid(), sa.ForeignKey(f"{fk}roles.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.Uuid(), sa.ForeignKey(f"{fk}permissions.id", ondelete="CASCADE"), primary_key=True),
        schema=schema,
    )

    op.create_table(
        "jwt_tokens",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("jti", sa.String(64), nullable=False),
        sa.Column("token_type", sa.String(20), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey(f"{fk}users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("client_id", sa.Uuid(), sa.ForeignKey(f"{fk}clients.id", ondelete="CASCADE")),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("expires_at", sa.DateTime(timezone=True)),
        sa.Column("revoked_at", sa.DateTime(timezone=True)),
        sa.Column("revoked_by", sa.Uuid()),
        sa.Column("replaced_by_jti", sa.String(64)),
        sa.Column("metadata", _json(), nullable=False, server_default=sa.text("'{}'")),
        schema=schema,
    )
    op.create_index("ix_jwt_tokens_jti", "jwt_tokens", ["jti"], unique=True, schema=schema)
    op.create_index("ix_jwt_tokens_user_id", "jwt_tokens", ["user_id"], schema=schema)
    op.create_index("ix_jwt_tokens_client_id", "jwt_tokens", ["client_id"], schema=schema)


def downgrade() -> None:
    schema = _schema(op.get_bind())
    for table in ("jwt_tokens", "role_permissions", "user_roles", "permissions", "roles", "users", "clients"):
        op.drop_table(table, schema=schema)
