"""
Configuração e fixtures do pytest para o fleet_auth.

Cada teste recebe um banco SQLite em memória novo, com o schema completo.
"""

import os
import uuid
from datetime import timedelta

import pytest

# Ambiente de teste antes de o pacote ler as settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fleet_auth.db.base import Base
from fleet_auth.db.base_class import utcnow
from fleet_auth.db.session import make_engine
from fleet_auth.models import Client, JwtToken, Permission, Role, User
from fleet_auth.models.associations import (
    add_role_to_client,
    add_user_to_client,
    assign_role_to_user,
    grant_permission_to_role,
)


@pytest.fixture
def engine():
    engine = make_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Sessão ligada ao engine em memória."""
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_client(db):
    def _make(name="Acme", slug=None, **kwargs):
        client = Client(name=name, slug=slug or name.lower(), **kwargs)
        db.add(client)
        db.commit()
        return client
    return _make


@pytest.fixture
def make_user(db):
    def _make(client, email, **kwargs):
        user = User(email=email, **kwargs)
        add_user_to_client(client, user)
        db.add(user)
        db.commit()
        return user
    return _make


@pytest.fixture
def make_role(db):
    def _make(client, name, **kwargs):
        role = Role(name=name, **kwargs)
        add_role_to_client(client, role)
        db.add(role)
        db.commit()
        return role
    return _make


@pytest.fixture
def make_permission(db):
    def _make(name, description=None):
        permission = Permission(name=name, description=description)
        db.add(permission)
        db.commit()
        return permission
    return _make


@pytest.fixture
def make_token(db):
    def _make(user, jti=None, token_type="access", expires_in=timedelta(hours=1), **kwargs):
        expires_at = utcnow() + expires_in if expires_in is not None else None
        token = JwtToken(
            jti=jti or uuid.uuid4().hex,
            token_type=token_type,
            user=user,
            expires_at=expires_at,
            **kwargs,
        )
        db.add(token)
        db.commit()
        return token
    return _make


@pytest.fixture
def acme(db, make_client, make_user, make_role, make_permission):
    """Tenant Acme: usuário a@acme.com com o papel admin, que concede vehicles:read."""
    client = make_client("Acme", "acme")
    user = make_user(client, "a@acme.com", full_name="Alice Admin")
    role = make_role(client, "admin", description="Tenant administrators", is_system=True)
    permission = make_permission("vehicles:read", "Read vehicles")
    assign_role_to_user(user, role)
    grant_permission_to_role(role, permission)
    db.commit()
    return {"client": client, "user": user, "role": role, "permission": permission}
