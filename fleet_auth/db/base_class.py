# fleet_auth/db/base_class.py
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

SCHEMA = "auth"

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite devolve datetimes sem tzinfo; tudo é gravado em UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def same_identity(a: Any, b: Any) -> bool:
    """Comparador de identidade usado por todas as entidades.

    Dois registros são iguais se forem o mesmo objeto, ou se forem da mesma
    entidade e ambos tiverem id atribuído e igual. Registros sem id nunca
    são iguais a outro objeto.
    """
    if a is b:
        return True
    if a is None or b is None:
        return False
    if not (isinstance(b, type(a)) or isinstance(a, type(b))):
        return False
    return a.id is not None and a.id == b.id


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=naming_convention)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Base):
            return NotImplemented
        return same_identity(self, other)

    def __hash__(self) -> int:
        # constante por classe: o id só é atribuído no flush. Todas as instâncias
        # caem no mesmo bucket, logo sets de entidades têm add/in lineares.
        return hash(type(self))
