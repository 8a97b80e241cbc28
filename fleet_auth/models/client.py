import uuid
from typing import Any, Dict, Set
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, JSON, DateTime, Boolean, Uuid, func, text
from sqlalchemy.dialects.postgresql import JSONB
from fleet_auth.db.base_class import Base, SCHEMA, utcnow

# JSONB no Postgres, JSON genérico nos outros dialetos
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Client(Base):
    __tablename__ = "clients"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(160), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)

    # documento opaco, nunca interpretado nesta camada
    metadata_json: Mapped[Dict[str, Any]] = mapped_column(
        "metadata", JSONDocument, default=dict, server_default=text("'{}'")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text("true"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    # o tenant é dono de usuários e papéis: tirar da coleção apaga o registro.
    # Sets usam o hash constante por classe (ver Base.__hash__), então add/discard
    # custam O(n) no tamanho da coleção.
    users: Mapped[Set["User"]] = relationship(
        back_populates="client", cascade="all, delete-orphan", collection_class=set
    )
    roles: Mapped[Set["Role"]] = relationship(
        back_populates="client", cascade="all, delete-orphan", collection_class=set
    )
    jwt_tokens: Mapped[Set["JwtToken"]] = relationship(
        back_populates="client", cascade="all", collection_class=set
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, slug='{self.slug}', active={self.is_active})>"
