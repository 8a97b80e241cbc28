import uuid
from typing import Optional, Set
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, DateTime, Uuid, func
from fleet_auth.db.base_class import Base, SCHEMA, utcnow
from fleet_auth.models.role_permission import role_permissions


class Permission(Base):
    """Capacidade global (ex.: ``vehicles:read``), compartilhada entre tenants."""

    __tablename__ = "permissions"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    roles: Mapped[Set["Role"]] = relationship(
        secondary=role_permissions, back_populates="permissions", collection_class=set
    )

    def is_assigned_to_role(self, role_name: str) -> bool:
        return any(r.name == role_name for r in self.roles)

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, name='{self.name}')>"
