import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, Uuid, func, text
from sqlalchemy.orm import relationship

from fleet_auth.db.base_class import Base, SCHEMA, utcnow
from fleet_auth.models.user_role import user_roles
from fleet_auth.models.role_permission import role_permissions


class Role(Base):
    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("client_id", "name", name="uq_roles_client_name"),
        {"schema": SCHEMA},
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id = Column(Uuid, ForeignKey(f"{SCHEMA}.clients.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(64), nullable=False)
    description = Column(Text, nullable=True)
    # papéis predefinidos, não removíveis pelo admin do tenant
    is_system = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    client = relationship("Client", back_populates="roles")

    # M2M: roles <-> users (set com hash por classe: add/discard lineares, ver Base.__hash__)
    users = relationship(
        "User",
        secondary=user_roles,
        back_populates="roles",
        collection_class=set,
    )
    # M2M: roles <-> permissions
    permissions = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        collection_class=set,
        lazy="selectin",
    )

    def has_permission(self, permission_name: str) -> bool:
        return any(p.name == permission_name for p in self.permissions)

    def __repr__(self):
        return f"<Role(id={self.id}, name='{self.name}', system={self.is_system})>"
