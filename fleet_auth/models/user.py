import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint, Uuid, func, text
from sqlalchemy.orm import relationship

from fleet_auth.db.base_class import Base, SCHEMA, utcnow
from fleet_auth.models.user_role import user_roles  # garante que a tabela exista


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        # um e-mail por tenant
        UniqueConstraint("client_id", "email", name="uq_users_client_email"),
        {"schema": SCHEMA},
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id = Column(Uuid, ForeignKey(f"{SCHEMA}.clients.id", ondelete="CASCADE"), nullable=False, index=True)

    email = Column(String(160), nullable=False, index=True)
    full_name = Column(String(160), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    is_email_verified = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    client = relationship("Client", back_populates="users")
    roles = relationship("Role", secondary=user_roles, back_populates="users", collection_class=set)
    jwt_tokens = relationship("JwtToken", back_populates="user", cascade="all", collection_class=set)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', active={self.is_active})>"
