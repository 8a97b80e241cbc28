import uuid
from datetime import datetime
from typing import Any, Dict, Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, ForeignKey, Uuid, func, text
from fleet_auth.db.base_class import Base, SCHEMA, as_utc, utcnow
from fleet_auth.models.client import JSONDocument


class JwtToken(Base):
    """Registro de um token emitido (access/refresh) e do seu ciclo de vida.

    Transições possíveis: ativo -> revogado, ativo -> substituído (que também
    marca ``revoked_at``). Não existe "desrevogar".
    """

    __tablename__ = "jwt_tokens"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    jti: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    token_type: Mapped[str] = mapped_column(String(20), nullable=False)

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(f"{SCHEMA}.users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # denormalizado a partir do usuário
    client_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey(f"{SCHEMA}.clients.id", ondelete="CASCADE"), nullable=True, index=True
    )

    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    revoked_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    revoked_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    replaced_by_jti: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    metadata_json: Mapped[Dict[str, Any]] = mapped_column(
        "metadata", JSONDocument, default=dict, server_default=text("'{}'")
    )

    user = relationship("User", back_populates="jwt_tokens")
    client = relationship("Client", back_populates="jwt_tokens")

    def __init__(self, **kwargs: Any):
        super().__init__(**kwargs)
        if self.client is None and self.client_id is None and self.user is not None:
            self.client = self.user.client

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or utcnow()) > as_utc(self.expires_at)

    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_active(self, now: datetime | None = None) -> bool:
        return not self.is_expired(now) and not self.is_revoked()

    def revoke(self, revoked_by: uuid.UUID | None) -> None:
        # sem guarda contra dupla revogação: o timestamp é sobrescrito
        self.revoked_at = utcnow()
        self.revoked_by = revoked_by

    def mark_as_replaced(self, new_jti: str) -> None:
        self.replaced_by_jti = new_jti
        self.revoked_at = utcnow()

    def __repr__(self) -> str:
        return (
            f"<JwtToken(id={self.id}, jti='{self.jti}', type='{self.token_type}', "
            f"expires_at={self.expires_at}, revoked_at={self.revoked_at})>"
        )
