# fleet_auth/schemas/token.py
import uuid
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, computed_field
from fleet_auth.db.base_class import as_utc, utcnow

class JwtTokenCreate(BaseModel):
    jti: str
    token_type: str = "access"  # "access" | "refresh"
    user_id: uuid.UUID
    client_id: Optional[uuid.UUID] = None  # preenchido a partir do usuário
    expires_at: Optional[datetime] = None
    metadata_json: Dict[str, Any] = Field(default_factory=dict)

class JwtTokenOut(BaseModel):
    id: uuid.UUID
    jti: str
    token_type: str
    user_id: uuid.UUID
    client_id: Optional[uuid.UUID] = None
    issued_at: datetime
    expires_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    revoked_by: Optional[uuid.UUID] = None
    replaced_by_jti: Optional[str] = None

    model_config = {"from_attributes": True}

    @computed_field  # type: ignore[misc]
    @property
    def active(self) -> bool:
        if self.revoked_at is not None:
            return False
        return self.expires_at is None or as_utc(self.expires_at) > utcnow()
