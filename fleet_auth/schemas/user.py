# fleet_auth/schemas/user.py
from __future__ import annotations
import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

class UserBase(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None
    is_active: bool = True
    is_email_verified: bool = False

class UserCreate(UserBase):
    client_id: uuid.UUID

class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    is_active: Optional[bool] = None
    is_email_verified: Optional[bool] = None
    last_login: Optional[datetime] = None

class UserOut(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    email: str          # str na saída: o banco pode ter e-mails legados
    full_name: Optional[str] = None
    is_active: bool
    is_email_verified: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    role_names: List[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @classmethod
    def from_user(cls, user) -> "UserOut":
        out = cls.model_validate(user)
        out.role_names = sorted(r.name for r in (user.roles or []))
        return out
