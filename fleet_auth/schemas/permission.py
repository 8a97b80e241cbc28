import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class PermissionBase(BaseModel):
    name: str  # ex.: "vehicles:read"
    description: Optional[str] = None

class PermissionCreate(PermissionBase):
    pass

class PermissionUpdate(BaseModel):
    description: Optional[str] = None

class PermissionOut(PermissionBase):
    id: uuid.UUID
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
