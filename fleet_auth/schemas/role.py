import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class RoleBase(BaseModel):
    name: str
    description: Optional[str] = None
    is_system: bool = False

class RoleCreate(RoleBase):
    client_id: uuid.UUID

class RoleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_system: Optional[bool] = None

class RoleOut(RoleBase):
    id: uuid.UUID
    client_id: uuid.UUID
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
