import uuid
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

class ClientBase(BaseModel):
    name: str
    slug: str
    metadata_json: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True

class ClientCreate(ClientBase):  # usado por seed/superadmin
    pass

class ClientUpdate(BaseModel):   # edição parcial (slug e id não mudam)
    name: str | None = None
    metadata_json: Dict[str, Any] | None = None
    is_active: bool | None = None

class ClientOut(ClientBase):
    id: uuid.UUID
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
