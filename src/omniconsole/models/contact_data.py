from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import datetime

# Utils
from omniconsole.utils.time_utils import utc_now


class ContactRequest(BaseModel):
    firstName: str = Field(..., min_length=1, description="First name is required")
    lastName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    isActive: bool = True
    metadata: Optional[Dict[str, Any]] = None

class ContactData(ContactRequest):
    id: Optional[str] = None  # MongoDB _id
    tenantId: str
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)

class ContactStats(BaseModel):
    total: int
    active: int
    lists: int


class ContactListRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

class ContactListData(ContactListRequest):
    id: Optional[str] = None
    tenantId: str
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)


class ContactImportResult(BaseModel):
    success: bool
    imported: int
    total: int
    errors: List[str] = Field(default_factory=list)
