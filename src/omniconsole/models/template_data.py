from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Dict, Any, List
from datetime import datetime

# Utils
from omniconsole.utils.time_utils import utc_now


class TemplateType(str, Enum):
    SMS = "sms"
    WHATSAPP = "whatsapp"
    VOICE = "voice"
    RCS = "rcs"

class TemplateStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"


class TemplateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1)
    type: TemplateType
    content: str = Field(..., min_length=1)  # Stored verbatim, {{placeholders}} included
    variables: Optional[List[str]] = None
    previewData: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None  # category, language, headerType, footer
    folderId: Optional[str] = None
    status: TemplateStatus = TemplateStatus.DRAFT
    isActive: bool = True
    tags: Optional[List[str]] = None

class TemplateData(TemplateRequest):
    id: Optional[str] = None  # MongoDB _id
    tenantId: str
    createdById: Optional[int] = None
    lastModifiedById: Optional[int] = None
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)


class TemplatePreviewRequest(BaseModel):
    data: Optional[Dict[str, Any]] = None

class TemplatePreview(BaseModel):
    content: str
    rendered: str
    missing: List[str] = Field(default_factory=list)
