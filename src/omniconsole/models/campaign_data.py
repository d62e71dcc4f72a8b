from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Dict, Any
from datetime import datetime

# Utils
from omniconsole.utils.time_utils import utc_now

# Models
from omniconsole.models.reference_data import ChannelData


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class CampaignRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    channelId: int
    # Not cross-checked against the owning tenant
    flowId: Optional[str] = None
    templateId: Optional[str] = None
    listId: Optional[str] = None
    status: CampaignStatus = CampaignStatus.DRAFT
    scheduledAt: Optional[datetime] = None
    completedAt: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None

class CampaignData(CampaignRequest):
    id: Optional[str] = None  # MongoDB _id
    tenantId: str
    channel: Optional[ChannelData] = None  # Embedded on read, never stored
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)
