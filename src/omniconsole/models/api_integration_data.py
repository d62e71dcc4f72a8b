from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime

# Utils
from omniconsole.utils.time_utils import utc_now

# Models
from omniconsole.models.reference_data import ChannelData

SECRET_FIELDS = ("apiKey", "apiSecret", "accountSid", "authToken")
SECRET_MASK = "********"


class ApiIntegrationRequest(BaseModel):
    channelId: int = Field(..., ge=1, description="Channel is required")
    name: str = Field(..., min_length=1)
    apiKey: Optional[str] = None
    apiSecret: Optional[str] = None
    accountSid: Optional[str] = None
    authToken: Optional[str] = None
    baseUrl: Optional[str] = None
    isActive: bool = True
    settings: Optional[Any] = None

class ApiIntegrationData(ApiIntegrationRequest):
    id: Optional[str] = None  # MongoDB _id
    tenantId: str
    channel: Optional[ChannelData] = None  # Embedded on read, never stored
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)

    def masked(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        for field in SECRET_FIELDS:
            data[field] = SECRET_MASK if data.get(field) else None
        return data

class ToggleRequest(BaseModel):
    isActive: bool
