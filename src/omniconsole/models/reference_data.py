from pydantic import BaseModel, Field
from typing import Optional


class ChannelData(BaseModel):
    """
    Communication medium reference row (SMS, VOIP, WHATSAPP, RCS)
    """
    id: int
    code: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    basePrice: str  # decimal as text

class TenantLevelData(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    maxContacts: int
    maxCampaigns: int
    maxTemplates: int
    maxUsers: int

class ChannelRateData(BaseModel):
    id: int
    channelId: int
    tenantLevelId: int
    countryCode: str = Field(default="ALL")
    rate: str
    currencyCode: str = Field(default="USD")
