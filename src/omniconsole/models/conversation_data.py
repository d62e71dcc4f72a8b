from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Dict, Any
from datetime import datetime

# Utils
from omniconsole.utils.time_utils import utc_now


class ConversationStatus(str, Enum):
    OPEN = "open"
    ASSIGNED = "assigned"
    CLOSED = "closed"

class MessageDirection(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class ConversationData(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None  # MongoDB _id
    tenantId: str
    contactId: str
    channelId: int
    status: ConversationStatus = ConversationStatus.OPEN
    assignedTo: Optional[int] = None
    lastMessageAt: datetime = Field(default_factory=utc_now)
    metadata: Optional[Dict[str, Any]] = None
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)

class ConversationMessageData(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None  # MongoDB _id
    conversationId: str
    content: str
    senderId: Optional[int] = None
    direction: MessageDirection
    read: bool = False
    sentAt: datetime = Field(default_factory=utc_now)
    deliveredAt: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None
    createdAt: datetime = Field(default_factory=utc_now)

class QueuedConversation(BaseModel):
    id: str
    contactName: str
    channelType: str
    message: str
    timestamp: datetime


class SendMessageRequest(BaseModel):
    content: str = Field(..., min_length=1)

class AssignConversationRequest(BaseModel):
    userId: int
