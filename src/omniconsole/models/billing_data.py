from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Dict, Any
from datetime import datetime

# Utils
from omniconsole.utils.time_utils import utc_now


class TransactionType(str, Enum):
    TOPUP = "topup"
    CHARGE = "charge"
    REFUND = "refund"


class TransactionData(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None  # MongoDB _id
    tenantId: str
    type: TransactionType
    amount: str  # decimal as text, always positive; the type carries the sign
    currencyCode: str = "USD"
    description: Optional[str] = None
    reference: Optional[str] = None
    balanceBefore: str
    balanceAfter: str
    metadata: Optional[Dict[str, Any]] = None
    createdAt: datetime = Field(default_factory=utc_now)


class TopupRequest(BaseModel):
    amount: str | float | int
    currency: Optional[str] = None
    paymentMethodId: Optional[str] = None

class BalanceResponse(BaseModel):
    balance: str
    currency: str
