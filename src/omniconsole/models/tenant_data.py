from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal, InvalidOperation
import re

# Utils
from omniconsole.utils.time_utils import utc_now

# Models
from omniconsole.models.reference_data import TenantLevelData

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class TenantRequest(BaseModel):
    name: str = Field(..., min_length=2, description="Name must be at least 2 characters")
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    levelId: int
    balance: str = "0"  # decimal as text
    currencyCode: str = "USD"
    isActive: bool = True

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Must provide a valid email")
        return value

    @field_validator("balance")
    @classmethod
    def decimal_balance(cls, value: str) -> str:
        try:
            amount = Decimal(value.strip())
        except (InvalidOperation, ValueError):
            raise ValueError("Balance must be a decimal number")
        if not amount.is_finite():
            raise ValueError("Balance must be a decimal number")
        return format(amount, "f")

class TenantData(TenantRequest):
    id: Optional[str] = None  # MongoDB _id
    parentId: Optional[str] = None
    level: Optional[TenantLevelData] = None  # Embedded on read, never stored
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)


class UserTenantData(BaseModel):
    """
    Membership of a user in a tenant. The earliest membership is the primary tenant.
    """
    id: Optional[str] = None
    userId: int
    tenantId: str
    role: str = "member"  # member, admin, owner
    createdAt: datetime = Field(default_factory=utc_now)
