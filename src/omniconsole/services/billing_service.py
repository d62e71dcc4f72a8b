from decimal import Decimal, InvalidOperation
from typing import List

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.billing_db import BillingDB
from omniconsole.database.tenant_db import TenantDB
from omniconsole.database.reference_db import ReferenceDB

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.billing_data import TransactionData, TransactionType, TopupRequest, BalanceResponse
from omniconsole.models.reference_data import ChannelData, ChannelRateData

# Exceptions
from omniconsole.exceptions.console_exception import NotFoundException, ValidationException


def parse_amount(value) -> Decimal:
    """
    A positive, finite decimal from a JSON number or numeric string
    """
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        amount = None
    if amount is None or not amount.is_finite() or amount <= 0:
        raise ValidationException(
            message="Invalid amount",
            errors=[{"path": "amount", "message": "Amount must be a positive number", "type": "value_error"}]
        )
    return amount


class BillingService:
    def __init__(self, log_util: LogUtil, billing_db: BillingDB, tenant_db: TenantDB, reference_db: ReferenceDB):
        self.log_util = log_util
        self.billing_db = billing_db
        self.tenant_db = tenant_db
        self.reference_db = reference_db

    async def get_balance(self, principal: Principal) -> BalanceResponse:
        tenant = await self.tenant_db.get_tenant(principal.tenant_id)
        if tenant is None:
            raise NotFoundException(message="No tenant found for user")
        return BalanceResponse(balance=tenant.balance, currency=tenant.currencyCode)

    async def get_transactions(self, principal: Principal) -> List[TransactionData]:
        return await self.billing_db.get_transactions(principal.tenant_id)

    async def topup(self, principal: Principal, topup_data: dict) -> TransactionData:
        """
        Add funds to the caller's tenant.

        The new balance and the ledger row are written together; if the balance
        changed after it was read here the whole top-up is refused with 409.
        """
        request = validate_payload(TopupRequest, topup_data, "top-up")
        amount = parse_amount(request.amount)

        tenant = await self.tenant_db.get_tenant(principal.tenant_id)
        if tenant is None:
            raise NotFoundException(message="No tenant found for user")

        balance_before = Decimal(tenant.balance)
        transaction = TransactionData(
            tenantId=principal.tenant_id,
            type=TransactionType.TOPUP,
            amount=format(amount, "f"),
            currencyCode=request.currency or tenant.currencyCode,
            description="Account top-up",
            reference=request.paymentMethodId,
            balanceBefore=tenant.balance,
            balanceAfter=format(balance_before + amount, "f"),
            metadata={"userId": principal.user_id}
        )
        return await self.billing_db.apply_transaction(transaction)

    async def get_channels(self) -> List[ChannelData]:
        return await self.reference_db.get_channels()

    async def get_channel_rates(self) -> List[ChannelRateData]:
        return await self.reference_db.get_channel_rates()
