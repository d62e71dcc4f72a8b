from fastapi import APIRouter, Depends
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.billing_service import BillingService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_billing_api(
    log_util: LogUtil,
    billing_service: BillingService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api",
        tags=["billing"],
    )

    @router.get("/user/balance")
    async def get_balance(principal: Principal = Depends(get_principal)):
        try:
            return await billing_service.get_balance(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "BillingAPI", "fetching balance", e)

    @router.get("/transactions")
    async def get_transactions(principal: Principal = Depends(get_principal)):
        try:
            return await billing_service.get_transactions(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "BillingAPI", "fetching transactions", e)

    @router.post("/transactions/topup", status_code=201)
    async def topup(topup_data: dict, principal: Principal = Depends(get_principal)):
        """
        Add funds to the caller's tenant.

        Request body:
        {
            "amount": "25.00",
            "currency": "USD",
            "paymentMethodId": "optional reference"
        }
        """
        try:
            return await billing_service.topup(principal, topup_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "BillingAPI", "processing top-up", e)

    @router.get("/channels")
    async def get_channels(principal: Principal = Depends(get_principal)):
        try:
            return await billing_service.get_channels()
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "BillingAPI", "fetching channels", e)

    @router.get("/channel-rates")
    async def get_channel_rates(principal: Principal = Depends(get_principal)):
        try:
            return await billing_service.get_channel_rates()
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "BillingAPI", "fetching channel rates", e)

    return router
