from fastapi import APIRouter, Depends
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.campaign_service import CampaignService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_campaign_api(
    log_util: LogUtil,
    campaign_service: CampaignService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api/campaigns",
        tags=["campaigns"],
    )

    @router.get("")
    async def get_campaigns(principal: Principal = Depends(get_principal)):
        try:
            return await campaign_service.get_campaigns(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "CampaignAPI", "fetching campaigns", e)

    @router.get("/recent")
    async def get_recent_campaigns(principal: Principal = Depends(get_principal)):
        """
        The four newest campaigns with their channel, for the dashboard
        """
        try:
            return await campaign_service.get_recent_campaigns(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "CampaignAPI", "fetching recent campaigns", e)

    @router.get("/{campaign_id}")
    async def get_campaign(campaign_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await campaign_service.get_campaign(principal, campaign_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "CampaignAPI", "fetching campaign", e)

    @router.post("", status_code=201)
    async def create_campaign(campaign_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await campaign_service.create_campaign(principal, campaign_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "CampaignAPI", "creating campaign", e)

    @router.put("/{campaign_id}")
    async def update_campaign(campaign_id: str, campaign_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await campaign_service.update_campaign(principal, campaign_id, campaign_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "CampaignAPI", "updating campaign", e)

    @router.delete("/{campaign_id}")
    async def delete_campaign(campaign_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await campaign_service.delete_campaign(principal, campaign_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "CampaignAPI", "deleting campaign", e)

    return router
