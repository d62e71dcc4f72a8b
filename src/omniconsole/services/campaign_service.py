from typing import List, Dict

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.campaign_db import CampaignDB
from omniconsole.database.reference_db import ReferenceDB

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.campaign_data import CampaignRequest, CampaignData

# Exceptions
from omniconsole.exceptions.console_exception import NotFoundException, ValidationException

RECENT_CAMPAIGNS_LIMIT = 4


class CampaignService:
    def __init__(self, log_util: LogUtil, campaign_db: CampaignDB, reference_db: ReferenceDB):
        self.log_util = log_util
        self.campaign_db = campaign_db
        self.reference_db = reference_db

    async def _with_channels(self, campaigns: List[CampaignData]) -> List[CampaignData]:
        channels = {channel.id: channel for channel in await self.reference_db.get_channels()}
        for campaign in campaigns:
            campaign.channel = channels.get(campaign.channelId)
        return campaigns

    async def _check_channel(self, channel_id: int) -> None:
        if await self.reference_db.get_channel(channel_id) is None:
            raise ValidationException(
                message="Invalid campaign data",
                errors=[{"path": "channelId", "message": f"Channel {channel_id} does not exist", "type": "value_error"}]
            )

    async def get_campaigns(self, principal: Principal) -> List[CampaignData]:
        return await self._with_channels(await self.campaign_db.get_campaigns(principal.tenant_id))

    async def get_recent_campaigns(self, principal: Principal) -> List[CampaignData]:
        campaigns = await self.campaign_db.get_campaigns(principal.tenant_id, limit=RECENT_CAMPAIGNS_LIMIT)
        return await self._with_channels(campaigns)

    async def get_campaign(self, principal: Principal, campaign_id: str) -> CampaignData:
        campaign = await self.campaign_db.get_campaign(principal.tenant_id, campaign_id)
        if campaign is None:
            raise NotFoundException(message="Campaign not found")
        campaign.channel = await self.reference_db.get_channel(campaign.channelId)
        return campaign

    async def create_campaign(self, principal: Principal, campaign_data: dict) -> CampaignData:
        request = validate_payload(CampaignRequest, campaign_data, "campaign")
        await self._check_channel(request.channelId)
        campaign = CampaignData(tenantId=principal.tenant_id, **request.model_dump())
        saved = await self.campaign_db.create_campaign(campaign)
        saved.channel = await self.reference_db.get_channel(saved.channelId)
        self.log_util.info(service_name="CampaignService", message=f"Campaign {saved.id} created for tenant {principal.tenant_id}")
        return saved

    async def update_campaign(self, principal: Principal, campaign_id: str, campaign_data: dict) -> CampaignData:
        existing = await self.get_campaign(principal, campaign_id)
        if not isinstance(campaign_data, dict):
            campaign_data = {}
        request = validate_payload(
            CampaignRequest,
            {**existing.model_dump(include=set(CampaignRequest.model_fields)), **campaign_data},
            "campaign"
        )
        if "channelId" in campaign_data:
            await self._check_channel(request.channelId)
        fields = request.model_dump(include=set(campaign_data) & set(CampaignRequest.model_fields))
        updated = await self.campaign_db.update_campaign(principal.tenant_id, campaign_id, fields)
        if updated is None:
            raise NotFoundException(message="Campaign not found")
        updated.channel = await self.reference_db.get_channel(updated.channelId)
        return updated

    async def delete_campaign(self, principal: Principal, campaign_id: str) -> Dict[str, str]:
        deleted = await self.campaign_db.delete_campaign(principal.tenant_id, campaign_id)
        if not deleted:
            raise NotFoundException(message="Campaign not found")
        return {"message": "Campaign deleted successfully"}
