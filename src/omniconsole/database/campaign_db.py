from typing import Optional, List, Dict, Any

# Database
from omniconsole.database.base_db import BaseDB, NEWEST_FIRST

# Models
from omniconsole.models.campaign_data import CampaignData

"""
Database class for campaign operations
"""
class CampaignDB(BaseDB):
    collection_name = "campaigns"
    service_name = "CampaignDB"

    async def create_campaign(self, campaign: CampaignData) -> CampaignData:
        record = await self._insert_document(campaign.model_dump(exclude={"id", "channel"}), "create_campaign")
        return CampaignData.model_validate(record)

    async def get_campaign(self, tenant_id: str, campaign_id: str) -> Optional[CampaignData]:
        record = await self._find_scoped(tenant_id, campaign_id, "get_campaign")
        return CampaignData.model_validate(record) if record else None

    async def get_campaigns(self, tenant_id: str, limit: Optional[int] = None) -> List[CampaignData]:
        records = await self._find_documents({"tenantId": tenant_id}, "get_campaigns", sort=NEWEST_FIRST, limit=limit)
        return [CampaignData.model_validate(record) for record in records]

    async def update_campaign(self, tenant_id: str, campaign_id: str, fields: Dict[str, Any]) -> Optional[CampaignData]:
        fields = {key: value for key, value in fields.items() if key != "channel"}
        record = await self._update_scoped(tenant_id, campaign_id, fields, "update_campaign")
        return CampaignData.model_validate(record) if record else None

    async def delete_campaign(self, tenant_id: str, campaign_id: str) -> bool:
        return await self._delete_scoped(tenant_id, campaign_id, "delete_campaign")
