from typing import Optional, List, Dict, Any

# Database
from omniconsole.database.base_db import BaseDB

# Models
from omniconsole.models.api_integration_data import ApiIntegrationData

"""
Database class for channel provider integrations
"""
class ApiIntegrationDB(BaseDB):
    collection_name = "api_integrations"
    service_name = "ApiIntegrationDB"

    async def create_integration(self, integration: ApiIntegrationData) -> ApiIntegrationData:
        record = await self._insert_document(integration.model_dump(exclude={"id", "channel"}), "create_integration")
        return ApiIntegrationData.model_validate(record)

    async def get_integration(self, tenant_id: str, integration_id: str) -> Optional[ApiIntegrationData]:
        record = await self._find_scoped(tenant_id, integration_id, "get_integration")
        return ApiIntegrationData.model_validate(record) if record else None

    async def get_integrations(self, tenant_id: str) -> List[ApiIntegrationData]:
        records = await self._find_documents({"tenantId": tenant_id}, "get_integrations", sort=[("name", 1)])
        return [ApiIntegrationData.model_validate(record) for record in records]

    async def update_integration(self, tenant_id: str, integration_id: str, fields: Dict[str, Any]) -> Optional[ApiIntegrationData]:
        fields = {key: value for key, value in fields.items() if key != "channel"}
        record = await self._update_scoped(tenant_id, integration_id, fields, "update_integration")
        return ApiIntegrationData.model_validate(record) if record else None

    async def delete_integration(self, tenant_id: str, integration_id: str) -> bool:
        return await self._delete_scoped(tenant_id, integration_id, "delete_integration")
