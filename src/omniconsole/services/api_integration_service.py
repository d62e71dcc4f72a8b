from typing import List, Dict, Any

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.api_integration_db import ApiIntegrationDB
from omniconsole.database.reference_db import ReferenceDB

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.api_integration_data import ApiIntegrationRequest, ApiIntegrationData, ToggleRequest, SECRET_FIELDS, SECRET_MASK

# Exceptions
from omniconsole.exceptions.console_exception import NotFoundException


class ApiIntegrationService:
    """
    Channel provider credentials. Every value handed back to callers is masked.
    """

    def __init__(self, log_util: LogUtil, api_integration_db: ApiIntegrationDB, reference_db: ReferenceDB):
        self.log_util = log_util
        self.api_integration_db = api_integration_db
        self.reference_db = reference_db

    async def _masked(self, integration: ApiIntegrationData) -> Dict[str, Any]:
        integration.channel = await self.reference_db.get_channel(integration.channelId)
        return integration.masked()

    async def _get(self, principal: Principal, integration_id: str) -> ApiIntegrationData:
        integration = await self.api_integration_db.get_integration(principal.tenant_id, integration_id)
        if integration is None:
            raise NotFoundException(message="API integration not found")
        return integration

    async def get_integrations(self, principal: Principal) -> List[Dict[str, Any]]:
        integrations = await self.api_integration_db.get_integrations(principal.tenant_id)
        channels = {channel.id: channel for channel in await self.reference_db.get_channels()}
        for integration in integrations:
            integration.channel = channels.get(integration.channelId)
        return [integration.masked() for integration in integrations]

    async def get_integration(self, principal: Principal, integration_id: str) -> Dict[str, Any]:
        return await self._masked(await self._get(principal, integration_id))

    async def create_integration(self, principal: Principal, integration_data: dict) -> Dict[str, Any]:
        request = validate_payload(ApiIntegrationRequest, integration_data, "API integration")
        integration = ApiIntegrationData(tenantId=principal.tenant_id, **request.model_dump())
        saved = await self.api_integration_db.create_integration(integration)
        self.log_util.info(service_name="ApiIntegrationService", message=f"API integration {saved.id} created for channel {saved.channelId}")
        return await self._masked(saved)

    async def update_integration(self, principal: Principal, integration_id: str, integration_data: dict) -> Dict[str, Any]:
        """
        Update an integration. A secret sent back as the mask keeps its stored value.
        """
        existing = await self._get(principal, integration_id)
        if not isinstance(integration_data, dict):
            integration_data = {}
        changes = {
            key: value for key, value in integration_data.items()
            if not (key in SECRET_FIELDS and value == SECRET_MASK)
        }
        request = validate_payload(
            ApiIntegrationRequest,
            {**existing.model_dump(include=set(ApiIntegrationRequest.model_fields)), **changes},
            "API integration"
        )
        fields = request.model_dump(include=set(changes) & set(ApiIntegrationRequest.model_fields))
        updated = await self.api_integration_db.update_integration(principal.tenant_id, integration_id, fields)
        if updated is None:
            raise NotFoundException(message="API integration not found")
        return await self._masked(updated)

    async def toggle_integration(self, principal: Principal, integration_id: str, toggle_data: dict) -> Dict[str, Any]:
        request = validate_payload(ToggleRequest, toggle_data, "toggle")
        updated = await self.api_integration_db.update_integration(
            principal.tenant_id, integration_id, {"isActive": request.isActive}
        )
        if updated is None:
            raise NotFoundException(message="API integration not found")
        self.log_util.info(service_name="ApiIntegrationService", message=f"API integration {integration_id} isActive={request.isActive}")
        return await self._masked(updated)

    async def delete_integration(self, principal: Principal, integration_id: str) -> Dict[str, str]:
        deleted = await self.api_integration_db.delete_integration(principal.tenant_id, integration_id)
        if not deleted:
            raise NotFoundException(message="API integration not found")
        return {"message": "API integration deleted successfully"}
