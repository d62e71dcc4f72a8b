from fastapi import APIRouter, Depends
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.api_integration_service import ApiIntegrationService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_api_integration_api(
    log_util: LogUtil,
    api_integration_service: ApiIntegrationService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api/api-integrations",
        tags=["api-integrations"],
    )

    @router.get("")
    async def get_integrations(principal: Principal = Depends(get_principal)):
        try:
            return await api_integration_service.get_integrations(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ApiIntegrationAPI", "fetching API integrations", e)

    @router.get("/{integration_id}")
    async def get_integration(integration_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await api_integration_service.get_integration(principal, integration_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ApiIntegrationAPI", "fetching API integration", e)

    @router.post("", status_code=201)
    async def create_integration(integration_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await api_integration_service.create_integration(principal, integration_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ApiIntegrationAPI", "creating API integration", e)

    @router.put("/{integration_id}")
    async def update_integration(integration_id: str, integration_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await api_integration_service.update_integration(principal, integration_id, integration_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ApiIntegrationAPI", "updating API integration", e)

    @router.put("/{integration_id}/toggle")
    async def toggle_integration(integration_id: str, toggle_data: dict, principal: Principal = Depends(get_principal)):
        """
        Request body:
        {
            "isActive": true | false
        }
        """
        try:
            return await api_integration_service.toggle_integration(principal, integration_id, toggle_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ApiIntegrationAPI", "toggling API integration", e)

    @router.delete("/{integration_id}")
    async def delete_integration(integration_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await api_integration_service.delete_integration(principal, integration_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ApiIntegrationAPI", "deleting API integration", e)

    return router
