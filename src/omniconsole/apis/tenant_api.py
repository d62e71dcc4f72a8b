from fastapi import APIRouter, Depends
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.tenant_service import TenantService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_tenant_api(
    log_util: LogUtil,
    tenant_service: TenantService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api",
        tags=["tenants"],
    )

    @router.get("/tenants")
    async def get_tenants(principal: Principal = Depends(get_principal)):
        """
        Tenants visible to an admin or owner: a root tenant and its children, or just the caller's own tenant
        """
        try:
            return await tenant_service.get_tenants(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TenantAPI", "fetching tenants", e)

    @router.get("/tenants/{tenant_id}")
    async def get_tenant(tenant_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await tenant_service.get_tenant(principal, tenant_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TenantAPI", "fetching tenant", e)

    @router.post("/tenants", status_code=201)
    async def create_tenant(tenant_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await tenant_service.create_tenant(principal, tenant_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TenantAPI", "creating tenant", e)

    @router.put("/tenants/{tenant_id}")
    async def update_tenant(tenant_id: str, tenant_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await tenant_service.update_tenant(principal, tenant_id, tenant_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TenantAPI", "updating tenant", e)

    @router.delete("/tenants/{tenant_id}")
    async def delete_tenant(tenant_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await tenant_service.delete_tenant(principal, tenant_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TenantAPI", "deleting tenant", e)

    @router.get("/tenant-levels")
    async def get_tenant_levels(principal: Principal = Depends(get_principal)):
        try:
            return await tenant_service.get_tenant_levels()
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TenantAPI", "fetching tenant levels", e)

    return router
