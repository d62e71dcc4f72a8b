from typing import List, Dict, Optional

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.tenant_db import TenantDB
from omniconsole.database.reference_db import ReferenceDB

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.tenant_data import TenantRequest, TenantData, UserTenantData
from omniconsole.models.reference_data import TenantLevelData

# Exceptions
from omniconsole.exceptions.console_exception import NotFoundException, ForbiddenException


class TenantService:
    def __init__(self, log_util: LogUtil, tenant_db: TenantDB, reference_db: ReferenceDB):
        self.log_util = log_util
        self.tenant_db = tenant_db
        self.reference_db = reference_db

    @staticmethod
    def _require_admin(principal: Principal, action: str) -> None:
        if not principal.is_admin:
            raise ForbiddenException(message=f"Not authorized to {action} tenants")

    async def _with_levels(self, tenants: List[TenantData]) -> List[TenantData]:
        levels = {level.id: level for level in await self.reference_db.get_tenant_levels()}
        for tenant in tenants:
            tenant.level = levels.get(tenant.levelId)
        return tenants

    async def _visible_tenants(self, principal: Principal) -> List[TenantData]:
        """
        A root tenant sees itself followed by its children (by name);
        a child tenant sees only itself.
        """
        own_tenant = await self.tenant_db.get_tenant(principal.tenant_id)
        if own_tenant is None:
            raise NotFoundException(message="No tenant found for user")
        if own_tenant.parentId is not None:
            return [own_tenant]
        return [own_tenant] + await self.tenant_db.get_child_tenants(own_tenant.id)

    async def _get_visible_tenant(self, principal: Principal, tenant_id: str) -> TenantData:
        for tenant in await self._visible_tenants(principal):
            if tenant.id == tenant_id:
                return tenant
        raise NotFoundException(message="Tenant not found")

    async def get_tenants(self, principal: Principal) -> List[TenantData]:
        self._require_admin(principal, "view")
        return await self._with_levels(await self._visible_tenants(principal))

    async def get_tenant(self, principal: Principal, tenant_id: str) -> TenantData:
        self._require_admin(principal, "view")
        tenant = await self._get_visible_tenant(principal, tenant_id)
        tenant.level = await self.reference_db.get_tenant_level(tenant.levelId)
        return tenant

    async def create_tenant(self, principal: Principal, tenant_data: dict) -> TenantData:
        """
        Create a child tenant of the caller's tenant. balance, currencyCode and
        isActive fall back to "0", "USD" and true.
        """
        request = validate_payload(TenantRequest, tenant_data, "tenant")
        self._require_admin(principal, "create")

        tenant = TenantData(parentId=principal.tenant_id, **request.model_dump())
        saved = await self.tenant_db.create_tenant(tenant)
        saved.level = await self.reference_db.get_tenant_level(saved.levelId)
        self.log_util.info(service_name="TenantService", message=f"Tenant {saved.id} created under {principal.tenant_id} by user {principal.user_id}")
        return saved

    async def update_tenant(self, principal: Principal, tenant_id: str, tenant_data: dict) -> TenantData:
        self._require_admin(principal, "update")
        existing = await self._get_visible_tenant(principal, tenant_id)
        if not isinstance(tenant_data, dict):
            tenant_data = {}
        request = validate_payload(
            TenantRequest,
            {**existing.model_dump(include=set(TenantRequest.model_fields)), **tenant_data},
            "tenant"
        )
        fields = request.model_dump(include=set(tenant_data) & set(TenantRequest.model_fields))
        updated = await self.tenant_db.update_tenant(tenant_id, fields)
        if updated is None:
            raise NotFoundException(message="Tenant not found")
        updated.level = await self.reference_db.get_tenant_level(updated.levelId)
        return updated

    async def delete_tenant(self, principal: Principal, tenant_id: str) -> Dict[str, str]:
        self._require_admin(principal, "delete")
        if tenant_id == principal.tenant_id:
            raise ForbiddenException(message="Cannot delete your own tenant")
        await self._get_visible_tenant(principal, tenant_id)
        if not await self.tenant_db.delete_tenant(tenant_id):
            raise NotFoundException(message="Tenant not found")
        self.log_util.info(service_name="TenantService", message=f"Tenant {tenant_id} deleted by user {principal.user_id}")
        return {"message": "Tenant deleted successfully"}

    async def get_tenant_levels(self) -> List[TenantLevelData]:
        return await self.reference_db.get_tenant_levels()

    async def add_member(self, tenant_id: str, user_id: int, role: str = "member") -> UserTenantData:
        return await self.tenant_db.add_user_to_tenant(UserTenantData(userId=user_id, tenantId=tenant_id, role=role))

    async def get_own_tenant(self, principal: Principal) -> Optional[TenantData]:
        return await self.tenant_db.get_tenant(principal.tenant_id)
