from bson import ObjectId
from typing import Optional, List, Dict, Any
from pymongo import ReturnDocument

# Utils
from omniconsole.utils.time_utils import utc_now

# Database
from omniconsole.database.base_db import BaseDB

# Models
from omniconsole.models.tenant_data import TenantData, UserTenantData

"""
Database class for tenants and user memberships.
Tenants are not scoped by tenantId; visibility is decided by the service.
"""
class TenantDB(BaseDB):
    collection_name = "tenants"
    service_name = "TenantDB"

    async def create_tenant(self, tenant: TenantData) -> TenantData:
        record = await self._insert_document(tenant.model_dump(exclude={"id", "level"}), "create_tenant")
        return TenantData.model_validate(record)

    async def get_tenant(self, tenant_id: str) -> Optional[TenantData]:
        if not self.is_valid_id(tenant_id):
            return None
        try:
            document = await self._collection().find_one({"_id": ObjectId(tenant_id)})
            if document is None:
                return None
            return TenantData.model_validate(self._from_document(document))
        except Exception as e:
            self._handle_db_operation("get_tenant", e)

    async def get_child_tenants(self, parent_id: str) -> List[TenantData]:
        records = await self._find_documents({"parentId": parent_id}, "get_child_tenants", sort=[("name", 1)])
        return [TenantData.model_validate(record) for record in records]

    async def update_tenant(self, tenant_id: str, fields: Dict[str, Any]) -> Optional[TenantData]:
        if not self.is_valid_id(tenant_id):
            return None
        # parentId and balance are never changed through a plain update
        fields = {key: value for key, value in fields.items() if key not in ("level", "parentId", "balance")}
        try:
            fields.pop("id", None)
            fields.pop("createdAt", None)
            fields["updatedAt"] = utc_now()
            document = await self._collection().find_one_and_update(
                {"_id": ObjectId(tenant_id)},
                {"$set": fields},
                return_document=ReturnDocument.AFTER
            )
            if document is None:
                return None
            return TenantData.model_validate(self._from_document(document))
        except Exception as e:
            self._handle_db_operation("update_tenant", e)

    async def delete_tenant(self, tenant_id: str) -> bool:
        if not self.is_valid_id(tenant_id):
            return False
        try:
            result = await self._collection().delete_one({"_id": ObjectId(tenant_id)})
            return result.deleted_count > 0
        except Exception as e:
            self._handle_db_operation("delete_tenant", e)

    # Memberships
    async def add_user_to_tenant(self, membership: UserTenantData) -> UserTenantData:
        try:
            document = membership.model_dump(exclude={"id"})
            result = await self._collection("user_tenants").insert_one(document)
            document["_id"] = result.inserted_id
            return UserTenantData.model_validate(self._from_document(document))
        except Exception as e:
            self._handle_db_operation("add_user_to_tenant", e)

    async def get_primary_membership(self, user_id: int) -> Optional[UserTenantData]:
        """
        The earliest membership of the user decides the primary tenant
        """
        try:
            cursor = self._collection("user_tenants").find({"userId": user_id}).sort([("createdAt", 1)]).limit(1)
            async for document in cursor:
                return UserTenantData.model_validate(self._from_document(document))
            return None
        except Exception as e:
            self._handle_db_operation("get_primary_membership", e)
