from typing import Optional, List, Dict, Any

# Database
from omniconsole.database.base_db import BaseDB, NEWEST_FIRST

# Models
from omniconsole.models.contact_data import ContactData, ContactListData, ContactStats

"""
Database class for contact operations
"""
class ContactDB(BaseDB):
    collection_name = "contacts"
    service_name = "ContactDB"

    async def create_contact(self, contact: ContactData) -> ContactData:
        record = await self._insert_document(contact.model_dump(exclude={"id"}), "create_contact")
        return ContactData.model_validate(record)

    async def get_contact(self, tenant_id: str, contact_id: str) -> Optional[ContactData]:
        record = await self._find_scoped(tenant_id, contact_id, "get_contact")
        return ContactData.model_validate(record) if record else None

    async def get_contacts(self, tenant_id: str) -> List[ContactData]:
        records = await self._find_documents({"tenantId": tenant_id}, "get_contacts", sort=NEWEST_FIRST)
        return [ContactData.model_validate(record) for record in records]

    async def update_contact(self, tenant_id: str, contact_id: str, fields: Dict[str, Any]) -> Optional[ContactData]:
        record = await self._update_scoped(tenant_id, contact_id, fields, "update_contact")
        return ContactData.model_validate(record) if record else None

    async def delete_contact(self, tenant_id: str, contact_id: str) -> bool:
        return await self._delete_scoped(tenant_id, contact_id, "delete_contact")

    async def get_contact_stats(self, tenant_id: str) -> ContactStats:
        total = await self._count({"tenantId": tenant_id}, "get_contact_stats")
        active = await self._count({"tenantId": tenant_id, "isActive": True}, "get_contact_stats")
        lists = await self._count({"tenantId": tenant_id}, "get_contact_stats", collection_name="contact_lists")
        return ContactStats(total=total, active=active, lists=lists)


"""
Database class for contact list operations
"""
class ContactListDB(BaseDB):
    collection_name = "contact_lists"
    service_name = "ContactListDB"

    async def create_contact_list(self, contact_list: ContactListData) -> ContactListData:
        record = await self._insert_document(contact_list.model_dump(exclude={"id"}), "create_contact_list")
        return ContactListData.model_validate(record)

    async def get_contact_lists(self, tenant_id: str) -> List[ContactListData]:
        records = await self._find_documents({"tenantId": tenant_id}, "get_contact_lists", sort=NEWEST_FIRST)
        return [ContactListData.model_validate(record) for record in records]
