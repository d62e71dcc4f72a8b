from typing import Optional, List, Dict, Any

# Database
from omniconsole.database.base_db import BaseDB, NEWEST_FIRST

# Models
from omniconsole.models.template_data import TemplateData

"""
Database class for message template operations
"""
class TemplateDB(BaseDB):
    collection_name = "templates"
    service_name = "TemplateDB"

    async def create_template(self, template: TemplateData) -> TemplateData:
        record = await self._insert_document(template.model_dump(exclude={"id"}), "create_template")
        return TemplateData.model_validate(record)

    async def get_template(self, tenant_id: str, template_id: str) -> Optional[TemplateData]:
        record = await self._find_scoped(tenant_id, template_id, "get_template")
        return TemplateData.model_validate(record) if record else None

    async def get_templates(self, tenant_id: str) -> List[TemplateData]:
        records = await self._find_documents({"tenantId": tenant_id}, "get_templates", sort=NEWEST_FIRST)
        return [TemplateData.model_validate(record) for record in records]

    async def update_template(self, tenant_id: str, template_id: str, fields: Dict[str, Any]) -> Optional[TemplateData]:
        record = await self._update_scoped(tenant_id, template_id, fields, "update_template")
        return TemplateData.model_validate(record) if record else None

    async def delete_template(self, tenant_id: str, template_id: str) -> bool:
        return await self._delete_scoped(tenant_id, template_id, "delete_template")
