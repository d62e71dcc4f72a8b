from typing import Optional, List, Dict, Any

# Database
from omniconsole.database.base_db import BaseDB, NEWEST_FIRST

# Exceptions
from omniconsole.exceptions.console_exception import FlowDataCorruptedException

# Models
from omniconsole.models.flow_data import FlowData, upgrade_flow_document

"""
Database class for flow operations
"""
class FlowDB(BaseDB):
    collection_name = "flows"
    service_name = "FlowDB"

    def _to_flow(self, record: Dict[str, Any]) -> FlowData:
        try:
            return FlowData.model_validate(upgrade_flow_document(record))
        except FlowDataCorruptedException as e:
            self.log_util.error(
                service_name=self.service_name,
                message=f"Flow {record.get('id')} has unreadable graph data: {e.detail}"
            )
            raise

    async def create_flow(self, flow: FlowData) -> FlowData:
        """
        Create a new flow. nodes/edges are written as native arrays.
        """
        record = await self._insert_document(flow.model_dump(exclude={"id"}), "create_flow")
        return self._to_flow(record)

    async def get_flow(self, tenant_id: str, flow_id: str) -> Optional[FlowData]:
        """
        Get a flow by ID within the tenant
        """
        record = await self._find_scoped(tenant_id, flow_id, "get_flow")
        if record is None:
            return None
        return self._to_flow(record)

    async def get_flows(self, tenant_id: str, active_only: bool = False) -> List[FlowData]:
        """
        Get the tenant's flows, newest first.
        Flows whose stored graph cannot be read are left out of listings;
        opening one by id reports the corruption.
        """
        query: Dict[str, Any] = {"tenantId": tenant_id}
        if active_only:
            query["isActive"] = True

        records = await self._find_documents(query, "get_flows", sort=NEWEST_FIRST)
        flows: List[FlowData] = []
        for record in records:
            try:
                flows.append(self._to_flow(record))
            except FlowDataCorruptedException:
                continue
        return flows

    async def update_flow(self, tenant_id: str, flow_id: str, fields: Dict[str, Any]) -> Optional[FlowData]:
        """
        Update a flow. nodes/edges, when given, replace the stored arrays.
        """
        record = await self._update_scoped(tenant_id, flow_id, fields, "update_flow")
        if record is None:
            return None
        return self._to_flow(record)

    async def delete_flow(self, tenant_id: str, flow_id: str) -> bool:
        return await self._delete_scoped(tenant_id, flow_id, "delete_flow")
