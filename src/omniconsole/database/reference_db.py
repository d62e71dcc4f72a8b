from typing import Optional, List, Dict, Any

# Database
from omniconsole.database.base_db import BaseDB

# Models
from omniconsole.models.reference_data import ChannelData, TenantLevelData, ChannelRateData

"""
Database class for reference rows (channels, tenant levels, channel rates).
These use integer ids stored as _id.
"""
class ReferenceDB(BaseDB):
    service_name = "ReferenceDB"

    @staticmethod
    def _from_reference_document(document: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(document)
        record["id"] = record.pop("_id")
        return record

    async def _find_reference(self, collection_name: str, query: Dict[str, Any], operation_name: str) -> List[Dict[str, Any]]:
        try:
            cursor = self._collection(collection_name).find(query).sort([("_id", 1)])
            return [self._from_reference_document(document) async for document in cursor]
        except Exception as e:
            self._handle_db_operation(operation_name, e)

    async def _upsert_reference(self, collection_name: str, record: Dict[str, Any], operation_name: str) -> bool:
        try:
            document = dict(record)
            record_id = document.pop("id")
            await self._collection(collection_name).replace_one({"_id": record_id}, document, upsert=True)
            return True
        except Exception as e:
            self._handle_db_operation(operation_name, e)

    async def get_channels(self) -> List[ChannelData]:
        records = await self._find_reference("channels", {}, "get_channels")
        return [ChannelData.model_validate(record) for record in records]

    async def get_channel(self, channel_id: int) -> Optional[ChannelData]:
        records = await self._find_reference("channels", {"_id": channel_id}, "get_channel")
        return ChannelData.model_validate(records[0]) if records else None

    async def get_tenant_levels(self) -> List[TenantLevelData]:
        records = await self._find_reference("tenant_levels", {}, "get_tenant_levels")
        return [TenantLevelData.model_validate(record) for record in records]

    async def get_tenant_level(self, level_id: int) -> Optional[TenantLevelData]:
        records = await self._find_reference("tenant_levels", {"_id": level_id}, "get_tenant_level")
        return TenantLevelData.model_validate(records[0]) if records else None

    async def get_channel_rates(self) -> List[ChannelRateData]:
        records = await self._find_reference("channel_rates", {}, "get_channel_rates")
        return [ChannelRateData.model_validate(record) for record in records]

    async def upsert_channel(self, channel: ChannelData) -> bool:
        return await self._upsert_reference("channels", channel.model_dump(), "upsert_channel")

    async def upsert_tenant_level(self, level: TenantLevelData) -> bool:
        return await self._upsert_reference("tenant_levels", level.model_dump(), "upsert_tenant_level")

    async def upsert_channel_rate(self, rate: ChannelRateData) -> bool:
        return await self._upsert_reference("channel_rates", rate.model_dump(), "upsert_channel_rate")
