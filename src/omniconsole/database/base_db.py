from bson import ObjectId
from typing import Optional, List, Dict, Any, Tuple, NoReturn
from pymongo import ReturnDocument
from pymongo.errors import NetworkTimeout, ServerSelectionTimeoutError, ConnectionFailure

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.time_utils import utc_now

# Database
from omniconsole.database.mongo_client import MongoClientManager

# Exceptions
from omniconsole.exceptions.console_exception import ConsoleException, ConsoleDBException

NEWEST_FIRST = [("createdAt", -1)]

"""
Shared plumbing for the tenant scoped collections
"""
class BaseDB:
    collection_name: str = ""
    service_name: str = "BaseDB"

    def __init__(self, log_util: LogUtil, mongo_client: MongoClientManager):
        self.log_util = log_util
        self.mongo_client = mongo_client

    def _collection(self, name: Optional[str] = None):
        client_data = self.mongo_client.get_client_for_current_loop()
        return client_data['collections'][name or self.collection_name]

    @staticmethod
    def is_valid_id(record_id: Any) -> bool:
        return isinstance(record_id, str) and ObjectId.is_valid(record_id)

    @staticmethod
    def _from_document(document: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(document)
        record["id"] = str(record.pop("_id"))
        return record

    def _handle_db_operation(self, operation_name: str, error: Exception) -> NoReturn:
        """
        Handle database operation errors with appropriate logging and exception wrapping.

        Args:
            operation_name: Name of the operation that failed
            error: The exception that occurred
        """
        if isinstance(error, ConsoleException):
            raise error
        if isinstance(error, (NetworkTimeout, ServerSelectionTimeoutError, ConnectionFailure)):
            self.log_util.error(
                service_name=self.service_name,
                message=f"Database connection error in {operation_name}: {str(error)}"
            )
            raise ConsoleDBException(
                message=f"Database connection error: {str(error)}",
                status_code=503  # Service Unavailable
            )
        self.log_util.error(
            service_name=self.service_name,
            message=f"Error in {operation_name}: {str(error)}"
        )
        raise ConsoleDBException(
            message=f"Database error: {str(error)}",
            status_code=500
        )

    async def _insert_document(self, document: Dict[str, Any], operation_name: str) -> Dict[str, Any]:
        try:
            document = dict(document)
            document.pop("id", None)
            result = await self._collection().insert_one(document)
            document["_id"] = result.inserted_id
            return self._from_document(document)
        except Exception as e:
            self._handle_db_operation(operation_name, e)

    async def _find_documents(
        self,
        query: Dict[str, Any],
        operation_name: str,
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self._collection().find(query)
            if sort:
                cursor = cursor.sort(sort)
            if limit:
                cursor = cursor.limit(limit)
            return [self._from_document(document) async for document in cursor]
        except Exception as e:
            self._handle_db_operation(operation_name, e)

    async def _find_scoped(self, tenant_id: str, record_id: str, operation_name: str) -> Optional[Dict[str, Any]]:
        """
        Get one record owned by the tenant. A record of another tenant is reported as missing.
        """
        if not self.is_valid_id(record_id):
            return None
        try:
            document = await self._collection().find_one({"_id": ObjectId(record_id), "tenantId": tenant_id})
            if document is None:
                return None
            return self._from_document(document)
        except Exception as e:
            self._handle_db_operation(operation_name, e)

    async def _update_scoped(
        self,
        tenant_id: str,
        record_id: str,
        fields: Dict[str, Any],
        operation_name: str
    ) -> Optional[Dict[str, Any]]:
        if not self.is_valid_id(record_id):
            return None
        try:
            fields = dict(fields)
            for immutable in ("id", "_id", "tenantId", "createdAt"):
                fields.pop(immutable, None)
            fields["updatedAt"] = utc_now()
            document = await self._collection().find_one_and_update(
                {"_id": ObjectId(record_id), "tenantId": tenant_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER
            )
            if document is None:
                return None
            return self._from_document(document)
        except Exception as e:
            self._handle_db_operation(operation_name, e)

    async def _delete_scoped(self, tenant_id: str, record_id: str, operation_name: str) -> bool:
        if not self.is_valid_id(record_id):
            return False
        try:
            result = await self._collection().delete_one({"_id": ObjectId(record_id), "tenantId": tenant_id})
            return result.deleted_count > 0
        except Exception as e:
            self._handle_db_operation(operation_name, e)

    async def _count(self, query: Dict[str, Any], operation_name: str, collection_name: Optional[str] = None) -> int:
        try:
            return await self._collection(collection_name).count_documents(query)
        except Exception as e:
            self._handle_db_operation(operation_name, e)
