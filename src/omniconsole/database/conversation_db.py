from bson import ObjectId
from typing import Optional, List, Dict, Any

# Utils
from omniconsole.utils.time_utils import utc_now

# Database
from omniconsole.database.base_db import BaseDB

# Models
from omniconsole.models.conversation_data import ConversationData, ConversationMessageData

"""
Database class for conversations and their messages
"""
class ConversationDB(BaseDB):
    collection_name = "conversations"
    service_name = "ConversationDB"

    async def create_conversation(self, conversation: ConversationData) -> ConversationData:
        record = await self._insert_document(conversation.model_dump(exclude={"id"}), "create_conversation")
        return ConversationData.model_validate(record)

    async def get_conversation(self, tenant_id: str, conversation_id: str) -> Optional[ConversationData]:
        record = await self._find_scoped(tenant_id, conversation_id, "get_conversation")
        return ConversationData.model_validate(record) if record else None

    async def get_conversations(
        self,
        tenant_id: str,
        status: Optional[str] = None,
        unassigned_only: bool = False,
        limit: Optional[int] = None
    ) -> List[ConversationData]:
        """
        Get conversations, most recently active first
        """
        query: Dict[str, Any] = {"tenantId": tenant_id}
        if status:
            query["status"] = status
        if unassigned_only:
            query["assignedTo"] = None
        records = await self._find_documents(query, "get_conversations", sort=[("lastMessageAt", -1)], limit=limit)
        return [ConversationData.model_validate(record) for record in records]

    async def update_conversation(self, tenant_id: str, conversation_id: str, fields: Dict[str, Any]) -> Optional[ConversationData]:
        record = await self._update_scoped(tenant_id, conversation_id, fields, "update_conversation")
        return ConversationData.model_validate(record) if record else None

    async def add_message(self, message: ConversationMessageData) -> ConversationMessageData:
        try:
            document = message.model_dump(exclude={"id"})
            result = await self._collection("conversation_messages").insert_one(document)
            document["_id"] = result.inserted_id
            return ConversationMessageData.model_validate(self._from_document(document))
        except Exception as e:
            self._handle_db_operation("add_message", e)

    async def get_messages(self, conversation_id: str, latest_first: bool = False, limit: Optional[int] = None) -> List[ConversationMessageData]:
        try:
            cursor = self._collection("conversation_messages").find({"conversationId": conversation_id})
            cursor = cursor.sort([("sentAt", -1 if latest_first else 1)])
            if limit:
                cursor = cursor.limit(limit)
            return [ConversationMessageData.model_validate(self._from_document(document)) async for document in cursor]
        except Exception as e:
            self._handle_db_operation("get_messages", e)

    async def touch_last_message(self, tenant_id: str, conversation_id: str) -> None:
        try:
            now = utc_now()
            await self._collection().update_one(
                {"_id": ObjectId(conversation_id), "tenantId": tenant_id},
                {"$set": {"lastMessageAt": now, "updatedAt": now}}
            )
        except Exception as e:
            self._handle_db_operation("touch_last_message", e)
