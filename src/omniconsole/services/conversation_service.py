from typing import List, Optional

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.conversation_db import ConversationDB
from omniconsole.database.contact_db import ContactDB
from omniconsole.database.reference_db import ReferenceDB

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.conversation_data import (
    ConversationData,
    ConversationMessageData,
    ConversationStatus,
    MessageDirection,
    QueuedConversation,
    SendMessageRequest,
    AssignConversationRequest,
)

# Exceptions
from omniconsole.exceptions.console_exception import NotFoundException, ValidationException

QUEUE_LIMIT = 10


class ConversationService:
    def __init__(self, log_util: LogUtil, conversation_db: ConversationDB, contact_db: ContactDB, reference_db: ReferenceDB):
        self.log_util = log_util
        self.conversation_db = conversation_db
        self.contact_db = contact_db
        self.reference_db = reference_db

    async def get_conversations(self, principal: Principal, status: Optional[str] = None) -> List[ConversationData]:
        if status is not None and status not in [item.value for item in ConversationStatus]:
            raise ValidationException(message=f"Invalid conversation status: {status}")
        return await self.conversation_db.get_conversations(principal.tenant_id, status=status)

    async def get_queue(self, principal: Principal) -> List[QueuedConversation]:
        """
        Open conversations nobody has picked up yet, most recently active first,
        with the contact name, channel and latest message text.
        """
        conversations = await self.conversation_db.get_conversations(
            principal.tenant_id,
            status=ConversationStatus.OPEN.value,
            unassigned_only=True,
            limit=QUEUE_LIMIT
        )
        channels = {channel.id: channel for channel in await self.reference_db.get_channels()}

        queue: List[QueuedConversation] = []
        for conversation in conversations:
            contact = await self.contact_db.get_contact(principal.tenant_id, conversation.contactId)
            contact_name = f"{contact.firstName} {contact.lastName or ''}".strip() if contact else ""
            channel = channels.get(conversation.channelId)
            latest = await self.conversation_db.get_messages(conversation.id, latest_first=True, limit=1)
            queue.append(QueuedConversation(
                id=conversation.id,
                contactName=contact_name,
                channelType=channel.code.lower() if channel else "",
                message=latest[0].content if latest else "",
                timestamp=conversation.lastMessageAt
            ))
        return queue

    async def get_conversation(self, principal: Principal, conversation_id: str) -> ConversationData:
        conversation = await self.conversation_db.get_conversation(principal.tenant_id, conversation_id)
        if conversation is None:
            raise NotFoundException(message="Conversation not found")
        return conversation

    async def start_conversation(
        self,
        principal: Principal,
        contact_id: str,
        channel_id: int,
        first_message: Optional[str] = None
    ) -> ConversationData:
        """
        Open a conversation with a contact, optionally recording the inbound message that started it
        """
        if await self.contact_db.get_contact(principal.tenant_id, contact_id) is None:
            raise NotFoundException(message="Contact not found")
        conversation = await self.conversation_db.create_conversation(
            ConversationData(tenantId=principal.tenant_id, contactId=contact_id, channelId=channel_id)
        )
        if first_message:
            await self.conversation_db.add_message(ConversationMessageData(
                conversationId=conversation.id,
                content=first_message,
                direction=MessageDirection.INBOUND
            ))
        return conversation

    async def get_messages(self, principal: Principal, conversation_id: str) -> List[ConversationMessageData]:
        conversation = await self.get_conversation(principal, conversation_id)
        return await self.conversation_db.get_messages(conversation.id)

    async def send_message(self, principal: Principal, conversation_id: str, message_data: dict) -> ConversationMessageData:
        """
        Record an outbound message from the caller. Delivery to the channel
        provider is not performed here.
        """
        conversation = await self.get_conversation(principal, conversation_id)
        request = validate_payload(SendMessageRequest, message_data, "message")
        message = await self.conversation_db.add_message(ConversationMessageData(
            conversationId=conversation.id,
            content=request.content,
            senderId=principal.user_id,
            direction=MessageDirection.OUTBOUND,
            read=True
        ))
        await self.conversation_db.touch_last_message(principal.tenant_id, conversation.id)
        self.log_util.info(service_name="ConversationService", message=f"Outbound message {message.id} stored on conversation {conversation.id}")
        return message

    async def assign_conversation(self, principal: Principal, conversation_id: str, assign_data: dict) -> ConversationData:
        await self.get_conversation(principal, conversation_id)
        request = validate_payload(AssignConversationRequest, assign_data, "assignment")
        updated = await self.conversation_db.update_conversation(
            principal.tenant_id,
            conversation_id,
            {"assignedTo": request.userId, "status": ConversationStatus.ASSIGNED.value}
        )
        if updated is None:
            raise NotFoundException(message="Conversation not found")
        return updated

    async def close_conversation(self, principal: Principal, conversation_id: str) -> ConversationData:
        updated = await self.conversation_db.update_conversation(
            principal.tenant_id,
            conversation_id,
            {"status": ConversationStatus.CLOSED.value}
        )
        if updated is None:
            raise NotFoundException(message="Conversation not found")
        return updated
