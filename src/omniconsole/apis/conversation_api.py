from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.conversation_service import ConversationService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_conversation_api(
    log_util: LogUtil,
    conversation_service: ConversationService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api/conversations",
        tags=["conversations"],
    )

    @router.get("")
    async def get_conversations(status: Optional[str] = None, principal: Principal = Depends(get_principal)):
        try:
            return await conversation_service.get_conversations(principal, status=status)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ConversationAPI", "fetching conversations", e)

    @router.get("/queue")
    async def get_queue(principal: Principal = Depends(get_principal)):
        """
        Open, unassigned conversations formatted for the dashboard queue:
        [{"id", "contactName", "channelType", "message", "timestamp"}]
        """
        try:
            return await conversation_service.get_queue(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ConversationAPI", "fetching queued conversations", e)

    @router.get("/{conversation_id}")
    async def get_conversation(conversation_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await conversation_service.get_conversation(principal, conversation_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ConversationAPI", "fetching conversation", e)

    @router.get("/{conversation_id}/messages")
    async def get_messages(conversation_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await conversation_service.get_messages(principal, conversation_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ConversationAPI", "fetching messages", e)

    @router.post("/{conversation_id}/messages", status_code=201)
    async def send_message(conversation_id: str, message_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await conversation_service.send_message(principal, conversation_id, message_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ConversationAPI", "sending message", e)

    @router.put("/{conversation_id}/assign")
    async def assign_conversation(conversation_id: str, assign_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await conversation_service.assign_conversation(principal, conversation_id, assign_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ConversationAPI", "assigning conversation", e)

    @router.put("/{conversation_id}/close")
    async def close_conversation(conversation_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await conversation_service.close_conversation(principal, conversation_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ConversationAPI", "closing conversation", e)

    return router
