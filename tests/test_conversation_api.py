"""API tests for the conversation inbox and message history."""
import pytest

from omniconsole.database.contact_db import ContactDB
from omniconsole.database.conversation_db import ConversationDB
from omniconsole.database.reference_db import ReferenceDB
from omniconsole.services.conversation_service import ConversationService
from omniconsole.models.contact_data import ContactData
from omniconsole.exceptions.console_exception import NotFoundException


@pytest.fixture
def conversation_service(log_util, mongo_client):
    return ConversationService(
        log_util=log_util,
        conversation_db=ConversationDB(log_util=log_util, mongo_client=mongo_client),
        contact_db=ContactDB(log_util=log_util, mongo_client=mongo_client),
        reference_db=ReferenceDB(log_util=log_util, mongo_client=mongo_client)
    )


@pytest.fixture
async def contact(log_util, mongo_client, owner):
    contact_db = ContactDB(log_util=log_util, mongo_client=mongo_client)
    return await contact_db.create_contact(ContactData(tenantId=owner.tenant_id, firstName="Ada", lastName="Lovelace"))


@pytest.fixture
async def conversation(conversation_service, owner, contact):
    return await conversation_service.start_conversation(owner, contact.id, 3, first_message="Where is my order?")


@pytest.mark.asyncio
async def test_start_conversation_requires_known_contact(conversation_service, owner):
    with pytest.raises(NotFoundException):
        await conversation_service.start_conversation(owner, "0" * 24, 1)


@pytest.mark.asyncio
async def test_queue_shows_open_unassigned_conversations(async_client, conversation_service, owner, contact, conversation):
    assigned = await conversation_service.start_conversation(owner, contact.id, 1, first_message="Hi")
    await async_client.put(f"/api/conversations/{assigned.id}/assign", json={"userId": 2})

    response = await async_client.get("/api/conversations/queue")

    assert response.status_code == 200
    queue = response.json()
    assert len(queue) == 1
    assert queue[0]["id"] == conversation.id
    assert queue[0]["contactName"] == "Ada Lovelace"
    assert queue[0]["channelType"] == "whatsapp"
    assert queue[0]["message"] == "Where is my order?"


@pytest.mark.asyncio
async def test_send_message_is_stored_outbound(async_client, conversation):
    response = await async_client.post(
        f"/api/conversations/{conversation.id}/messages",
        json={"content": "It ships tomorrow"}
    )

    assert response.status_code == 201
    message = response.json()
    assert message["direction"] == "outbound"
    assert message["senderId"] == 1
    assert message["read"] is True

    messages = (await async_client.get(f"/api/conversations/{conversation.id}/messages")).json()
    assert [item["content"] for item in messages] == ["Where is my order?", "It ships tomorrow"]
    assert messages[0]["direction"] == "inbound"

    queue = (await async_client.get("/api/conversations/queue")).json()
    assert queue[0]["message"] == "It ships tomorrow"


@pytest.mark.asyncio
async def test_empty_message_is_rejected(async_client, conversation):
    response = await async_client.post(f"/api/conversations/{conversation.id}/messages", json={"content": ""})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_assign_and_close(async_client, conversation):
    response = await async_client.put(f"/api/conversations/{conversation.id}/assign", json={"userId": 2})
    assert response.status_code == 200
    assert response.json()["status"] == "assigned"
    assert response.json()["assignedTo"] == 2

    response = await async_client.put(f"/api/conversations/{conversation.id}/close")
    assert response.json()["status"] == "closed"

    closed = (await async_client.get("/api/conversations", params={"status": "closed"})).json()
    assert [item["id"] for item in closed] == [conversation.id]
    assert (await async_client.get("/api/conversations", params={"status": "open"})).json() == []


@pytest.mark.asyncio
async def test_invalid_status_filter(async_client):
    response = await async_client.get("/api/conversations", params={"status": "snoozed"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_conversation_of_another_tenant_is_hidden(async_client, conversation):
    response = await async_client.get(f"/api/conversations/{conversation.id}", headers={"x-user-id": "3"})

    assert response.status_code == 404
    assert response.json()["message"] == "Conversation not found"
