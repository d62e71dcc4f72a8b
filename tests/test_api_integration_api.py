"""API tests for channel provider integrations."""
import pytest


TWILIO = {
    "channelId": 1,
    "name": "Twilio SMS",
    "accountSid": "AC123",
    "authToken": "tok-secret",
    "baseUrl": "https://api.twilio.com",
    "settings": {"from": "+15550000"},
}


@pytest.mark.asyncio
async def test_secrets_are_masked(async_client, mongo_client):
    response = await async_client.post("/api/api-integrations", json=TWILIO)

    assert response.status_code == 201
    integration = response.json()
    assert integration["accountSid"] == "********"
    assert integration["authToken"] == "********"
    assert integration["apiKey"] is None
    assert integration["channel"]["code"] == "SMS"
    assert integration["baseUrl"] == "https://api.twilio.com"

    stored = mongo_client.collections["api_integrations"].documents[0]
    assert stored["authToken"] == "tok-secret"
    assert "channel" not in stored

    listed = (await async_client.get("/api/api-integrations")).json()
    assert listed[0]["authToken"] == "********"


@pytest.mark.asyncio
async def test_masked_secret_keeps_stored_value(async_client, mongo_client):
    created = (await async_client.post("/api/api-integrations", json=TWILIO)).json()

    response = await async_client.put(
        f"/api/api-integrations/{created['id']}",
        json={**created, "name": "Twilio primary", "apiKey": "new-key"}
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Twilio primary"
    stored = mongo_client.collections["api_integrations"].documents[0]
    assert stored["authToken"] == "tok-secret"
    assert stored["accountSid"] == "AC123"
    assert stored["apiKey"] == "new-key"


@pytest.mark.asyncio
async def test_toggle_twice_restores_state(async_client):
    created = (await async_client.post("/api/api-integrations", json=TWILIO)).json()

    first = await async_client.put(f"/api/api-integrations/{created['id']}/toggle", json={"isActive": False})
    second = await async_client.put(f"/api/api-integrations/{created['id']}/toggle", json={"isActive": True})

    assert first.status_code == 200
    assert first.json()["isActive"] is False
    assert second.status_code == 200
    assert second.json()["isActive"] is True


@pytest.mark.asyncio
async def test_toggle_requires_boolean(async_client):
    created = (await async_client.post("/api/api-integrations", json=TWILIO)).json()

    response = await async_client.put(f"/api/api-integrations/{created['id']}/toggle", json={})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_integration_requires_channel(async_client):
    response = await async_client.post("/api/api-integrations", json={"name": "No channel"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "channelId"


@pytest.mark.asyncio
async def test_delete_integration(async_client):
    created = (await async_client.post("/api/api-integrations", json=TWILIO)).json()

    response = await async_client.delete(f"/api/api-integrations/{created['id']}")
    assert response.json() == {"message": "API integration deleted successfully"}

    response = await async_client.get(f"/api/api-integrations/{created['id']}")
    assert response.status_code == 404
    assert response.json()["message"] == "API integration not found"
