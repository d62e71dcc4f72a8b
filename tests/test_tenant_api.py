"""API tests for tenant administration."""
import pytest

from omniconsole.database.tenant_db import TenantDB
from omniconsole.models.tenant_data import UserTenantData

from conftest import MEMBER_ID, OTHER_TENANT_USER_ID


@pytest.mark.asyncio
async def test_create_child_tenant_with_defaults(async_client, tenants):
    response = await async_client.post("/api/tenants", json={"name": "Acme", "email": "a@x.com", "levelId": 1})

    assert response.status_code == 201
    tenant = response.json()
    assert tenant["balance"] == "0"
    assert tenant["isActive"] is True
    assert tenant["currencyCode"] == "USD"
    assert tenant["parentId"] == tenants["root"].id
    assert tenant["level"]["name"] == "Enterprise"


@pytest.mark.asyncio
async def test_create_tenant_validation(async_client):
    response = await async_client.post("/api/tenants", json={"name": "A", "email": "not-an-email", "levelId": 1})

    assert response.status_code == 400
    paths = sorted(error["path"] for error in response.json()["errors"])
    assert paths == ["email", "name"]


@pytest.mark.asyncio
async def test_member_is_forbidden(async_client):
    headers = {"x-user-id": str(MEMBER_ID)}

    response = await async_client.get("/api/tenants", headers=headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to view tenants"

    response = await async_client.post("/api/tenants", json={"name": "Acme", "email": "a@x.com", "levelId": 1}, headers=headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_root_sees_itself_and_children(async_client, tenants):
    await async_client.post("/api/tenants", json={"name": "Zeta Branch", "email": "z@x.com", "levelId": 2})
    await async_client.post("/api/tenants", json={"name": "Beta Branch", "email": "b@x.com", "levelId": 2})

    response = await async_client.get("/api/tenants")

    assert response.status_code == 200
    names = [tenant["name"] for tenant in response.json()]
    assert names == ["Acme", "Beta Branch", "Zeta Branch"]
    assert response.json()[1]["level"]["name"] == "Business"


@pytest.mark.asyncio
async def test_unrelated_tenant_is_not_visible(async_client, tenants):
    response = await async_client.get("/api/tenants", headers={"x-user-id": str(OTHER_TENANT_USER_ID)})
    assert [tenant["name"] for tenant in response.json()] == ["Other"]

    response = await async_client.get(f"/api/tenants/{tenants['other'].id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_and_delete_child_tenant(async_client, tenants):
    child = (await async_client.post("/api/tenants", json={"name": "Branch", "email": "b@x.com", "levelId": 2})).json()

    response = await async_client.put(f"/api/tenants/{child['id']}", json={"name": "Renamed Branch", "balance": "999"})
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed Branch"
    assert response.json()["balance"] == "0"

    response = await async_client.delete(f"/api/tenants/{child['id']}")
    assert response.json() == {"message": "Tenant deleted successfully"}

    response = await async_client.get(f"/api/tenants/{child['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cannot_delete_own_tenant(async_client, tenants):
    response = await async_client.delete(f"/api/tenants/{tenants['root'].id}")

    assert response.status_code == 403
    assert response.json()["message"] == "Cannot delete your own tenant"


@pytest.mark.asyncio
async def test_tenant_levels(async_client):
    response = await async_client.get("/api/tenant-levels")

    assert response.status_code == 200
    assert [level["name"] for level in response.json()] == ["Enterprise", "Business"]


@pytest.mark.asyncio
async def test_balance_must_be_a_decimal(async_client, mongo_client):
    for balance in ("abc", "NaN", "Infinity", ""):
        response = await async_client.post(
            "/api/tenants",
            json={"name": "Acme2", "email": "a@x.com", "levelId": 1, "balance": balance}
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["path"] == "balance"

    assert len(mongo_client.collections["tenants"].documents) == 2


@pytest.mark.asyncio
async def test_tenant_created_with_balance_can_top_up(async_client, log_util, mongo_client):
    child = (await async_client.post(
        "/api/tenants",
        json={"name": "Acme2", "email": "a@x.com", "levelId": 1, "balance": "12.50"}
    )).json()
    assert child["balance"] == "12.50"

    tenant_db = TenantDB(log_util=log_util, mongo_client=mongo_client)
    await tenant_db.add_user_to_tenant(UserTenantData(userId=9, tenantId=child["id"], role="owner"))

    response = await async_client.post("/api/transactions/topup", json={"amount": "10"}, headers={"x-user-id": "9"})

    assert response.status_code == 201
    assert response.json()["balanceAfter"] == "22.50"
