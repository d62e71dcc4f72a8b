"""Tests for balance, top-ups and the transaction ledger."""
from decimal import Decimal

import pytest

from omniconsole.database.billing_db import BillingDB
from omniconsole.services.billing_service import parse_amount
from omniconsole.models.billing_data import TransactionData, TransactionType
from omniconsole.exceptions.console_exception import ConflictException, ValidationException


def test_parse_amount():
    assert parse_amount("25.50") == Decimal("25.50")
    assert parse_amount(10) == Decimal("10")
    for bad in ("abc", "0", -5, "NaN", "Infinity", ""):
        with pytest.raises(ValidationException):
            parse_amount(bad)


@pytest.mark.asyncio
async def test_balance(async_client):
    response = await async_client.get("/api/user/balance")

    assert response.status_code == 200
    assert response.json() == {"balance": "100", "currency": "USD"}


@pytest.mark.asyncio
async def test_topup_updates_balance_and_ledger(async_client):
    response = await async_client.post("/api/transactions/topup", json={"amount": "25.50", "paymentMethodId": "pm_123"})

    assert response.status_code == 201
    transaction = response.json()
    assert transaction["type"] == "topup"
    assert transaction["amount"] == "25.50"
    assert transaction["balanceBefore"] == "100"
    assert transaction["balanceAfter"] == "125.50"
    assert transaction["reference"] == "pm_123"
    assert transaction["metadata"] == {"userId": 1}

    assert (await async_client.get("/api/user/balance")).json()["balance"] == "125.50"

    await async_client.post("/api/transactions/topup", json={"amount": 4.5})
    ledger = (await async_client.get("/api/transactions")).json()
    assert len(ledger) == 2
    assert (await async_client.get("/api/user/balance")).json()["balance"] == "130.00"


@pytest.mark.asyncio
async def test_invalid_topup_amount(async_client, mongo_client):
    for body in ({"amount": "-5"}, {"amount": "abc"}, {"amount": 0}, {}):
        response = await async_client.post("/api/transactions/topup", json=body)
        assert response.status_code == 400

    assert mongo_client.collections["transactions"].documents == []
    assert (await async_client.get("/api/user/balance")).json()["balance"] == "100"


@pytest.mark.asyncio
async def test_stale_balance_is_a_conflict(log_util, mongo_client, tenants):
    billing_db = BillingDB(log_util=log_util, mongo_client=mongo_client)
    transaction = TransactionData(
        tenantId=tenants["root"].id,
        type=TransactionType.TOPUP,
        amount="10",
        balanceBefore="50",
        balanceAfter="60",
    )

    with pytest.raises(ConflictException) as exc_info:
        await billing_db.apply_transaction(transaction)

    assert exc_info.value.status_code == 409
    assert mongo_client.collections["transactions"].documents == []
    root_document = mongo_client.collections["tenants"].documents[0]
    assert root_document["balance"] == "100"


@pytest.mark.asyncio
async def test_member_topup_is_attributed(async_client):
    response = await async_client.post("/api/transactions/topup", json={"amount": "1"}, headers={"x-user-id": "2"})

    assert response.status_code == 201
    assert response.json()["metadata"] == {"userId": 2}
    assert response.json()["balanceAfter"] == "101"


@pytest.mark.asyncio
async def test_channels_and_rates(async_client):
    channels = (await async_client.get("/api/channels")).json()
    rates = (await async_client.get("/api/channel-rates")).json()

    assert [channel["code"] for channel in channels] == ["SMS", "WHATSAPP"]
    assert rates[0]["rate"] == "0.008"
    assert rates[0]["countryCode"] == "US"


@pytest.mark.asyncio
async def test_exponent_amount_is_stored_in_plain_notation(async_client):
    response = await async_client.post("/api/transactions/topup", json={"amount": "1e2"})

    assert response.status_code == 201
    assert response.json()["amount"] == "100"
    assert response.json()["balanceAfter"] == "200"
    assert (await async_client.get("/api/user/balance")).json()["balance"] == "200"
