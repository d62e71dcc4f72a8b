"""Pytest configuration and fixtures."""
import os
import pytest
from httpx import AsyncClient, ASGITransport

# Set test environment before importing the app
os.environ["APP_ENV"] = "test"
os.environ["LOKI_URL"] = ""
os.environ["DEFAULT_USER_ID"] = "1"

from omniconsole.main import create_app
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.environment_utils import EnvironmentUtils
from omniconsole.database.tenant_db import TenantDB
from omniconsole.database.reference_db import ReferenceDB
from omniconsole.models.principal import Principal
from omniconsole.models.tenant_data import TenantData, UserTenantData
from omniconsole.models.reference_data import ChannelData, TenantLevelData, ChannelRateData

from fakes import FakeMongoClientManager

OWNER_ID = 1
MEMBER_ID = 2
OTHER_TENANT_USER_ID = 3


@pytest.fixture
def log_util():
    return LogUtil()


@pytest.fixture
def environment_utils(log_util):
    return EnvironmentUtils(log_util=log_util)


@pytest.fixture
def mongo_client():
    """In-memory database shared by the DB classes of one test."""
    return FakeMongoClientManager()


@pytest.fixture
async def reference_data(log_util, mongo_client):
    reference_db = ReferenceDB(log_util=log_util, mongo_client=mongo_client)
    await reference_db.upsert_tenant_level(TenantLevelData(
        id=1, name="Enterprise", description="Top tier", maxContacts=100000, maxCampaigns=1000, maxTemplates=500, maxUsers=50
    ))
    await reference_db.upsert_tenant_level(TenantLevelData(
        id=2, name="Business", description="Mid tier", maxContacts=25000, maxCampaigns=250, maxTemplates=100, maxUsers=15
    ))
    await reference_db.upsert_channel(ChannelData(id=1, code="SMS", name="SMS", basePrice="0.01"))
    await reference_db.upsert_channel(ChannelData(id=3, code="WHATSAPP", name="WhatsApp", basePrice="0.02"))
    await reference_db.upsert_channel_rate(ChannelRateData(id=1, channelId=1, tenantLevelId=1, countryCode="US", rate="0.008"))
    return reference_db


@pytest.fixture
async def tenants(log_util, mongo_client, reference_data):
    """
    Root tenant "Acme" owned by user 1 with member user 2, and an unrelated
    tenant "Other" for user 3.
    """
    tenant_db = TenantDB(log_util=log_util, mongo_client=mongo_client)
    root = await tenant_db.create_tenant(TenantData(name="Acme", email="acme@example.com", levelId=1, balance="100"))
    other = await tenant_db.create_tenant(TenantData(name="Other", email="other@example.com", levelId=2))
    await tenant_db.add_user_to_tenant(UserTenantData(userId=OWNER_ID, tenantId=root.id, role="owner"))
    await tenant_db.add_user_to_tenant(UserTenantData(userId=MEMBER_ID, tenantId=root.id, role="member"))
    await tenant_db.add_user_to_tenant(UserTenantData(userId=OTHER_TENANT_USER_ID, tenantId=other.id, role="admin"))
    return {"root": root, "other": other}


@pytest.fixture
def owner(tenants):
    return Principal(user_id=OWNER_ID, tenant_id=tenants["root"].id, role="owner")


@pytest.fixture
def app(log_util, environment_utils, mongo_client):
    return create_app(log_util=log_util, environment_utils=environment_utils, mongo_client=mongo_client)


@pytest.fixture
async def async_client(app, tenants):
    """Create async test client acting as the owner of the root tenant."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"x-user-id": str(OWNER_ID)}
    ) as client:
        yield client
