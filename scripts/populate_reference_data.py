"""
Script to populate the reference collections: tenant levels, channels and channel rates.

Every row has a fixed integer id and is upserted, so the script can be run again
safely after editing the values below.
"""

import asyncio
import sys
import os

# Add src directory to path to import modules
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(script_dir)
src_dir = os.path.join(project_root, 'src')
sys.path.insert(0, src_dir)

from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.environment_utils import EnvironmentUtils
from omniconsole.database.mongo_client import MongoClientManager
from omniconsole.database.reference_db import ReferenceDB
from omniconsole.models.reference_data import ChannelData, TenantLevelData, ChannelRateData

TENANT_LEVELS = [
    TenantLevelData(id=1, name="Enterprise", description="Top tier with unlimited features",
                    maxContacts=100000, maxCampaigns=1000, maxTemplates=500, maxUsers=50),
    TenantLevelData(id=2, name="Business", description="Mid-tier with advanced features",
                    maxContacts=25000, maxCampaigns=250, maxTemplates=100, maxUsers=15),
    TenantLevelData(id=3, name="Starter", description="Entry level with basic features",
                    maxContacts=5000, maxCampaigns=50, maxTemplates=25, maxUsers=5),
]

CHANNELS = [
    ChannelData(id=1, code="SMS", name="SMS", description="Short Message Service", icon="message-square", basePrice="0.01"),
    ChannelData(id=2, code="VOIP", name="VOIP", description="Voice over IP", icon="phone", basePrice="0.03"),
    ChannelData(id=3, code="WHATSAPP", name="WhatsApp", description="WhatsApp Messaging", icon="message-circle", basePrice="0.02"),
    ChannelData(id=4, code="RCS", name="RCS", description="Rich Communication Services", icon="message-square-dashed", basePrice="0.015"),
]

# Enterprise pricing for the US
CHANNEL_RATES = [
    ChannelRateData(id=1, channelId=1, tenantLevelId=1, countryCode="US", rate="0.008"),
    ChannelRateData(id=2, channelId=2, tenantLevelId=1, countryCode="US", rate="0.025"),
    ChannelRateData(id=3, channelId=3, tenantLevelId=1, countryCode="US", rate="0.015"),
    ChannelRateData(id=4, channelId=4, tenantLevelId=1, countryCode="US", rate="0.012"),
]


async def populate_reference_data():
    """
    Upsert all tenant levels, channels and channel rates.
    """
    # Initialize utilities
    log_util = LogUtil()
    environment_utils = EnvironmentUtils(log_util=log_util)

    # Initialize database
    mongo_client = MongoClientManager(log_util=log_util, environment_utils=environment_utils)
    reference_db = ReferenceDB(log_util=log_util, mongo_client=mongo_client)

    try:
        log_util.info(service_name="PopulateReferenceData", message="Starting reference data population...")

        for level in TENANT_LEVELS:
            await reference_db.upsert_tenant_level(level)
            log_util.info(service_name="PopulateReferenceData", message=f"[SUCCESS] Tenant level: {level.name} ({level.id})")

        for channel in CHANNELS:
            await reference_db.upsert_channel(channel)
            log_util.info(service_name="PopulateReferenceData", message=f"[SUCCESS] Channel: {channel.code} ({channel.id})")

        for rate in CHANNEL_RATES:
            await reference_db.upsert_channel_rate(rate)
        log_util.info(service_name="PopulateReferenceData", message=f"[SUCCESS] Channel rates: {len(CHANNEL_RATES)}")

        print("\n" + "="*60)
        print("REFERENCE DATA SUMMARY")
        print("="*60)
        print(f"  Tenant levels: {len(await reference_db.get_tenant_levels())}")
        print(f"  Channels:      {len(await reference_db.get_channels())}")
        print(f"  Channel rates: {len(await reference_db.get_channel_rates())}")
        print("="*60)

    except Exception as e:
        log_util.error(service_name="PopulateReferenceData", message=f"Fatal error: {str(e)}")
        raise
    finally:
        mongo_client.close()
        log_util.info(service_name="PopulateReferenceData", message="Database connection closed")


if __name__ == "__main__":
    print("="*60)
    print("Reference Data Population Script")
    print("="*60)

    try:
        asyncio.run(populate_reference_data())
        print("\n[SUCCESS] Script completed successfully!")
    except KeyboardInterrupt:
        print("\n[WARNING] Script interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n[ERROR] Script failed with error: {str(e)}")
        sys.exit(1)
