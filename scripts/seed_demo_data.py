"""
Script to seed a demo workspace for local development.

Creates the "Acme Corporation" root tenant with two child tenants, makes the
DEFAULT_USER_ID user its owner, and adds sample contacts, templates and a
"Welcome Sequence" flow drawn with the flow editor.

Run populate_reference_data.py first. The script does nothing if the default
user already belongs to a tenant.
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
from omniconsole.database.tenant_db import TenantDB
from omniconsole.database.contact_db import ContactDB, ContactListDB
from omniconsole.database.template_db import TemplateDB
from omniconsole.database.flow_db import FlowDB
from omniconsole.database.reference_db import ReferenceDB
from omniconsole.models.principal import Principal
from omniconsole.models.tenant_data import TenantData
from omniconsole.services.node_type_registry import NodeTypeRegistry
from omniconsole.services.tenant_service import TenantService
from omniconsole.services.contact_service import ContactService
from omniconsole.services.template_service import TemplateService
from omniconsole.services.flow_service import FlowService
from omniconsole.services.flow_editor import FlowEditor
from omniconsole.services.flow_persistence_adapter import FlowPersistenceAdapter

CHILD_TENANTS = [
    {"name": "TechSolutions Inc.", "email": "tech@example.com", "phone": "+1 (555) 987-6543",
     "address": "456 Business Blvd, City, Country", "levelId": 2, "balance": "1890", "isActive": True},
    {"name": "Global Services LLC", "email": "global@example.com", "phone": "+1 (555) 246-8642",
     "address": "789 Commerce Way, City, Country", "levelId": 3, "balance": "750", "isActive": False},
]

CONTACTS = [
    {"firstName": "John", "lastName": "Smith", "email": "john.smith@example.com",
     "phone": "+1 (555) 123-0001", "whatsapp": "+1 (555) 123-0001"},
    {"firstName": "Sarah", "lastName": "Johnson", "email": "sarah.j@example.com",
     "phone": "+1 (555) 123-0002", "whatsapp": "+1 (555) 123-0002"},
    {"firstName": "Michael", "lastName": "Brown", "email": "michael.b@example.com",
     "phone": "+1 (555) 123-0003", "isActive": False},
]

TEMPLATES = [
    {"name": "Welcome SMS", "type": "sms",
     "content": "Hi {{first_name}}, welcome to {{company}}! Reply STOP to opt out.",
     "previewData": {"first_name": "John", "company": "Acme"}},
    {"name": "Order Update", "type": "whatsapp",
     "content": "Hello {{1}}, your order {{2}} has shipped.",
     "metadata": {"category": "utility", "language": "en"}},
]


def build_welcome_sequence(registry: NodeTypeRegistry) -> FlowEditor:
    """
    webhook -> sms -> ivr menu -> stop
    """
    editor = FlowEditor(registry=registry)
    webhook = editor.add_node("webhookNode", {"x": 250, "y": 25})
    sms = editor.add_node("smsNode", {"x": 250, "y": 150})
    sms["data"]["content"] = "Hi {{first_name}}, thanks for signing up!"
    menu = editor.add_node("ivrMenuNode", {"x": 250, "y": 275})
    stop = editor.add_node("stopNode", {"x": 250, "y": 400})

    editor.connect(webhook["id"], sms["id"], "a")
    editor.connect(sms["id"], menu["id"], "a")
    editor.connect(menu["id"], stop["id"], "a")
    return editor


async def seed_demo_data():
    # Initialize utilities
    log_util = LogUtil()
    environment_utils = EnvironmentUtils(log_util=log_util)

    # Initialize database
    mongo_client = MongoClientManager(log_util=log_util, environment_utils=environment_utils)
    tenant_db = TenantDB(log_util=log_util, mongo_client=mongo_client)
    reference_db = ReferenceDB(log_util=log_util, mongo_client=mongo_client)

    # Services
    registry = NodeTypeRegistry()
    tenant_service = TenantService(log_util=log_util, tenant_db=tenant_db, reference_db=reference_db)
    contact_service = ContactService(
        log_util=log_util,
        contact_db=ContactDB(log_util=log_util, mongo_client=mongo_client),
        contact_list_db=ContactListDB(log_util=log_util, mongo_client=mongo_client)
    )
    template_service = TemplateService(log_util=log_util, template_db=TemplateDB(log_util=log_util, mongo_client=mongo_client))
    flow_service = FlowService(log_util=log_util, flow_db=FlowDB(log_util=log_util, mongo_client=mongo_client), registry=registry)
    adapter = FlowPersistenceAdapter(flow_service=flow_service)

    user_id = int(environment_utils.get_env_variable("DEFAULT_USER_ID"))

    try:
        if await tenant_db.get_primary_membership(user_id) is not None:
            log_util.info(service_name="SeedDemoData", message=f"User {user_id} already has a tenant, nothing to seed")
            return

        root_tenant = await tenant_db.create_tenant(TenantData(
            name="Acme Corporation",
            email="acme@example.com",
            phone="+1 (555) 123-4567",
            address="123 Main St, City, Country",
            levelId=1,
            balance="3500"
        ))
        await tenant_service.add_member(root_tenant.id, user_id, role="owner")
        principal = Principal(user_id=user_id, tenant_id=root_tenant.id, role="owner")
        log_util.info(service_name="SeedDemoData", message=f"[SUCCESS] Root tenant {root_tenant.id} with owner {user_id}")

        for child in CHILD_TENANTS:
            await tenant_service.create_tenant(principal, child)

        for contact in CONTACTS:
            await contact_service.create_contact(principal, contact)
        await contact_service.create_contact_list(principal, {"name": "Newsletter", "description": "Monthly newsletter audience"})

        for template in TEMPLATES:
            await template_service.create_template(principal, template)

        flow = await adapter.save(
            principal,
            build_welcome_sequence(registry),
            name="Welcome Sequence",
            description="Greets new sign-ups over SMS"
        )
        log_util.info(service_name="SeedDemoData", message=f"[SUCCESS] Flow {flow.id} with {len(flow.nodes)} nodes")

    except Exception as e:
        log_util.error(service_name="SeedDemoData", message=f"Fatal error: {str(e)}")
        raise
    finally:
        mongo_client.close()
        log_util.info(service_name="SeedDemoData", message="Database connection closed")


if __name__ == "__main__":
    print("="*60)
    print("Demo Data Seed Script")
    print("="*60)

    try:
        asyncio.run(seed_demo_data())
        print("\n[SUCCESS] Script completed successfully!")
    except KeyboardInterrupt:
        print("\n[WARNING] Script interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n[ERROR] Script failed with error: {str(e)}")
        sys.exit(1)
