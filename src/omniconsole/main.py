import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.environment_utils import EnvironmentUtils
from omniconsole.utils.validation_utils import format_validation_errors

# Database
from omniconsole.database.mongo_client import MongoClientManager
from omniconsole.database.flow_db import FlowDB
from omniconsole.database.contact_db import ContactDB, ContactListDB
from omniconsole.database.template_db import TemplateDB
from omniconsole.database.campaign_db import CampaignDB
from omniconsole.database.conversation_db import ConversationDB
from omniconsole.database.tenant_db import TenantDB
from omniconsole.database.billing_db import BillingDB
from omniconsole.database.api_integration_db import ApiIntegrationDB
from omniconsole.database.reference_db import ReferenceDB

# Services
from omniconsole.services.node_type_registry import NodeTypeRegistry
from omniconsole.services.principal_service import PrincipalService
from omniconsole.services.flow_service import FlowService
from omniconsole.services.contact_service import ContactService
from omniconsole.services.template_service import TemplateService
from omniconsole.services.campaign_service import CampaignService
from omniconsole.services.conversation_service import ConversationService
from omniconsole.services.tenant_service import TenantService
from omniconsole.services.billing_service import BillingService
from omniconsole.services.api_integration_service import ApiIntegrationService

# Exceptions
from omniconsole.exceptions.console_exception import ConsoleException, ValidationException

# APIs
from omniconsole.apis.dependencies import create_principal_dependency
from omniconsole.apis.node_type_api import create_node_type_api
from omniconsole.apis.flow_api import create_flow_api
from omniconsole.apis.contact_api import create_contact_api
from omniconsole.apis.template_api import create_template_api
from omniconsole.apis.campaign_api import create_campaign_api
from omniconsole.apis.conversation_api import create_conversation_api
from omniconsole.apis.tenant_api import create_tenant_api
from omniconsole.apis.billing_api import create_billing_api
from omniconsole.apis.api_integration_api import create_api_integration_api


def create_app(log_util: LogUtil, environment_utils: EnvironmentUtils, mongo_client: MongoClientManager) -> FastAPI:
    # Database
    flow_db = FlowDB(log_util=log_util, mongo_client=mongo_client)
    contact_db = ContactDB(log_util=log_util, mongo_client=mongo_client)
    contact_list_db = ContactListDB(log_util=log_util, mongo_client=mongo_client)
    template_db = TemplateDB(log_util=log_util, mongo_client=mongo_client)
    campaign_db = CampaignDB(log_util=log_util, mongo_client=mongo_client)
    conversation_db = ConversationDB(log_util=log_util, mongo_client=mongo_client)
    tenant_db = TenantDB(log_util=log_util, mongo_client=mongo_client)
    billing_db = BillingDB(log_util=log_util, mongo_client=mongo_client)
    api_integration_db = ApiIntegrationDB(log_util=log_util, mongo_client=mongo_client)
    reference_db = ReferenceDB(log_util=log_util, mongo_client=mongo_client)

    # Services
    registry = NodeTypeRegistry()
    principal_service = PrincipalService(log_util=log_util, environment_utils=environment_utils, tenant_db=tenant_db)
    flow_service = FlowService(log_util=log_util, flow_db=flow_db, registry=registry)
    contact_service = ContactService(log_util=log_util, contact_db=contact_db, contact_list_db=contact_list_db)
    template_service = TemplateService(log_util=log_util, template_db=template_db)
    campaign_service = CampaignService(log_util=log_util, campaign_db=campaign_db, reference_db=reference_db)
    conversation_service = ConversationService(
        log_util=log_util,
        conversation_db=conversation_db,
        contact_db=contact_db,
        reference_db=reference_db
    )
    tenant_service = TenantService(log_util=log_util, tenant_db=tenant_db, reference_db=reference_db)
    billing_service = BillingService(
        log_util=log_util,
        billing_db=billing_db,
        tenant_db=tenant_db,
        reference_db=reference_db
    )
    api_integration_service = ApiIntegrationService(
        log_util=log_util,
        api_integration_db=api_integration_db,
        reference_db=reference_db
    )

    # Define lifespan function
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_util.info(service_name="OmniConsole", message="Application startup complete")
        yield
        mongo_client.close()
        log_util.info(service_name="OmniConsole", message="Application shutdown complete")

    # Create FastAPI app
    app = FastAPI(
        title="omniconsole",
        description="Multi-tenant omnichannel messaging console API",
        version="1.0.0",
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=environment_utils.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    get_principal = create_principal_dependency(log_util=log_util, principal_service=principal_service)

    app.include_router(create_node_type_api(log_util=log_util, registry=registry))
    app.include_router(create_flow_api(log_util=log_util, flow_service=flow_service, get_principal=get_principal))
    app.include_router(create_contact_api(log_util=log_util, contact_service=contact_service, get_principal=get_principal))
    app.include_router(create_template_api(log_util=log_util, template_service=template_service, get_principal=get_principal))
    app.include_router(create_campaign_api(log_util=log_util, campaign_service=campaign_service, get_principal=get_principal))
    app.include_router(create_conversation_api(
        log_util=log_util,
        conversation_service=conversation_service,
        get_principal=get_principal
    ))
    app.include_router(create_tenant_api(log_util=log_util, tenant_service=tenant_service, get_principal=get_principal))
    app.include_router(create_billing_api(log_util=log_util, billing_service=billing_service, get_principal=get_principal))
    app.include_router(create_api_integration_api(
        log_util=log_util,
        api_integration_service=api_integration_service,
        get_principal=get_principal
    ))

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "omniconsole"}

    # Global exception handler for HTTPExceptions
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        content = {"message": exc.detail, "status_code": exc.status_code}
        if isinstance(exc.detail, dict):
            content = {**exc.detail, "status_code": exc.status_code}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    # Request bodies FastAPI cannot parse are reported like any other validation error
    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        log_util.warning(service_name="OmniConsole", message=f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={
                "message": "Invalid request data",
                "errors": format_validation_errors(exc),
                "status_code": 400
            }
        )

    @app.exception_handler(ConsoleException)
    async def console_exception_handler(request: Request, exc: ConsoleException):
        content = {"message": exc.message, "status_code": exc.status_code}
        if isinstance(exc, ValidationException):
            content["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=content)

    # Global exception handler for any unhandled exceptions
    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        log_util.error(service_name="OmniConsole", message=f"Unhandled exception on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "message": "Internal server error",
                "status_code": 500
            }
        )

    return app


# Utils
log_util = LogUtil()
environment_utils = EnvironmentUtils(log_util=log_util)

# Database
mongo_client = MongoClientManager(log_util=log_util, environment_utils=environment_utils)

app = create_app(log_util=log_util, environment_utils=environment_utils, mongo_client=mongo_client)

if __name__ == "__main__":
    uvicorn.run(
        app,
        host=environment_utils.get_env_variable("HOST"),
        port=environment_utils.get_env_variable("PORT")
    )
