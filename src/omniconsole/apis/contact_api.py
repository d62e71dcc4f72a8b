from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import HTTPException
from fastapi.responses import Response
from starlette.datastructures import UploadFile

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.contact_service import ContactService, import_format_for

# Models
from omniconsole.models.principal import Principal

# Exceptions
from omniconsole.exceptions.console_exception import ValidationException

# APIs
from omniconsole.apis.api_errors import http_error


async def read_import_upload(request: Request):
    """
    (content, format) from a multipart "file" field, or the raw request body read as CSV
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise ValidationException(message="No file uploaded")
        file_format = import_format_for(upload.filename)
        content = await upload.read()
        if not content.strip():
            raise ValidationException(message="No file uploaded")
        return content, file_format

    body = await request.body()
    if not body.strip():
        raise ValidationException(message="No file uploaded")
    return body, "csv"


def create_contact_api(
    log_util: LogUtil,
    contact_service: ContactService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api",
        tags=["contacts"],
    )

    @router.get("/contacts")
    async def get_contacts(principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.get_contacts(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "fetching contacts", e)

    @router.get("/contacts/stats")
    async def get_contact_stats(principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.get_contact_stats(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "fetching contact stats", e)

    @router.get("/contacts/export")
    async def export_contacts(principal: Principal = Depends(get_principal)):
        try:
            csv_text = await contact_service.export_contacts(principal)
            return Response(
                content=csv_text,
                media_type="text/csv",
                headers={"Content-Disposition": 'attachment; filename="contacts.csv"'}
            )
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "exporting contacts", e)

    async def import_contacts(request: Request, principal: Principal):
        try:
            content, file_format = await read_import_upload(request)
            return await contact_service.import_upload(principal, content, file_format)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "importing contacts", e)

    @router.post("/contacts/import")
    async def import_contacts_route(request: Request, principal: Principal = Depends(get_principal)):
        """
        Import contacts from a multipart "file" field (.csv, .xlsx or .xls) or a raw CSV body.
        Required header column: First Name
        """
        return await import_contacts(request, principal)

    @router.post("/contacts/upload")
    async def upload_contacts_route(request: Request, principal: Principal = Depends(get_principal)):
        return await import_contacts(request, principal)

    @router.get("/contacts/{contact_id}")
    async def get_contact(contact_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.get_contact(principal, contact_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "fetching contact", e)

    @router.post("/contacts", status_code=201)
    async def create_contact(contact_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.create_contact(principal, contact_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "creating contact", e)

    @router.put("/contacts/{contact_id}")
    async def update_contact(contact_id: str, contact_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.update_contact(principal, contact_id, contact_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "updating contact", e)

    @router.delete("/contacts/{contact_id}")
    async def delete_contact(contact_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.delete_contact(principal, contact_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "deleting contact", e)

    # Contact lists
    @router.get("/contact-lists")
    async def get_contact_lists(principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.get_contact_lists(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "fetching contact lists", e)

    @router.post("/contact-lists", status_code=201)
    async def create_contact_list(list_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await contact_service.create_contact_list(principal, list_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "ContactAPI", "creating contact list", e)

    return router
