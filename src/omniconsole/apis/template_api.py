from typing import Optional
from fastapi import APIRouter, Depends, Body
from fastapi.exceptions import HTTPException

# Utils
from omniconsole.utils.log_utils import LogUtil

# Services
from omniconsole.services.template_service import TemplateService

# Models
from omniconsole.models.principal import Principal

# APIs
from omniconsole.apis.api_errors import http_error


def create_template_api(
    log_util: LogUtil,
    template_service: TemplateService,
    get_principal
) -> APIRouter:
    router = APIRouter(
        prefix="/api/templates",
        tags=["templates"],
    )

    @router.get("")
    async def get_templates(principal: Principal = Depends(get_principal)):
        try:
            return await template_service.get_templates(principal)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TemplateAPI", "fetching templates", e)

    @router.get("/{template_id}")
    async def get_template(template_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await template_service.get_template(principal, template_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TemplateAPI", "fetching template", e)

    @router.post("", status_code=201)
    async def create_template(template_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await template_service.create_template(principal, template_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TemplateAPI", "creating template", e)

    @router.put("/{template_id}")
    async def update_template(template_id: str, template_data: dict, principal: Principal = Depends(get_principal)):
        try:
            return await template_service.update_template(principal, template_id, template_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TemplateAPI", "updating template", e)

    @router.delete("/{template_id}")
    async def delete_template(template_id: str, principal: Principal = Depends(get_principal)):
        try:
            return await template_service.delete_template(principal, template_id)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TemplateAPI", "deleting template", e)

    @router.post("/{template_id}/preview")
    async def preview_template(
        template_id: str,
        preview_data: Optional[dict] = Body(default=None),
        principal: Principal = Depends(get_principal)
    ):
        """
        Render the template with sample values.

        Request body (optional, defaults to the template's previewData):
        {
            "data": {"name": "Ada"}
        }
        """
        try:
            return await template_service.preview_template(principal, template_id, preview_data)
        except HTTPException:
            raise
        except Exception as e:
            raise http_error(log_util, "TemplateAPI", "previewing template", e)

    return router
