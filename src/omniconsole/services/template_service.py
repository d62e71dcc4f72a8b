import re
from typing import List, Dict, Any, Optional
from jinja2 import BaseLoader, TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment, SecurityError

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.template_db import TemplateDB

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.template_data import TemplateRequest, TemplateData, TemplatePreviewRequest, TemplatePreview

# Exceptions
from omniconsole.exceptions.console_exception import NotFoundException, ValidationException

# {{name}}, {{ first_name }}, {{1}} (WhatsApp positional), {{contact.city}}
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_][\w.]*)\s*\}\}")


def extract_variables(content: str) -> List[str]:
    """
    Placeholder names in first occurrence order, without duplicates
    """
    names: List[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(content):
        if match.group(1) not in names:
            names.append(match.group(1))
    return names


class TemplatePreviewRenderer:
    """
    Renders template content for the preview pane. Placeholders are rewritten to
    lookups in a single "values" mapping so that positional names like {{1}}
    resolve the same way as named ones. Text between placeholders is passed in
    as data, so "{%" or "{#" in a message is printed as written. Missing values
    render as the original placeholder.
    """

    def __init__(self):
        self.jinja_env = SandboxedEnvironment(
            loader=BaseLoader(),
            autoescape=False,
            keep_trailing_newline=True,
        )

    def render(self, content: str, data: Dict[str, Any]) -> TemplatePreview:
        names = extract_variables(content)
        missing = [name for name in names if data.get(name) in (None, "")]
        values = {
            name: "{{" + name + "}}" if name in missing else str(data[name])
            for name in names
        }
        # split() alternates literal text and placeholder names
        segments = PLACEHOLDER_PATTERN.split(content)
        source = "".join(
            "{{ values[%r] }}" % segment if index % 2 else "{{ literals[%d] }}" % index
            for index, segment in enumerate(segments)
        )
        try:
            rendered = self.jinja_env.from_string(source).render(values=values, literals=segments)
        except (TemplateSyntaxError, UndefinedError, SecurityError) as e:
            raise ValidationException(
                message="Template content could not be rendered",
                errors=[{"path": "content", "message": str(e), "type": "template_error"}]
            )
        return TemplatePreview(content=content, rendered=rendered, missing=missing)


class TemplateService:
    def __init__(self, log_util: LogUtil, template_db: TemplateDB, renderer: Optional[TemplatePreviewRenderer] = None):
        self.log_util = log_util
        self.template_db = template_db
        self.renderer = renderer or TemplatePreviewRenderer()

    async def get_templates(self, principal: Principal) -> List[TemplateData]:
        return await self.template_db.get_templates(principal.tenant_id)

    async def get_template(self, principal: Principal, template_id: str) -> TemplateData:
        template = await self.template_db.get_template(principal.tenant_id, template_id)
        if template is None:
            raise NotFoundException(message="Template not found")
        return template

    async def create_template(self, principal: Principal, template_data: dict) -> TemplateData:
        """
        Store a template. Content is kept exactly as sent; variables are derived
        from its placeholders when the body leaves them out.
        """
        request = validate_payload(TemplateRequest, template_data, "template")
        fields = request.model_dump()
        if request.variables is None:
            fields["variables"] = extract_variables(request.content)

        template = TemplateData(
            tenantId=principal.tenant_id,
            createdById=principal.user_id,
            lastModifiedById=principal.user_id,
            **fields
        )
        saved = await self.template_db.create_template(template)
        self.log_util.info(service_name="TemplateService", message=f"Template {saved.id} ({saved.type}) created for tenant {principal.tenant_id}")
        return saved

    async def update_template(self, principal: Principal, template_id: str, template_data: dict) -> TemplateData:
        existing = await self.get_template(principal, template_id)
        if not isinstance(template_data, dict):
            template_data = {}
        request = validate_payload(
            TemplateRequest,
            {**existing.model_dump(include=set(TemplateRequest.model_fields)), **template_data},
            "template"
        )
        fields = request.model_dump(include=set(template_data) & set(TemplateRequest.model_fields))
        if "content" in template_data and "variables" not in template_data:
            fields["variables"] = extract_variables(request.content)
        fields["lastModifiedById"] = principal.user_id

        updated = await self.template_db.update_template(principal.tenant_id, template_id, fields)
        if updated is None:
            raise NotFoundException(message="Template not found")
        return updated

    async def delete_template(self, principal: Principal, template_id: str) -> Dict[str, str]:
        deleted = await self.template_db.delete_template(principal.tenant_id, template_id)
        if not deleted:
            raise NotFoundException(message="Template not found")
        return {"message": "Template deleted successfully"}

    async def preview_template(self, principal: Principal, template_id: str, preview_data: Optional[dict] = None) -> TemplatePreview:
        """
        Render the stored content with the body's data, falling back to the
        template's previewData. The stored template is not modified.
        """
        template = await self.get_template(principal, template_id)
        request = validate_payload(TemplatePreviewRequest, preview_data or {}, "preview")
        data = request.data if request.data is not None else (template.previewData or {})
        return self.renderer.render(template.content, data)
