"""API tests for message templates and their preview."""
import pytest

from omniconsole.services.template_service import extract_variables, TemplatePreviewRenderer


WHATSAPP_TEMPLATE = {
    "name": "Order shipped",
    "type": "whatsapp",
    "content": "Hi {{first_name}}, order {{1}} ships on {{ date }}. Thanks {{first_name}}!",
    "previewData": {"first_name": "Ada", "1": "A-100"},
    "metadata": {"category": "utility", "language": "en"},
}


def test_extract_variables_keeps_first_occurrence_order():
    assert extract_variables(WHATSAPP_TEMPLATE["content"]) == ["first_name", "1", "date"]
    assert extract_variables("No placeholders, {single} braces") == []


def test_renderer_leaves_missing_placeholders():
    preview = TemplatePreviewRenderer().render("Hello {{name}} from {{ company }}", {"name": "Grace"})

    assert preview.rendered == "Hello Grace from {{company}}"
    assert preview.missing == ["company"]


def test_renderer_prints_template_markup_in_text_as_written():
    renderer = TemplatePreviewRenderer()

    hashed = renderer.render("Reply {#1 for info, {{name}}", {"name": "Ada"})
    percent = renderer.render("Hi {{name}}, 100% {%off today", {"name": "Ada"})
    tags = renderer.render("{% if x %}{{ name }}{% endif %} {{'{{'}}", {"name": "Ada"})

    assert hashed.rendered == "Reply {#1 for info, Ada"
    assert percent.rendered == "Hi Ada, 100% {%off today"
    assert tags.rendered == "{% if x %}Ada{% endif %} {{'{{'}}"


def test_renderer_keeps_trailing_newline():
    preview = TemplatePreviewRenderer().render("Line one {{name}}\n", {"name": "Ada"})

    assert preview.rendered == "Line one Ada\n"


@pytest.mark.asyncio
async def test_placeholders_survive_save_edit_save(async_client):
    response = await async_client.post("/api/templates", json=WHATSAPP_TEMPLATE)
    assert response.status_code == 201
    created = response.json()
    assert created["content"] == WHATSAPP_TEMPLATE["content"]
    assert created["variables"] == ["first_name", "1", "date"]
    assert created["status"] == "draft"
    assert created["createdById"] == 1

    edited_content = created["content"] + " Reply {{stop_word}} to opt out."
    response = await async_client.put(f"/api/templates/{created['id']}", json={"content": edited_content})
    assert response.status_code == 200
    assert response.json()["variables"] == ["first_name", "1", "date", "stop_word"]

    response = await async_client.put(f"/api/templates/{created['id']}", json={"name": "Order shipped v2"})
    template = response.json()
    assert template["content"] == edited_content
    assert template["metadata"] == {"category": "utility", "language": "en"}

    fetched = (await async_client.get(f"/api/templates/{created['id']}")).json()
    assert fetched["content"] == edited_content


@pytest.mark.asyncio
async def test_explicit_variables_are_kept(async_client):
    body = {**WHATSAPP_TEMPLATE, "variables": ["first_name"]}

    created = (await async_client.post("/api/templates", json=body)).json()

    assert created["variables"] == ["first_name"]


@pytest.mark.asyncio
async def test_invalid_template_type(async_client):
    response = await async_client.post("/api/templates", json={**WHATSAPP_TEMPLATE, "type": "fax"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "type"


@pytest.mark.asyncio
async def test_preview_uses_body_data_or_stored_preview_data(async_client):
    created = (await async_client.post("/api/templates", json=WHATSAPP_TEMPLATE)).json()

    response = await async_client.post(f"/api/templates/{created['id']}/preview")
    assert response.status_code == 200
    preview = response.json()
    assert preview["rendered"] == "Hi Ada, order A-100 ships on {{date}}. Thanks Ada!"
    assert preview["missing"] == ["date"]

    response = await async_client.post(
        f"/api/templates/{created['id']}/preview",
        json={"data": {"first_name": "Grace", "1": "B-7", "date": "Friday"}}
    )
    preview = response.json()
    assert preview["rendered"] == "Hi Grace, order B-7 ships on Friday. Thanks Grace!"
    assert preview["missing"] == []

    stored = (await async_client.get(f"/api/templates/{created['id']}")).json()
    assert stored["content"] == WHATSAPP_TEMPLATE["content"]


@pytest.mark.asyncio
async def test_delete_template(async_client):
    created = (await async_client.post("/api/templates", json=WHATSAPP_TEMPLATE)).json()

    response = await async_client.delete(f"/api/templates/{created['id']}")
    assert response.json() == {"message": "Template deleted successfully"}

    assert (await async_client.get(f"/api/templates/{created['id']}")).status_code == 404
    assert (await async_client.get("/api/templates")).json() == []
