"""API tests for contacts, CSV export, file import and contact lists."""
import io

import pytest
from openpyxl import Workbook

from pymongo.errors import ServerSelectionTimeoutError

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.mark.asyncio
async def test_create_contact_requires_first_name(async_client):
    response = await async_client.post("/api/contacts", json={"firstName": "", "email": "a@x.com"})

    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Invalid contact data"
    assert data["errors"][0]["path"] == "firstName"


@pytest.mark.asyncio
async def test_create_contact_with_only_first_name(async_client):
    response = await async_client.post("/api/contacts", json={"firstName": "Ada"})

    assert response.status_code == 201
    contact = response.json()
    assert contact["firstName"] == "Ada"
    assert contact["isActive"] is True
    assert contact["lastName"] is None


@pytest.mark.asyncio
async def test_update_and_delete_contact(async_client):
    created = (await async_client.post("/api/contacts", json={"firstName": "Ada", "lastName": "King"})).json()

    response = await async_client.put(f"/api/contacts/{created['id']}", json={"isActive": False})
    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert response.json()["lastName"] == "King"

    response = await async_client.delete(f"/api/contacts/{created['id']}")
    assert response.json() == {"message": "Contact deleted successfully"}
    assert (await async_client.get(f"/api/contacts/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_contact_stats(async_client):
    await async_client.post("/api/contacts", json={"firstName": "Ada"})
    await async_client.post("/api/contacts", json={"firstName": "Bob", "isActive": False})
    await async_client.post("/api/contact-lists", json={"name": "VIP"})

    response = await async_client.get("/api/contacts/stats")

    assert response.json() == {"total": 2, "active": 1, "lists": 1}


@pytest.mark.asyncio
async def test_export_has_header_plus_one_line_per_contact(async_client):
    await async_client.post("/api/contacts", json={"firstName": "Ada", "lastName": "Lovelace, Countess"})
    await async_client.post("/api/contacts", json={"firstName": "Bob", "isActive": False, "phone": "+1 555"})

    response = await async_client.get("/api/contacts/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.splitlines()
    assert len(lines) == 3
    assert lines[0] == "First Name,Last Name,Email,Phone,WhatsApp,Status"
    assert '"Lovelace, Countess"' in response.text
    assert "Bob,,,+1 555,,Inactive" in lines


@pytest.mark.asyncio
async def test_import_without_first_name_header_is_rejected(async_client, mongo_client):
    csv_text = "Name,Email\nAda,ada@example.com\n"

    response = await async_client.post("/api/contacts/import", content=csv_text, headers={"content-type": "text/csv"})

    assert response.status_code == 400
    assert mongo_client.collections["contacts"].documents == []


@pytest.mark.asyncio
async def test_import_reports_rows_without_first_name(async_client):
    csv_text = (
        "First Name,Last Name,Email,Phone,WhatsApp,Status\n"
        "Ada,Lovelace,ada@example.com,,,Active\n"
        ",Nobody,nobody@example.com,,,\n"
        "\n"
        ",,,,,\n"
        "Bob,,,,,Inactive\n"
    )

    response = await async_client.post("/api/contacts/import", content=csv_text, headers={"content-type": "text/csv"})

    assert response.status_code == 200
    result = response.json()
    assert result["success"] is True
    assert result["imported"] == 2
    assert result["total"] == 3
    assert result["errors"] == ["Line 3: First Name is required"]
    assert result["imported"] + len(result["errors"]) == result["total"]

    contacts = (await async_client.get("/api/contacts")).json()
    assert sorted((contact["firstName"], contact["isActive"]) for contact in contacts) == [("Ada", True), ("Bob", False)]


@pytest.mark.asyncio
async def test_upload_multipart_file(async_client):
    files = {"file": ("contacts.csv", b"First Name,Email\nGrace,grace@example.com\n", "text/csv")}

    response = await async_client.post("/api/contacts/upload", files=files)

    assert response.status_code == 200
    assert response.json()["imported"] == 1


def workbook_bytes(rows):
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.mark.asyncio
async def test_upload_xlsx_workbook(async_client):
    content = workbook_bytes([
        ["First Name", "Last Name", "Phone", "Status"],
        ["Ada", "Lovelace", 15551234567, "Active"],
        [None, "Nameless", "+15550000000", None],
        [],
        ["Bob", None, None, "Inactive"],
    ])
    files = {"file": ("contacts.xlsx", content, XLSX_TYPE)}

    response = await async_client.post("/api/contacts/import", files=files)

    assert response.status_code == 200
    result = response.json()
    assert result["imported"] == 2
    assert result["total"] == 3
    assert result["errors"] == ["Line 3: First Name is required"]

    contacts = sorted((await async_client.get("/api/contacts")).json(), key=lambda contact: contact["firstName"])
    assert [(contact["firstName"], contact["phone"], contact["isActive"]) for contact in contacts] == [
        ("Ada", "15551234567", True),
        ("Bob", None, False),
    ]


@pytest.mark.asyncio
async def test_xlsx_without_first_name_header_is_rejected(async_client, mongo_client):
    content = workbook_bytes([["Name", "Email"], ["Ada", "ada@example.com"]])
    files = {"file": ("contacts.xlsx", content, XLSX_TYPE)}

    response = await async_client.post("/api/contacts/import", files=files)

    assert response.status_code == 400
    assert response.json()["message"] == "File must have a 'First Name' column"
    assert mongo_client.collections["contacts"].documents == []


@pytest.mark.asyncio
async def test_unreadable_workbook_is_rejected(async_client):
    for name, content in (("contacts.xlsx", b"PK\x03\x04broken"), ("contacts.xls", b"not a workbook")):
        response = await async_client.post("/api/contacts/import", files={"file": (name, content, "application/octet-stream")})

        assert response.status_code == 400
        assert response.json()["message"] == "Could not read the Excel workbook"


@pytest.mark.asyncio
async def test_unsupported_file_type_is_rejected(async_client):
    files = {"file": ("contacts.txt", b"First Name\nAda\n", "text/plain")}

    response = await async_client.post("/api/contacts/import", files=files)

    assert response.status_code == 400
    assert response.json()["message"].startswith("Unsupported file type")


@pytest.mark.asyncio
async def test_storage_failure_stops_import_without_rollback(async_client, mongo_client):
    csv_text = "First Name\nAda\nBob\nCy\n"
    contacts = mongo_client.collections["contacts"]

    original_insert = contacts.insert_one
    calls = {"count": 0}

    async def flaky_insert(document, session=None):
        calls["count"] += 1
        if calls["count"] == 2:
            raise ServerSelectionTimeoutError("no servers")
        return await original_insert(document, session=session)

    contacts.insert_one = flaky_insert

    response = await async_client.post("/api/contacts/import", content=csv_text, headers={"content-type": "text/csv"})

    result = response.json()
    assert result["success"] is False
    assert result["imported"] == 1
    assert len(result["errors"]) == 1
    assert result["errors"][0].startswith("Line 3:")
    assert len(contacts.documents) == 1


@pytest.mark.asyncio
async def test_contact_lists(async_client):
    response = await async_client.post("/api/contact-lists", json={"name": "Newsletter"})
    assert response.status_code == 201

    response = await async_client.post("/api/contact-lists", json={"name": ""})
    assert response.status_code == 400

    lists = (await async_client.get("/api/contact-lists")).json()
    assert [item["name"] for item in lists] == ["Newsletter"]
