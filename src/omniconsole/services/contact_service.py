import csv
import io
from datetime import date, datetime
from typing import List, Dict, Any, Optional, Tuple
from zipfile import BadZipFile

import xlrd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.validation_utils import validate_payload

# Database
from omniconsole.database.contact_db import ContactDB, ContactListDB

# Models
from omniconsole.models.principal import Principal
from omniconsole.models.contact_data import (
    ContactRequest,
    ContactData,
    ContactStats,
    ContactListRequest,
    ContactListData,
    ContactImportResult,
)

# Exceptions
from omniconsole.exceptions.console_exception import ConsoleException, NotFoundException, ValidationException

CSV_HEADER = ["First Name", "Last Name", "Email", "Phone", "WhatsApp", "Status"]
CSV_FIELD_MAP = {
    "First Name": "firstName",
    "Last Name": "lastName",
    "Email": "email",
    "Phone": "phone",
    "WhatsApp": "whatsapp",
}
IMPORT_EXTENSIONS = (".csv", ".xlsx", ".xls")


def contacts_to_csv(contacts: List[ContactData]) -> str:
    """
    Header plus one row per contact. Fields holding commas, quotes or line breaks are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for contact in contacts:
        writer.writerow([
            contact.firstName,
            contact.lastName or "",
            contact.email or "",
            contact.phone or "",
            contact.whatsapp or "",
            "Active" if contact.isActive else "Inactive",
        ])
    return buffer.getvalue()


def decode_upload(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def import_format_for(filename: Optional[str]) -> str:
    """
    "csv", "xlsx" or "xls" from the uploaded file name; a missing name is read as CSV
    """
    if not filename:
        return "csv"
    lowered = filename.lower()
    if not lowered.endswith(IMPORT_EXTENSIONS):
        raise ValidationException(message="Unsupported file type. Upload a .csv, .xlsx or .xls file")
    return lowered.rsplit(".", 1)[1]


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    # Spreadsheets hand back whole numbers (phone numbers) as floats
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def csv_rows(csv_text: str) -> List[Tuple[int, List[str]]]:
    """
    (line number, cells) per record. line_num counts physical lines, quoted line breaks included.
    """
    reader = csv.reader(io.StringIO(csv_text))
    return [(reader.line_num, row) for row in reader]


def workbook_rows(content: bytes, file_format: str) -> List[Tuple[int, List[str]]]:
    """
    (row number, cells) for every row of the first worksheet of an .xlsx or .xls file
    """
    try:
        if file_format == "xlsx":
            workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
            try:
                sheet = workbook.worksheets[0]
                return [
                    (number, [_cell_text(value) for value in row])
                    for number, row in enumerate(sheet.iter_rows(values_only=True), start=1)
                ]
            finally:
                workbook.close()
        book = xlrd.open_workbook(file_contents=content)
        sheet = book.sheet_by_index(0)
        return [(index + 1, [_cell_text(value) for value in sheet.row_values(index)]) for index in range(sheet.nrows)]
    except (InvalidFileException, BadZipFile, KeyError, IndexError, xlrd.XLRDError) as e:
        raise ValidationException(
            message="Could not read the Excel workbook",
            errors=[{"path": "file", "message": str(e), "type": "file_error"}]
        )


class ContactService:
    def __init__(self, log_util: LogUtil, contact_db: ContactDB, contact_list_db: ContactListDB):
        self.log_util = log_util
        self.contact_db = contact_db
        self.contact_list_db = contact_list_db

    async def get_contacts(self, principal: Principal) -> List[ContactData]:
        return await self.contact_db.get_contacts(principal.tenant_id)

    async def get_contact(self, principal: Principal, contact_id: str) -> ContactData:
        contact = await self.contact_db.get_contact(principal.tenant_id, contact_id)
        if contact is None:
            raise NotFoundException(message="Contact not found")
        return contact

    async def create_contact(self, principal: Principal, contact_data: dict) -> ContactData:
        request = validate_payload(ContactRequest, contact_data, "contact")
        contact = ContactData(tenantId=principal.tenant_id, **request.model_dump())
        return await self.contact_db.create_contact(contact)

    async def update_contact(self, principal: Principal, contact_id: str, contact_data: dict) -> ContactData:
        existing = await self.get_contact(principal, contact_id)
        if not isinstance(contact_data, dict):
            contact_data = {}
        request = validate_payload(
            ContactRequest,
            {**existing.model_dump(include=set(ContactRequest.model_fields)), **contact_data},
            "contact"
        )
        fields = request.model_dump(include=set(contact_data) & set(ContactRequest.model_fields))
        updated = await self.contact_db.update_contact(principal.tenant_id, contact_id, fields)
        if updated is None:
            raise NotFoundException(message="Contact not found")
        return updated

    async def delete_contact(self, principal: Principal, contact_id: str) -> Dict[str, str]:
        deleted = await self.contact_db.delete_contact(principal.tenant_id, contact_id)
        if not deleted:
            raise NotFoundException(message="Contact not found")
        return {"message": "Contact deleted successfully"}

    async def get_contact_stats(self, principal: Principal) -> ContactStats:
        return await self.contact_db.get_contact_stats(principal.tenant_id)

    async def export_contacts(self, principal: Principal) -> str:
        contacts = await self.contact_db.get_contacts(principal.tenant_id)
        self.log_util.info(service_name="ContactService", message=f"Exporting {len(contacts)} contacts for tenant {principal.tenant_id}")
        return contacts_to_csv(contacts)

    async def import_contacts(self, principal: Principal, rows: List[Tuple[int, List[str]]]) -> ContactImportResult:
        """
        Import contacts from (line number, cells) rows; the first row is the header.

        The "First Name" column is required before any row is read. Rows with no
        content are skipped, rows without a first name are reported by file line
        (the header is line 1). A storage failure stops the import at that row;
        contacts inserted before it stay.
        """
        header = [str(name).strip() for name in rows[0][1]] if rows else []
        if "First Name" not in header:
            raise ValidationException(message="File must have a 'First Name' column")

        imported = 0
        total = 0
        errors: List[str] = []
        success = True
        for line_number, cells in rows[1:]:
            values = {column: (cells[index] if index < len(cells) else "").strip() for index, column in enumerate(header)}
            if not any(values.values()):
                continue
            total += 1

            if not values.get("First Name"):
                errors.append(f"Line {line_number}: First Name is required")
                continue

            record: Dict[str, Any] = {
                field: values.get(column) or None for column, field in CSV_FIELD_MAP.items()
            }
            record["firstName"] = values["First Name"]
            record["isActive"] = values.get("Status", "").lower() != "inactive"
            try:
                await self.contact_db.create_contact(ContactData(tenantId=principal.tenant_id, **record))
                imported += 1
            except ConsoleException as e:
                errors.append(f"Line {line_number}: {e.message}")
                success = False
                break

        self.log_util.info(
            service_name="ContactService",
            message=f"Imported {imported} of {total} contacts for tenant {principal.tenant_id} ({len(errors)} errors)"
        )
        return ContactImportResult(success=success, imported=imported, total=total, errors=errors)

    async def import_upload(self, principal: Principal, content: bytes, file_format: str = "csv") -> ContactImportResult:
        if file_format == "csv":
            rows = csv_rows(decode_upload(content))
        else:
            rows = workbook_rows(content, file_format)
        self.log_util.info(service_name="ContactService", message=f"Reading {len(rows)} {file_format} rows for tenant {principal.tenant_id}")
        return await self.import_contacts(principal, rows)

    async def get_contact_lists(self, principal: Principal) -> List[ContactListData]:
        return await self.contact_list_db.get_contact_lists(principal.tenant_id)

    async def create_contact_list(self, principal: Principal, list_data: dict) -> ContactListData:
        request = validate_payload(ContactListRequest, list_data, "contact list")
        contact_list = ContactListData(tenantId=principal.tenant_id, **request.model_dump())
        return await self.contact_list_db.create_contact_list(contact_list)
