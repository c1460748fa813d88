"""
CSV export of list data.

Each entity has a fixed column set of (header, field) pairs; the export
covers whatever rows the caller passes in, typically the current
filtered list.
"""
import csv
import io
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from app.core.filtering import get_field
from app.core.results import ApiResponse, fail, ok

Column = Tuple[str, str]

COLUMNS: Dict[str, Sequence[Column]] = {
    "announcements": (
        ("ID", "id"),
        ("Title", "title"),
        ("Content", "content"),
        ("Author", "author_name"),
        ("Created At", "created_at"),
        ("Priority", "priority"),
    ),
    "notifications": (
        ("ID", "id"),
        ("Title", "title"),
        ("Message", "message"),
        ("Type", "type"),
        ("Priority", "priority"),
        ("Recipient", "recipient_id"),
        ("Read", "is_read"),
        ("Created At", "created_at"),
    ),
    "incidents": (
        ("ID", "id"),
        ("Title", "title"),
        ("Type", "category"),
        ("Severity", "severity"),
        ("Reported By", "reporter_id"),
        ("Reported At", "reported_at"),
        ("Status", "status"),
    ),
    "documents": (
        ("ID", "id"),
        ("Title", "title"),
        ("Type", "type"),
        ("Category", "category"),
        ("Uploaded By", "uploaded_by"),
        ("Uploaded At", "uploaded_at"),
        ("File Size", "file_size"),
    ),
    "users": (
        ("ID", "id"),
        ("First Name", "first_name"),
        ("Last Name", "last_name"),
        ("Email", "email"),
        ("Role", "role"),
        ("Department", "department"),
        ("Status", "status"),
    ),
    "employees": (
        ("ID", "employee_id"),
        ("Name", "employee_name"),
        ("Email", "email"),
        ("Department", "department"),
        ("Position", "designation"),
        ("Hire Date", "joining_date"),
        ("Status", "resigned"),
    ),
}


class CsvExport(BaseModel):
    filename: str
    content: str
    rows: int


def export_filename(data_type: str, on: Optional[date] = None) -> str:
    on = on or date.today()
    return f"{data_type}_export_{on.isoformat()}.csv"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return "; ".join(_cell(v) for v in value)
    return str(value)


def records_to_csv(records: Iterable[Mapping[str, Any]], columns: Sequence[Column]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([header for header, _ in columns])
    for record in records:
        writer.writerow([_cell(get_field(record, field)) for _, field in columns])
    return buffer.getvalue()


def export_csv(records: Sequence[Mapping[str, Any]], data_type: str,
               on: Optional[date] = None) -> ApiResponse:
    if not records:
        return fail("No data to export")
    columns: List[Column] = list(COLUMNS.get(data_type) or [(key, key) for key in records[0]])
    return ok(CsvExport(
        filename=export_filename(data_type, on),
        content=records_to_csv(records, columns),
        rows=len(records),
    ))
