"""
Tests for app/services/export.py
"""
import csv
import io
from datetime import date, datetime

from app.services.export import COLUMNS, export_csv, export_filename, records_to_csv


def parse(content: str):
    return list(csv.reader(io.StringIO(content)))


class TestExport:
    """Test CSV rendering of list rows."""

    def test_filename_carries_type_and_date(self):
        assert export_filename("users", date(2026, 10, 19)) == "users_export_2026-10-19.csv"

    def test_every_entity_has_columns(self):
        assert set(COLUMNS) == {"announcements", "notifications", "incidents", "documents", "users", "employees"}

    def test_header_row_and_cells(self):
        rows = [{
            "id": "n1", "title": "Hi, all", "message": "Body", "type": "system", "priority": "low",
            "recipient_id": "all", "is_read": True, "created_at": datetime(2026, 10, 19, 9, 30),
        }]

        result = export_csv(rows, "notifications", on=date(2026, 10, 19))
        [header, line] = parse(result.data.content)

        assert result.data.filename == "notifications_export_2026-10-19.csv"
        assert result.data.rows == 1
        assert header == ["ID", "Title", "Message", "Type", "Priority", "Recipient", "Read", "Created At"]
        assert line[1] == "Hi, all"
        assert line[6] == "Yes"
        assert line[7] == "2026-10-19T09:30:00"

    def test_missing_fields_are_blank(self):
        content = records_to_csv([{"employee_id": "E1", "resigned": False}], COLUMNS["employees"])
        [_, line] = parse(content)

        assert line[0] == "E1"
        assert line[2] == ""
        assert line[-1] == "No"

    def test_unknown_type_uses_record_keys(self):
        result = export_csv([{"a": 1, "b": ["x", "y"]}], "other")
        assert parse(result.data.content) == [["a", "b"], ["1", "x; y"]]

    def test_empty_rows_fail(self):
        result = export_csv([], "users")
        assert not result.success
        assert result.error == "No data to export"
