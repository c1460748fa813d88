"""
Tests for app/services/documents.py
"""
import base64
from datetime import datetime

import pytest

from app.models.document import DocumentCreate, DocumentFilters, DocumentUpdate, FileUpload
from app.services.documents import DocumentService, to_data_url


async def make(service: DocumentService, title: str, file=None, **fields):
    result = await service.create_document(DocumentCreate(title=title, **fields), file)
    assert result.success, result.error
    return result.data


class TestFileStorage:
    """Test inline base64 file storage."""

    def test_data_url(self):
        upload = FileUpload(file_name="a.txt", file_type="text/plain", content=b"hello")
        assert to_data_url(upload) == "data:text/plain;base64," + base64.b64encode(b"hello").decode()

    @pytest.mark.asyncio
    async def test_create_with_file(self, services, ticking_clock):
        upload = FileUpload(file_name="policy.pdf", file_type="application/pdf", content=b"%PDF-1.4")
        row = await make(services.documents, "Leave policy", upload, type="policy")

        assert row["file_name"] == "policy.pdf"
        assert row["file_size"] == 8
        assert row["file_type"] == "application/pdf"
        assert row["file_data"].startswith("data:application/pdf;base64,")
        assert row["version"] == 1
        assert row["uploaded_at"] is not None

    @pytest.mark.asyncio
    async def test_new_file_bumps_version(self, services, ticking_clock):
        svc = services.documents
        row = await make(svc, "Handbook", FileUpload(file_name="v1.txt", content=b"one"))

        updated = await svc.update_document(
            row["id"], DocumentUpdate(description="Second edition"),
            FileUpload(file_name="v2.txt", content=b"two"),
        )

        assert updated.data["version"] == 2
        assert updated.data["file_name"] == "v2.txt"
        assert updated.data["description"] == "Second edition"

    @pytest.mark.asyncio
    async def test_update_without_file_keeps_version(self, services, ticking_clock):
        svc = services.documents
        row = await make(svc, "Handbook", FileUpload(file_name="v1.txt", content=b"one"))

        updated = await svc.update_document(row["id"], DocumentUpdate(title="Employee handbook"))

        assert updated.data["version"] == 1
        assert updated.data["file_name"] == "v1.txt"


class TestDocumentQueries:

    @pytest.mark.asyncio
    async def test_prefix_search_deduplicates(self, services, ticking_clock):
        """A document matching on title and category is returned once."""
        svc = services.documents
        await make(svc, "Payroll guide", category="Payroll")
        await make(svc, "Benefits", category="Payroll")
        await make(svc, "Handbook", category="HR")
        gone = await make(svc, "Payroll archive", category="Old")
        await svc.delete_document(gone["id"])

        result = await svc.search_documents("Pay")

        assert sorted(d["title"] for d in result.data) == ["Benefits", "Payroll guide"]

    @pytest.mark.asyncio
    async def test_by_type_and_category(self, services, ticking_clock):
        svc = services.documents
        await make(svc, "a", type="policy", category="hr")
        await make(svc, "b", type="form", category="hr")

        by_type = await svc.get_documents_by_type("policy")
        by_category = await svc.get_documents_by_category("hr")

        assert [d["title"] for d in by_type.data] == ["a"]
        assert len(by_category.data) == 2

    @pytest.mark.asyncio
    async def test_expired_documents(self, services, ticking_clock):
        svc = services.documents
        await make(svc, "stale", expiry_date=datetime(2020, 1, 1))
        await make(svc, "fresh", expiry_date=datetime(2099, 1, 1))
        await make(svc, "forever")

        result = await svc.get_expired_documents()
        assert [d["title"] for d in result.data] == ["stale"]

    @pytest.mark.asyncio
    async def test_access_level(self, services, ticking_clock):
        svc = services.documents
        row = await make(svc, "Salaries")

        await svc.update_document_access_level(row["id"], "restricted")
        result = await svc.get_documents(DocumentFilters(access_level="restricted"))

        assert [d["id"] for d in result.data] == [row["id"]]

    @pytest.mark.asyncio
    async def test_categories_and_types(self, services, ticking_clock):
        svc = services.documents
        await make(svc, "a", category="hr")
        await make(svc, "b", category="finance")
        await make(svc, "c", category="hr")

        categories = await svc.get_categories()
        types = await svc.get_document_types()

        assert categories.data == ["finance", "hr"]
        assert types.data == sorted(["policy", "contract", "certificate", "report", "form", "other"])

    @pytest.mark.asyncio
    async def test_stats(self, services, ticking_clock):
        svc = services.documents
        await make(svc, "a", type="policy", expiry_date=datetime(2020, 1, 1))
        await make(svc, "b", type="form", access_level="private")
        gone = await make(svc, "c")
        await svc.delete_document(gone["id"])

        stats = (await svc.get_document_stats()).data

        assert stats.total == stats.active == 2
        assert stats.inactive == 1
        assert stats.expired == 1
        assert stats.by_access_level == {"public": 1, "private": 1}
