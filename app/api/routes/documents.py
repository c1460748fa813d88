"""
Document Routes
Document records with inline file uploads (multipart form data)
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from pydantic import ValidationError

from app.api.deps import (
    csv_download,
    get_app_settings,
    get_current_user,
    get_services,
    paged,
    require_roles,
    unwrap,
)
from app.config import Settings, settings
from app.models.document import (
    AccessLevel,
    DocumentCreate,
    DocumentFilters,
    DocumentUpdate,
    FileUpload,
)
from app.services.container import Services

router = APIRouter()


def split_tags(tags: Optional[str]) -> Optional[List[str]]:
    if tags is None:
        return None
    return [t.strip() for t in tags.split(",") if t.strip()]


async def read_upload(upload: Optional[UploadFile], app_settings: Settings) -> Optional[FileUpload]:
    """Read the whole file; it is stored inline with the record."""
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    if len(content) > app_settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {app_settings.MAX_UPLOAD_SIZE} bytes",
        )
    return FileUpload(
        file_name=upload.filename,
        file_type=upload.content_type or "application/octet-stream",
        content=content,
    )


def validated(model, **fields):
    try:
        return model(**{k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors(include_url=False))


@router.get("/")
async def get_documents(
    filters: DocumentFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return paged(await services.documents.get_documents(filters), page, page_size)


@router.get("/search")
async def search_documents(
    term: str = Query(..., min_length=1),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    """Prefix search on title and category"""
    return unwrap(await services.documents.search_documents(term))


@router.get("/stats")
async def get_document_stats(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.documents.get_document_stats())


@router.get("/categories")
async def get_categories(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.documents.get_categories())


@router.get("/types")
async def get_document_types(
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.documents.get_document_types())


@router.get("/expired")
async def get_expired_documents(
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.documents.get_expired_documents())


@router.get("/export")
async def export_documents(
    filters: DocumentFilters = Depends(),
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return csv_download(await services.documents.get_documents(filters), "documents")


@router.get("/by-type/{document_type}")
async def get_documents_by_type(
    document_type: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.documents.get_documents_by_type(document_type))


@router.get("/by-category/{category}")
async def get_documents_by_category(
    category: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.documents.get_documents_by_category(category))


@router.get("/{document_id}")
async def get_document(
    document_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(get_current_user),
):
    return unwrap(await services.documents.get_document(document_id))


@router.post("/")
async def upload_document(
    title: str = Form(...),
    description: str = Form(None),
    type: str = Form("other"),
    category: str = Form("general"),
    access_level: str = Form("public"),
    tags: str = Form(None),
    expiry_date: str = Form(None),
    file: UploadFile = File(None),
    services: Services = Depends(get_services),
    app_settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    """
    Create a document record (Admin/HR only)
    An attached file is stored inline as a base64 data URL
    """
    form = validated(
        DocumentCreate,
        title=title,
        description=description,
        type=type,
        category=category,
        access_level=access_level,
        tags=split_tags(tags),
        expiry_date=expiry_date or None,
        uploaded_by=current_user["id"],
    )
    upload = await read_upload(file, app_settings)
    return unwrap(await services.documents.create_document(form, upload))


@router.put("/{document_id}")
async def update_document(
    document_id: str,
    title: str = Form(None),
    description: str = Form(None),
    type: str = Form(None),
    category: str = Form(None),
    access_level: str = Form(None),
    tags: str = Form(None),
    expiry_date: str = Form(None),
    file: UploadFile = File(None),
    services: Services = Depends(get_services),
    app_settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    """Update fields; a new file replaces the stored one and bumps the version"""
    form = validated(
        DocumentUpdate,
        title=title,
        description=description,
        type=type,
        category=category,
        access_level=access_level,
        tags=split_tags(tags),
        expiry_date=expiry_date or None,
    )
    upload = await read_upload(file, app_settings)
    return unwrap(await services.documents.update_document(document_id, form, upload))


@router.put("/{document_id}/access-level")
async def update_access_level(
    document_id: str,
    access_level: AccessLevel = Query(...),
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    return unwrap(await services.documents.update_document_access_level(document_id, access_level.value))


@router.delete("/{document_id}")
async def delete_document(
    document_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    unwrap(await services.documents.delete_document(document_id))
    return {"message": "Document removed"}


@router.delete("/{document_id}/permanent")
async def permanent_delete_document(
    document_id: str,
    services: Services = Depends(get_services),
    current_user: dict = Depends(require_roles("admin", "hr")),
):
    unwrap(await services.documents.permanent_delete_document(document_id))
    return {"message": "Document deleted"}
