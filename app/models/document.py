"""
Document Model
Schemas for stored documents; uploaded files are embedded as base64 data URLs
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.query import ListFilters


class DocumentType(str, Enum):
    POLICY = "policy"
    CONTRACT = "contract"
    CERTIFICATE = "certificate"
    REPORT = "report"
    FORM = "form"
    OTHER = "other"


DEFAULT_DOCUMENT_TYPES = [t.value for t in DocumentType]


class AccessLevel(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    RESTRICTED = "restricted"


class FileUpload(BaseModel):
    """A local file read in full; stored inline as a base64 data URL"""
    file_name: str
    file_type: str = "application/octet-stream"
    content: bytes

    @property
    def file_size(self) -> int:
        return len(self.content)


class DocumentCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: DocumentType = DocumentType.OTHER
    category: str = "general"
    uploaded_by: Optional[str] = None
    url: str = ""
    tags: List[str] = []
    access_level: AccessLevel = AccessLevel.PUBLIC
    expiry_date: Optional[datetime] = None


class DocumentUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    type: Optional[DocumentType] = None
    category: Optional[str] = None
    url: Optional[str] = None
    tags: Optional[List[str]] = None
    access_level: Optional[AccessLevel] = None
    expiry_date: Optional[datetime] = None


class DocumentFilters(ListFilters):
    type: Optional[DocumentType] = None
    category: Optional[str] = None
    access_level: Optional[AccessLevel] = None
    uploaded_by: Optional[str] = None


class DocumentStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    expired: int = 0
    by_type: Dict[str, int] = {}
    by_category: Dict[str, int] = {}
    by_access_level: Dict[str, int] = {}
