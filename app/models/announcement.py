"""
Announcement Model
Schemas for company announcements and their categories
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.query import ListFilters


class AnnouncementType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
    GENERAL = "general"
    URGENT = "urgent"
    MAINTENANCE = "maintenance"
    UPDATE = "update"


class Priority(str, Enum):
    """Priority scale shared by announcements, notifications and incidents"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class AnnouncementStatus(str, Enum):
    ALL = "all"
    PUBLISHED = "published"
    DRAFT = "draft"
    ARCHIVED = "archived"
    PINNED = "pinned"


class AnnouncementCreate(BaseModel):
    """Schema for creating an announcement"""
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1)
    content: str = ""
    summary: str = ""
    type: AnnouncementType = AnnouncementType.GENERAL
    priority: Priority = Priority.MEDIUM
    category: str = "general"
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    target_audience: List[str] = []
    is_published: bool = False
    is_pinned: bool = False
    publish_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    attachments: List[str] = []
    tags: List[str] = []


class AnnouncementUpdate(BaseModel):
    """Schema for updating an announcement; unset fields are left untouched"""
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    summary: Optional[str] = None
    type: Optional[AnnouncementType] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    target_audience: Optional[List[str]] = None
    is_published: Optional[bool] = None
    is_pinned: Optional[bool] = None
    publish_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    attachments: Optional[List[str]] = None
    tags: Optional[List[str]] = None


class AnnouncementFilters(ListFilters):
    type: Optional[AnnouncementType] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    status: Optional[AnnouncementStatus] = None
    author_id: Optional[str] = None


class AnnouncementStats(BaseModel):
    total: int = 0
    published: int = 0
    drafts: int = 0
    pinned: int = 0
    archived: int = 0
    today: int = 0
    by_type: Dict[str, int] = {}
    by_priority: Dict[str, int] = {}
    by_category: Dict[str, int] = {}
    by_status: Dict[str, int] = {}
