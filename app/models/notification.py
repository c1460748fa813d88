"""
Notification Model
Schemas for notifications addressed to one user or to everyone
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.announcement import Priority
from app.models.query import ListFilters


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    SYSTEM = "system"
    USER = "user"
    WORK = "work"
    EVENT = "event"
    ASSIGNMENT = "assignment"
    PAYMENT = "payment"
    SECURITY = "security"


class ReadStatus(str, Enum):
    ALL = "all"
    READ = "read"
    UNREAD = "unread"


class NotificationAction(BaseModel):
    id: str
    label: str
    action: str
    url: Optional[str] = None
    method: Optional[Literal["GET", "POST", "PUT", "DELETE"]] = None


class NotificationCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1)
    message: str = ""
    type: NotificationType = NotificationType.INFO
    priority: Priority = Priority.MEDIUM
    category: str = "general"
    recipient_id: str = "all"
    expires_at: Optional[datetime] = None
    metadata: Dict[str, Any] = {}
    actions: List[NotificationAction] = []


class NotificationUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    message: Optional[str] = None
    type: Optional[NotificationType] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    recipient_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None
    actions: Optional[List[NotificationAction]] = None


class NotificationFilters(ListFilters):
    type: Optional[NotificationType] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    recipient_id: Optional[str] = None
    read_status: Optional[ReadStatus] = None
    is_pinned: Optional[bool] = None


class NotificationStats(BaseModel):
    total: int = 0
    unread: int = 0
    pinned: int = 0
    today: int = 0
    by_type: Dict[str, int] = {}
    by_priority: Dict[str, int] = {}
    by_category: Dict[str, int] = {}
    by_status: Dict[str, int] = {}
