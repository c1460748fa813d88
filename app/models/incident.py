"""
Incident Model
Schemas for workplace incident tracking; notes are embedded in the incident
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.announcement import Priority
from app.models.query import ListFilters


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IncidentStatus(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class IncidentCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1)
    description: str = ""
    category: str = "general"
    severity: Severity = Severity.LOW
    status: IncidentStatus = IncidentStatus.OPEN
    priority: Priority = Priority.MEDIUM
    assignee_id: Optional[str] = None
    location: str = ""
    tags: List[str] = []


class IncidentUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    severity: Optional[Severity] = None
    status: Optional[IncidentStatus] = None
    priority: Optional[Priority] = None
    assignee_id: Optional[str] = None
    location: Optional[str] = None
    tags: Optional[List[str]] = None


class IncidentStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: IncidentStatus
    resolution: Optional[str] = None


class IncidentNoteCreate(BaseModel):
    content: str = Field(..., min_length=1)
    author_id: str
    is_internal: bool = False


class IncidentFilters(ListFilters):
    category: Optional[str] = None
    severity: Optional[Severity] = None
    status: Optional[IncidentStatus] = None
    priority: Optional[Priority] = None
    assignee_id: Optional[str] = None


class IncidentStats(BaseModel):
    total: int = 0
    open: int = 0
    investigating: int = 0
    resolved: int = 0
    closed: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    urgent: int = 0
    today: int = 0
    resolved_today: int = 0
    by_category: Dict[str, int] = {}
    by_severity: Dict[str, int] = {}
    by_status: Dict[str, int] = {}
    by_priority: Dict[str, int] = {}
