"""
User Model
Schemas for portal user profiles (keyed by the identity provider's uid)
"""
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.query import ListFilters


class UserRole(str, Enum):
    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


DEFAULT_ROLES = [r.value for r in UserRole]


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class EmergencyContact(BaseModel):
    """Emergency contact information"""
    name: str = ""
    phone: str = ""
    relationship: str = ""


class UserCreate(BaseModel):
    """Schema for creating a user profile"""
    model_config = ConfigDict(
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "first_name": "John",
                "last_name": "Doe",
                "email": "john.doe@company.com",
                "role": "employee",
                "department": "Engineering",
                "position": "Senior Developer",
            }
        },
    )

    first_name: str = Field(..., min_length=1)
    last_name: str = ""
    email: EmailStr
    role: UserRole = UserRole.EMPLOYEE
    department: str = ""
    position: str = ""
    hire_date: Optional[datetime] = None
    status: UserStatus = UserStatus.ACTIVE
    avatar: Optional[str] = None
    phone: str = ""
    address: str = ""
    emergency_contact: EmergencyContact = Field(default_factory=EmergencyContact)


class UserUpdate(BaseModel):
    """Schema for updating a user profile"""
    model_config = ConfigDict(use_enum_values=True)

    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[datetime] = None
    status: Optional[UserStatus] = None
    avatar: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None


class UserFilters(ListFilters):
    role: Optional[UserRole] = None
    department: Optional[str] = None
    status: Optional[UserStatus] = None


class UserStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    by_role: Dict[str, int] = {}
    by_department: Dict[str, int] = {}
