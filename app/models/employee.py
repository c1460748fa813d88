"""
Employee Model
Schemas for the employee directory
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.query import ListFilters
from app.models.user import EmergencyContact


class ContactInfo(BaseModel):
    """Employee contact details"""
    phone: str = ""
    personal_email: Optional[EmailStr] = None
    address: str = ""
    city: str = ""
    country: str = ""


class EmployeeCreate(BaseModel):
    """Schema for creating a directory entry"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "employee_id": "EMP001",
                "employee_name": "John Doe",
                "email": "john.doe@company.com",
                "department": "Engineering",
                "designation": "Senior Developer",
                "joining_date": "2020-01-01",
            }
        }
    )

    employee_id: str = Field(..., min_length=1)
    employee_name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: str = ""
    department: str = ""
    designation: str = ""
    joining_date: Optional[datetime] = None
    reporting_manager: Optional[str] = None
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    emergency_contacts: List[EmergencyContact] = []


class EmployeeUpdate(BaseModel):
    """Schema for updating employee information"""
    employee_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    joining_date: Optional[datetime] = None
    reporting_manager: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
    emergency_contacts: Optional[List[EmergencyContact]] = None


class EmployeeContactUpdate(BaseModel):
    contact_info: Optional[ContactInfo] = None
    emergency_contacts: Optional[List[EmergencyContact]] = None


class EmployeeFilters(ListFilters):
    department: Optional[str] = None
    designation: Optional[str] = None
    resigned: Optional[bool] = None


class EmployeeStats(BaseModel):
    total: int = 0
    active: int = 0
    resigned: int = 0
    by_department: Dict[str, int] = {}
    by_designation: Dict[str, int] = {}
