"""
Query Models
Closed description of a store query: where clauses, ordering and a row limit
"""
from datetime import datetime
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Operator = Literal["==", "!=", "<", "<=", ">", ">=", "in", "not-in", "array-contains"]


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class WhereClause(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: str
    operator: Operator
    value: Any = None


class OrderBy(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: str
    direction: SortOrder = SortOrder.ASC


class QueryOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    where: List[WhereClause] = []
    order_by: List[OrderBy] = []
    limit: Optional[int] = Field(default=None, gt=0)


class ListFilters(BaseModel):
    """
    Filters shared by every list operation.
    Entity filter models extend this with their own enum fields.
    """
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    search: Optional[str] = None
    include_inactive: bool = False
    is_active: Optional[bool] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    sort_by: Optional[str] = None
    sort_order: Optional[SortOrder] = None
    limit: Optional[int] = Field(default=None, gt=0)


class FlagUpdate(BaseModel):
    """Body of a single-flag toggle (pin, publish, status)"""
    value: bool


class CategoryCreate(BaseModel):
    """Category schema shared by announcements, notifications and incidents"""
    name: str = Field(..., min_length=1)
    description: str = ""
    color: str = "#9e9e9e"
    icon: Optional[str] = None


class BulkResult(BaseModel):
    """Outcome of a batch of per-document updates; failures are not rolled back"""
    requested: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: List[str] = []
