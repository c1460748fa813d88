"""
In-memory filtering, sorting and pagination
Shared by the memory store, the domain services and the list view state
"""
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from app.core.clock import as_utc
from app.models.query import WhereClause

EMPTY_VALUES = (None, "", "all")


def get_field(record: Mapping[str, Any], field: str) -> Any:
    """Read a possibly dotted field ("emergency_contact.name")."""
    value: Any = record
    for part in field.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def is_empty(value: Any) -> bool:
    if isinstance(value, DateRange):
        return value.start is None and value.end is None
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return value in EMPTY_VALUES


def _comparable(value: Any) -> Any:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return value


def matches_where(record: Mapping[str, Any], clause: WhereClause) -> bool:
    """Evaluate one store where clause against a record."""
    actual = _comparable(get_field(record, clause.field))
    expected = clause.value
    op = clause.operator

    if op == "==":
        return actual == _comparable(expected)
    if op == "!=":
        return actual != _comparable(expected)
    if op == "in":
        return isinstance(expected, (list, tuple, set)) and actual in expected
    if op == "not-in":
        return isinstance(expected, (list, tuple, set)) and actual not in expected
    if op == "array-contains":
        return isinstance(actual, list) and expected in actual

    # Range operators never match a missing field
    if actual is None:
        return False
    expected = _comparable(expected)
    try:
        if op == "<":
            return actual < expected
        if op == "<=":
            return actual <= expected
        if op == ">":
            return actual > expected
        if op == ">=":
            return actual >= expected
    except TypeError:
        return False
    return False


def sort_records(records: Iterable[Mapping[str, Any]], field: str,
                 descending: bool = False) -> List[Mapping[str, Any]]:
    """Stable sort on one field; records missing the field go last."""
    records = list(records)
    present = [r for r in records if get_field(r, field) is not None]
    missing = [r for r in records if get_field(r, field) is None]
    try:
        present.sort(key=lambda r: _comparable(get_field(r, field)), reverse=descending)
    except TypeError:
        present.sort(key=lambda r: str(get_field(r, field)), reverse=descending)
    return present + missing


def sort_by_keys(records: Iterable[Mapping[str, Any]],
                 keys: Sequence[Tuple[str, bool]]) -> List[Mapping[str, Any]]:
    """Multi-key sort; `keys` is [(field, descending), ...] in priority order."""
    result = list(records)
    for field, descending in reversed(keys):
        result = sort_records(result, field, descending)
    return result


def paginate(items: Sequence[Any], page: int, page_size: int) -> List[Any]:
    """Page k (1-based) of size n is items[(k-1)*n : k*n]; past the end is empty."""
    if page < 1 or page_size < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def page_count(total: int, page_size: int) -> int:
    if page_size < 1:
        return 0
    return math.ceil(total / page_size)


@dataclass
class DateRange:
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class SearchFilter:
    """Case-insensitive substring match across several text fields."""
    key: str
    fields: Tuple[str, ...]

    def matches(self, record: Mapping[str, Any], value: Any) -> bool:
        needle = str(value).lower()
        for field in self.fields:
            text = get_field(record, field)
            if text is not None and needle in str(text).lower():
                return True
        return False


@dataclass(frozen=True)
class EqualsFilter:
    """Exact match on an enum or identifier field."""
    key: str
    field: str

    def matches(self, record: Mapping[str, Any], value: Any) -> bool:
        return get_field(record, self.field) == value


@dataclass(frozen=True)
class FlagFilter:
    """Boolean status flag; a missing field counts as False."""
    key: str
    field: str

    def matches(self, record: Mapping[str, Any], value: Any) -> bool:
        return bool(get_field(record, self.field)) == bool(value)


@dataclass(frozen=True)
class StatusFilter:
    """Named status choices, each mapped to a (flag field, expected value) pair."""
    key: str
    choices: Tuple[Tuple[str, str, bool], ...]

    def matches(self, record: Mapping[str, Any], value: Any) -> bool:
        for name, field, expected in self.choices:
            if name == value:
                return bool(get_field(record, field)) == expected
        return True


@dataclass(frozen=True)
class DateRangeFilter:
    """Inclusive range on a timestamp field."""
    key: str
    field: str

    def matches(self, record: Mapping[str, Any], value: Any) -> bool:
        moment = as_utc(get_field(record, self.field))
        if moment is None:
            return False
        start = as_utc(value.start)
        end = as_utc(value.end)
        if start is not None and moment < start:
            return False
        if end is not None and moment > end:
            return False
        return True


FieldFilter = Union[SearchFilter, EqualsFilter, FlagFilter, StatusFilter, DateRangeFilter]


def apply_filters(records: Iterable[Mapping[str, Any]], filters: Sequence[FieldFilter],
                  values: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    """
    AND-combine every active filter. A filter whose value is empty
    places no constraint on the result.
    """
    active = [(f, values.get(f.key)) for f in filters if not is_empty(values.get(f.key))]
    return [r for r in records if all(f.matches(r, v) for f, v in active)]


def count_by(records: Iterable[Mapping[str, Any]], field: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for record in records:
        key = get_field(record, field)
        key = "unknown" if key is None else str(key)
        counts[key] = counts.get(key, 0) + 1
    return counts
