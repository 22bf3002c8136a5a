"""Validation and sanitization of routine query filters.

``sanitize_filters`` never raises. Invalid department and semester values are
dropped, while a present but unrecognized shift is normalized to the default
shift. Callers that need to reject bad input use ``validate_filters``.
"""
from typing import Any, Dict, Mapping, Union
import logging

from pydantic import BaseModel

from portal.core.cache_config import FILTER_DIMENSIONS
from portal.core.constants import DEFAULT_SHIFT, MAX_SEMESTER, MIN_SEMESTER, SHIFT_VALUES
from portal.schemas.routine import FilterValidationResult

logger = logging.getLogger(__name__)

FilterInput = Union[Mapping[str, Any], BaseModel, None]


def _as_dict(filters: FilterInput) -> Dict[str, Any]:
    if filters is None:
        return {}
    if isinstance(filters, BaseModel):
        return filters.model_dump(exclude_none=True, mode="json")
    return dict(filters)


def _shift_value(shift: Any) -> Any:
    # str-based enums compare equal to their value but serialize differently
    return getattr(shift, "value", shift)


def validate_department(department: Any) -> bool:
    return isinstance(department, str) and len(department.strip()) > 0


def validate_semester(semester: Any) -> bool:
    if isinstance(semester, bool) or not isinstance(semester, (int, float)):
        return False
    return MIN_SEMESTER <= semester <= MAX_SEMESTER


def validate_shift(shift: Any) -> bool:
    return isinstance(_shift_value(shift), str) and _shift_value(shift) in SHIFT_VALUES


def validate_filters(filters: FilterInput) -> FilterValidationResult:
    data = _as_dict(filters)
    errors = []

    if not validate_department(data.get("department")):
        errors.append("Invalid or missing department")

    if not validate_semester(data.get("semester")):
        errors.append(f"Invalid semester (must be {MIN_SEMESTER}-{MAX_SEMESTER})")

    if not validate_shift(data.get("shift")):
        errors.append("Invalid shift (must be Morning, Day, or Evening)")

    return FilterValidationResult(is_valid=not errors, errors=errors)


def sanitize_filters(filters: FilterInput) -> Dict[str, Any]:
    data = _as_dict(filters)
    sanitized: Dict[str, Any] = {}

    if validate_department(data.get("department")):
        sanitized["department"] = data["department"].strip()

    semester = data.get("semester")
    if validate_semester(semester):
        # 3.0 and 3 must produce the same cache key
        if isinstance(semester, float) and semester.is_integer():
            semester = int(semester)
        sanitized["semester"] = semester

    shift = data.get("shift")
    if validate_shift(shift):
        sanitized["shift"] = _shift_value(shift)
    elif shift:
        logger.debug(f"Unrecognized shift {shift!r}, using {DEFAULT_SHIFT.value}")
        sanitized["shift"] = DEFAULT_SHIFT.value

    for key, value in data.items():
        if key not in FILTER_DIMENSIONS and value is not None:
            sanitized[key] = value

    return sanitized


def filter_tags(params: FilterInput) -> frozenset:
    """(dimension, value) pairs an entry fetched with ``params`` depends on."""
    params = _as_dict(params)
    return frozenset(
        (dimension, _shift_value(params[dimension]))
        for dimension in FILTER_DIMENSIONS
        if params.get(dimension)
    )
