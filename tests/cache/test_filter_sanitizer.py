import pytest
from portal.core.cache import build_key
from portal.core.constants import Shift
from portal.schemas.routine import MyRoutineParams
from portal.utils.filters import (
    filter_tags,
    sanitize_filters,
    validate_department,
    validate_filters,
    validate_semester,
    validate_shift,
)


def test_invalid_shift_defaults_to_day():
    assert sanitize_filters({"shift": "Nighttime"})["shift"] == "Day"

def test_valid_shift_is_kept():
    assert sanitize_filters({"shift": "Evening"})["shift"] == "Evening"
    assert sanitize_filters({"shift": Shift.MORNING})["shift"] == "Morning"

def test_missing_shift_stays_absent():
    assert "shift" not in sanitize_filters({"shift": None})
    assert "shift" not in sanitize_filters({"shift": ""})
    assert "shift" not in sanitize_filters({})

@pytest.mark.parametrize("semester,expected", [(0, None), (9, None), (1, 1), (8, 8), (-3, None)])
def test_semester_bounds(semester, expected):
    assert sanitize_filters({"semester": semester}).get("semester") == expected

def test_non_numeric_semester_is_dropped():
    assert "semester" not in sanitize_filters({"semester": "3"})
    assert "semester" not in sanitize_filters({"semester": True})

def test_integral_float_semester_keys_like_int():
    sanitized = sanitize_filters({"semester": 3.0})
    assert sanitized["semester"] == 3 and isinstance(sanitized["semester"], int)
    assert build_key("getMyRoutine", sanitized) == build_key("getMyRoutine", sanitize_filters({"semester": 3}))
    assert sanitize_filters({"semester": 2.5})["semester"] == 2.5

def test_department_is_trimmed_or_dropped():
    assert sanitize_filters({"department": "  CSE "})["department"] == "CSE"
    assert "department" not in sanitize_filters({"department": "   "})
    assert "department" not in sanitize_filters({"department": 42})

def test_unrecognized_fields_pass_through_unless_none():
    sanitized = sanitize_filters({"teacher": "t-9", "_t": 1700, "page": None})
    assert sanitized == {"teacher": "t-9", "_t": 1700}

@pytest.mark.parametrize("filters", [
    {},
    {"department": " EEE ", "semester": 4, "shift": "Evening"},
    {"department": "", "semester": 12, "shift": "Night", "teacher": "t-1"},
    {"semester": 8, "extra": {"nested": True}},
])
def test_sanitize_is_idempotent(filters):
    once = sanitize_filters(filters)
    assert sanitize_filters(once) == once

def test_sanitize_accepts_models():
    params = MyRoutineParams(department="CSE", semester=2, shift="Weekend", custom="x")
    assert sanitize_filters(params) == {"department": "CSE", "semester": 2, "shift": "Day", "custom": "x"}

def test_sanitize_does_not_mutate_input():
    filters = {"department": " CSE ", "shift": "bogus"}
    sanitize_filters(filters)
    assert filters == {"department": " CSE ", "shift": "bogus"}

def test_validate_filters_reports_every_problem():
    result = validate_filters({"department": "", "semester": 10, "shift": "Night"})
    assert not result.is_valid
    assert result.errors == [
        "Invalid or missing department",
        "Invalid semester (must be 1-8)",
        "Invalid shift (must be Morning, Day, or Evening)",
    ]

def test_validate_filters_accepts_complete_set():
    result = validate_filters({"department": "CSE", "semester": 5, "shift": "Morning"})
    assert result.is_valid
    assert result.errors == []

def test_single_field_validators():
    assert validate_department("CSE")
    assert not validate_department(None)
    assert validate_semester(1) and validate_semester(8)
    assert not validate_semester(None)
    assert validate_shift("Day") and validate_shift(Shift.EVENING)
    assert not validate_shift("day")

def test_filter_tags_only_cover_recognized_dimensions():
    tags = filter_tags({"department": "CSE", "semester": 3, "teacher": "t-1", "shift": None})
    assert tags == frozenset({("department", "CSE"), ("semester", 3)})
    assert filter_tags(None) == frozenset()
