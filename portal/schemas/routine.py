from pydantic import BaseModel, ConfigDict, Field
from typing import Generic, List, Optional, TypeVar, Union
from portal.core.constants import DayOfWeek, Shift

ItemType = TypeVar("ItemType")

class PaginatedResponse(BaseModel, Generic[ItemType]):
    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[ItemType] = Field(default_factory=list)

class DepartmentRef(BaseModel):
    id: str
    name: str
    code: str

class RoutineTeacher(BaseModel):
    id: str
    fullNameEnglish: str
    designation: Optional[str] = None
    department: Optional[DepartmentRef] = None
    email: Optional[str] = None
    mobileNumber: Optional[str] = None
    employmentStatus: Optional[str] = None
    profilePhoto: Optional[str] = None

class ClassRoutine(BaseModel):
    id: str
    department: DepartmentRef
    semester: int
    shift: Shift
    session: str
    day_of_week: DayOfWeek
    start_time: str
    end_time: str
    subject_name: str
    subject_code: str
    teacher: Optional[RoutineTeacher] = None
    room_number: str
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)

class RoutineFilters(BaseModel):
    """Query parameters for the general routine listing, sent as given."""
    page: Optional[int] = None
    page_size: Optional[int] = None
    department: Optional[str] = None
    semester: Optional[int] = None
    shift: Optional[Shift] = None
    day_of_week: Optional[DayOfWeek] = None
    teacher: Optional[str] = None
    is_active: Optional[bool] = None
    ordering: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)

class MyRoutineParams(BaseModel):
    """Loosely typed on purpose: values are cleaned by sanitize_filters, not rejected."""
    department: Optional[str] = None
    semester: Optional[Union[int, float]] = None
    shift: Optional[str] = None
    teacher: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class MyRoutineResponse(BaseModel):
    count: int
    routines: List[ClassRoutine] = Field(default_factory=list)

class FilterValidationResult(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
