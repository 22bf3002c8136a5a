from enum import Enum


class Shift(str, Enum):
    MORNING = "Morning"
    DAY = "Day"
    EVENING = "Evening"

class DayOfWeek(str, Enum):
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"

class AdmissionStatusEnum(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

SHIFT_VALUES = frozenset(shift.value for shift in Shift)
DEFAULT_SHIFT = Shift.DAY

MIN_SEMESTER = 1
MAX_SEMESTER = 8

DRAFT_STORAGE_KEY = "admission_form_draft"

# Backend endpoints, relative to API_BASE_URL
ROUTINE_MY_ROUTINE = "class-routines/my-routine/"
ROUTINE_LIST = "class-routines/"
ROUTINE_DETAIL = "class-routines/{}/"

ADMISSION_SUBMIT = "admissions/"
ADMISSION_MY_ADMISSION = "admissions/my_admission/"
ADMISSION_DETAIL = "admissions/{}/"
ADMISSION_UPLOAD_DOCUMENTS = "admissions/upload-documents/"
ADMISSION_SAVE_DRAFT = "admissions/save-draft/"
ADMISSION_GET_DRAFT = "admissions/get-draft/"
ADMISSION_CLEAR_DRAFT = "admissions/clear-draft/"
