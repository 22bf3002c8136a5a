from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Union
from portal.core.constants import AdmissionStatusEnum
from portal.schemas.routine import DepartmentRef

class AddressData(BaseModel):
    village: str
    postOffice: str
    upazila: str
    district: str
    division: str
    policeStation: Optional[str] = None
    municipality: Optional[str] = None
    ward: Optional[str] = None
    fullAddress: Optional[str] = None

class AdmissionFormData(BaseModel):
    # Personal information
    full_name_bangla: str
    full_name_english: str
    father_name: str
    father_nid: str
    mother_name: str
    mother_nid: str
    date_of_birth: str
    birth_certificate_no: str
    gender: str
    religion: str
    blood_group: str

    # Contact information
    mobile_student: str
    guardian_mobile: str
    email: str
    emergency_contact: str
    present_address: Union[AddressData, str]
    permanent_address: Union[AddressData, str]

    # Educational background
    highest_exam: str
    board: str
    group: str
    roll_number: str
    registration_number: str
    passing_year: str
    gpa: str
    institution_name: str

    # Admission details
    desired_department: str
    desired_shift: str
    session: str

class ReviewerRef(BaseModel):
    id: str
    username: str

class Admission(BaseModel):
    id: str
    full_name_english: str
    full_name_bangla: Optional[str] = None
    email: Optional[str] = None
    mobile_student: Optional[str] = None
    status: AdmissionStatusEnum
    desired_department: Optional[DepartmentRef] = None
    desired_shift: Optional[str] = None
    session: Optional[str] = None
    gpa: Optional[str] = None
    submitted_at: Optional[str] = None
    reviewed_at: Optional[str] = None
    reviewed_by: Optional[ReviewerRef] = None
    rejection_reason: Optional[str] = None
    already_submitted: bool = False

    model_config = ConfigDict(use_enum_values=True)

class ExistingAdmission(BaseModel):
    has_admission: bool
    admission_id: Optional[str] = None
    status: Optional[str] = None

class DraftData(BaseModel):
    """Draft record as exchanged with the backend."""
    id: Optional[str] = None
    draft_data: Any = None
    current_step: Optional[int] = None
    saved_at: Optional[str] = None

class LocalDraft(BaseModel):
    """Draft record as mirrored into the local store."""
    formData: Any
    currentStep: Optional[int] = None
    savedAt: str

    def to_draft(self) -> DraftData:
        return DraftData(
            draft_data=self.formData,
            current_step=self.currentStep,
            saved_at=self.savedAt,
        )
