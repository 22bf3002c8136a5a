from typing import Any, Mapping, Optional, Union
import logging

from portal.core.constants import (
    ADMISSION_DETAIL,
    ADMISSION_MY_ADMISSION,
    ADMISSION_SUBMIT,
    ADMISSION_UPLOAD_DOCUMENTS,
)
from portal.core.exceptions import ApiError, DocumentUploadError
from portal.schemas.admission import Admission, AdmissionFormData, DraftData, ExistingAdmission
from portal.services.api_client import ApiClient
from portal.services.draft_persistence import DraftPersistence

logger = logging.getLogger(__name__)

FileContent = Union[bytes, Any]


class AdmissionService:

    def __init__(self, client: ApiClient, drafts: DraftPersistence):
        self.client = client
        self.drafts = drafts

    async def submit_application(self, data: Union[AdmissionFormData, Mapping[str, Any]]) -> Admission:
        if isinstance(data, AdmissionFormData):
            payload = data.model_dump(mode="json")
        else:
            payload = dict(data)

        response = await self.client.post(ADMISSION_SUBMIT, payload)

        # The backend answers with the existing admission when one was already submitted
        if isinstance(response, dict) and response.get("admission"):
            admission = Admission.model_validate(response["admission"])
            return admission.model_copy(update={"already_submitted": True})
        return Admission.model_validate(response)

    async def upload_documents(self, admission_id: str, documents: Mapping[str, FileContent]):
        files = {
            f"documents[{field_name}]": content
            for field_name, content in documents.items()
            if content
        }
        await self.client.post(
            ADMISSION_UPLOAD_DOCUMENTS,
            data={"admission_id": admission_id},
            files=files,
        )
        logger.info(f"Uploaded {len(files)} document(s) for admission {admission_id}")

    async def submit_application_with_documents(
        self,
        data: Union[AdmissionFormData, Mapping[str, Any]],
        documents: Optional[Mapping[str, FileContent]] = None,
    ) -> Admission:
        admission = await self.submit_application(data)

        if admission.already_submitted:
            return admission

        if documents:
            try:
                await self.upload_documents(admission.id, documents)
            except ApiError as e:
                # The admission exists already; only the upload has to be retried
                logger.error(f"Document upload failed after admission submission: {e}")
                raise DocumentUploadError(admission.id, e) from e

        return admission

    async def get_my_admission(self) -> Admission:
        return Admission.model_validate(await self.client.get(ADMISSION_MY_ADMISSION))

    async def get_admission_by_id(self, admission_id: str) -> Admission:
        return Admission.model_validate(await self.client.get(ADMISSION_DETAIL.format(admission_id)))

    async def check_existing_admission(self) -> ExistingAdmission:
        try:
            admission = await self.get_my_admission()
        except ApiError as e:
            if e.is_not_found:
                return ExistingAdmission(has_admission=False)
            raise

        return ExistingAdmission(
            has_admission=True,
            admission_id=admission.id,
            status=admission.status
        )

    async def save_draft(self, draft_data: Any, current_step: int) -> DraftData:
        return await self.drafts.save(draft_data, current_step)

    async def get_draft(self) -> Optional[DraftData]:
        return await self.drafts.get()

    async def clear_draft(self) -> None:
        await self.drafts.clear()
