"""Draft persistence across the backend and a local durable store.

Every save attempt is mirrored locally before its outcome reaches the caller,
and reads fall back to the local mirror when the backend has no draft or
cannot be reached. The local copy therefore never lags the last save that was
attempted, while the server copy may.
"""
from datetime import datetime, timezone
from typing import Any, Callable, Optional
import logging

from pydantic import BaseModel, ValidationError

from portal.core.constants import (
    ADMISSION_CLEAR_DRAFT,
    ADMISSION_GET_DRAFT,
    ADMISSION_SAVE_DRAFT,
    DRAFT_STORAGE_KEY,
)
from portal.core.exceptions import ApiError
from portal.schemas.admission import DraftData, LocalDraft
from portal.services.api_client import ApiClient
from portal.services.local_store import LocalStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DraftPersistence:

    def __init__(
        self,
        client: ApiClient,
        store: LocalStore,
        storage_key: str = DRAFT_STORAGE_KEY,
        save_endpoint: str = ADMISSION_SAVE_DRAFT,
        get_endpoint: str = ADMISSION_GET_DRAFT,
        clear_endpoint: str = ADMISSION_CLEAR_DRAFT,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.client = client
        self.store = store
        self.storage_key = storage_key
        self.save_endpoint = save_endpoint
        self.get_endpoint = get_endpoint
        self.clear_endpoint = clear_endpoint
        self._clock = clock

    def _persist_locally(self, draft_data: Any, current_step: Optional[int], saved_at: Optional[str] = None):
        local_draft = LocalDraft(
            formData=draft_data,
            currentStep=current_step,
            savedAt=saved_at or self._clock().isoformat(),
        )
        self.store.write(self.storage_key, local_draft.model_dump_json())

    def read_local(self) -> Optional[DraftData]:
        """The local mirror, or None when it is missing or unreadable."""
        try:
            raw = self.store.read(self.storage_key)
        except UnicodeDecodeError as e:
            logger.warning(f"Ignoring undecodable local draft '{self.storage_key}': {e.reason}")
            return None
        if raw is None:
            return None
        try:
            return LocalDraft.model_validate_json(raw).to_draft()
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable local draft '{self.storage_key}': {e.error_count()} error(s)")
            return None

    async def save(self, draft_data: Any, current_step: int) -> DraftData:
        if isinstance(draft_data, BaseModel):
            draft_data = draft_data.model_dump(mode="json")

        try:
            response = await self.client.post(self.save_endpoint, {
                "draft_data": draft_data,
                "current_step": current_step
            })
        except Exception as e:
            logger.error(f"Failed to save draft to server, keeping local copy: {e}")
            self._persist_locally(draft_data, current_step)
            raise

        # Keep a local backup even when the server save succeeds
        self._persist_locally(draft_data, current_step)
        return DraftData.model_validate(response or {})

    async def get(self) -> Optional[DraftData]:
        try:
            response = await self.client.get(self.get_endpoint)
        except ApiError as e:
            if e.is_not_found:
                logger.info("No draft on server, falling back to local copy")
                return self.read_local()

            offline_draft = self.read_local()
            if offline_draft is not None:
                logger.warning(f"Server draft unavailable ({e.code}), using local copy")
                return offline_draft
            raise

        if not isinstance(response, dict) or response.get("draft_data") is None:
            return None

        draft = DraftData.model_validate(response)
        # Cache the server draft locally for offline resumes
        self._persist_locally(draft.draft_data, draft.current_step, draft.saved_at)
        return draft

    async def clear(self) -> None:
        try:
            await self.client.delete(self.clear_endpoint)
        except ApiError as e:
            if e.is_not_found:
                logger.info("No draft on server to clear")
            else:
                logger.error(f"Failed to clear draft from server: {e}")
        except Exception as e:
            logger.error(f"Failed to clear draft from server: {e}")
        finally:
            self.store.remove(self.storage_key)
