from typing import Optional

from portal.core.cache import RoutineCache
from portal.core.config import Settings, settings as default_settings
from portal.services.admission import AdmissionService
from portal.services.api_client import ApiClient
from portal.services.cache_service import CacheService
from portal.services.cached_routine import CachedRoutineService
from portal.services.draft_persistence import DraftPersistence
from portal.services.local_store import FileLocalStore, LocalStore

class ServiceRegistry:
    """Wires one client, one routine cache and one local store into the services.

    Each registry owns its own cache, so separate registries never share
    cached routines.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[ApiClient] = None,
        cache: Optional[RoutineCache] = None,
        store: Optional[LocalStore] = None,
    ):
        self.settings = settings if settings is not None else default_settings
        self.client = client if client is not None else ApiClient(self.settings.API_BASE_URL, self.settings.REQUEST_TIMEOUT)
        self.routine_cache = cache if cache is not None else RoutineCache(ttl=self.settings.CACHE_TTL)
        self.store = store if store is not None else FileLocalStore(self.settings.DRAFT_STORAGE_DIR)

        self._routine = CachedRoutineService(self.client, self.routine_cache, enabled=self.settings.CACHE_ENABLED)
        self._cache = CacheService(self.routine_cache)
        self._drafts = DraftPersistence(self.client, self.store)
        self._admission = AdmissionService(self.client, self._drafts)

    @property
    def routine(self):
        return self._routine
    @property
    def cache(self):
        return self._cache
    @property
    def drafts(self):
        return self._drafts
    @property
    def admission(self):
        return self._admission

    async def aclose(self):
        await self.client.aclose()
