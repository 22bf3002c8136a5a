from typing import Any, Dict, Mapping, Optional, Union
import logging

from portal.core.cache import RoutineCache
from portal.core.cache_config import CACHE_KEYS
from portal.core.constants import ROUTINE_DETAIL, ROUTINE_LIST, ROUTINE_MY_ROUTINE
from portal.schemas.routine import (
    ClassRoutine,
    MyRoutineParams,
    MyRoutineResponse,
    PaginatedResponse,
    RoutineFilters,
)
from portal.services.api_client import ApiClient
from portal.services.cached_query import CachedQueryService
from portal.utils.filters import sanitize_filters

logger = logging.getLogger(__name__)


def _filter_params(filters: Union[RoutineFilters, Mapping[str, Any], None]) -> Optional[Dict[str, Any]]:
    if filters is None:
        return None
    if isinstance(filters, RoutineFilters):
        return filters.model_dump(exclude_none=True, mode="json")
    return {key: value for key, value in filters.items() if value is not None}


class CachedRoutineService(CachedQueryService):

    def __init__(self, client: ApiClient, cache: RoutineCache, enabled: Optional[bool] = None):
        super().__init__(cache, enabled=enabled)
        self.client = client

    async def get_my_routine(
        self, params: Union[MyRoutineParams, Mapping[str, Any], None] = None
    ) -> MyRoutineResponse:
        sanitized_params = sanitize_filters(params)

        async def load():
            data = await self.client.get(ROUTINE_MY_ROUTINE, sanitized_params)
            return MyRoutineResponse.model_validate(data)

        return await self.fetch_through(CACHE_KEYS["my_routine"], sanitized_params, load)

    async def get_routine(
        self, filters: Union[RoutineFilters, Mapping[str, Any], None] = None
    ) -> PaginatedResponse[ClassRoutine]:
        params = _filter_params(filters)

        async def load():
            data = await self.client.get(ROUTINE_LIST, params)
            return PaginatedResponse[ClassRoutine].model_validate(data)

        return await self.fetch_through(CACHE_KEYS["routine_list"], params, load)

    async def get_routine_by_id(self, routine_id: str) -> ClassRoutine:

        async def load():
            data = await self.client.get(ROUTINE_DETAIL.format(routine_id))
            return ClassRoutine.model_validate(data)

        return await self.fetch_through(CACHE_KEYS["routine_detail"], {"id": routine_id}, load)
