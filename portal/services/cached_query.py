import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from portal.core.cache import RoutineCache, build_key
from portal.core.config import settings
from portal.utils.filters import filter_tags

logger = logging.getLogger(__name__)


class CachedQueryService:
    """Read-through composition of a RoutineCache and a remote loader.

    Only values produced by a successful load are stored. A failing loader
    propagates its exception and leaves the cache untouched. Concurrent
    misses on the same key are not coalesced; each one loads and the last
    write wins.
    """

    def __init__(self, cache: RoutineCache, enabled: Optional[bool] = None):
        self.cache = cache
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled

    async def fetch_through(
        self,
        prefix: str,
        params: Optional[Mapping[str, Any]],
        loader: Callable[[], Awaitable[Any]],
    ) -> Any:
        if not self.enabled:
            return await loader()

        cache_key = build_key(prefix, params)

        cached_value = self.cache.get(cache_key)
        if cached_value is not None:
            return cached_value

        logger.debug(f"Cache MISS for key: {cache_key}")
        result = await loader()
        self.cache.set(cache_key, result, tags=filter_tags(params))
        return result
