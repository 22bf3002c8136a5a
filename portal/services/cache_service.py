from typing import Any, Dict, Mapping, Optional, Union
from datetime import datetime, timezone
import logging

from pydantic import BaseModel

from portal.core.cache import RoutineCache, build_key
from portal.core.cache_config import CACHE_KEYS

logger = logging.getLogger(__name__)

class CacheService:
    """Cache management for write paths that change routine data server-side."""

    def __init__(self, cache: RoutineCache):
        self.cache = cache

    def invalidate(self, pattern: Optional[str] = None):
        self.cache.invalidate(pattern)

    def invalidate_by_filters(self, filters: Union[Mapping[str, Any], BaseModel]):
        before = len(self.cache)
        self.cache.invalidate_by_filters(filters)
        logger.info(f"Invalidated {before - len(self.cache)} routine cache entries for filters {filters}")

    def get_stats(self) -> Dict[str, Any]:
        return self.cache.get_stats()

    def clear(self):
        self.cache.clear()

    def health_check(self) -> bool:
        try:
            test_value = {"timestamp": datetime.now(timezone.utc).isoformat()}
            test_key = build_key(CACHE_KEYS["health_check"], test_value)

            self.cache.set(test_key, test_value)
            retrieved = self.cache.get(test_key)
            self.cache.invalidate(test_key)

            return retrieved == test_value
        except Exception as e:
            logger.error(f"Cache health check failed: {e}")
            return False
