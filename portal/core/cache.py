import json
import time
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from portal.core.config import settings
from portal.utils.filters import filter_tags

logger = logging.getLogger(__name__)


def build_key(prefix: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Deterministic cache key, independent of the order of ``params``."""
    if params is None:
        return prefix
    sorted_params = {key: params[key] for key in sorted(params)}
    serialized = json.dumps(
        sorted_params, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
    )
    return f"{prefix}:{serialized}"


@dataclass
class CacheEntry:
    data: Any
    timestamp: float
    key: str
    tags: frozenset = field(default_factory=frozenset)


class RoutineCache:
    """In-memory key -> entry map with a single fixed TTL.

    Entries live only as long as the instance. Build one per process (or per
    test) and hand it to the services that read through it.
    """

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.time):
        self.ttl = settings.CACHE_TTL if ttl is None else ttl
        self._clock = clock
        self._cache: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._cache.get(key)
        if entry is None:
            return None

        if self._clock() - entry.timestamp > self.ttl:
            del self._cache[key]
            logger.debug(f"Cache expired for key: {key}")
            return None

        logger.debug(f"Cache hit for key: {key}")
        return entry.data

    def set(self, key: str, data: Any, tags: Optional[Iterable] = None) -> None:
        self._cache[key] = CacheEntry(
            data=data,
            timestamp=self._clock(),
            key=key,
            tags=frozenset(tags or ()),
        )
        logger.debug(f"Cache set for key: {key}")

    def invalidate(self, pattern: Optional[str] = None) -> None:
        if not pattern:
            logger.info("Clearing all routine cache")
            self._cache.clear()
            return

        keys_to_delete = [key for key in self._cache if pattern in key]
        self._evict(keys_to_delete)

    def invalidate_tags(self, tags: Iterable) -> None:
        tags = frozenset(tags)
        keys_to_delete = [
            key for key, entry in self._cache.items()
            if entry.tags & tags
        ]
        self._evict(keys_to_delete)

    def invalidate_by_filters(self, filters: Mapping[str, Any]) -> None:
        tags = filter_tags(filters)
        if not tags:
            # Ambiguous intent: over-invalidate rather than serve stale data
            self.invalidate()
            return
        self.invalidate_tags(tags)

    def clear(self) -> None:
        self.invalidate()

    def get_stats(self) -> Dict[str, Any]:
        return {
            "size": len(self._cache),
            "keys": list(self._cache.keys())
        }

    def _evict(self, keys):
        for key in keys:
            del self._cache[key]
            logger.info(f"Cache invalidated for key: {key}")

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return key in self._cache
