from portal.core.cache import build_key
from portal.schemas.routine import RoutineFilters
from portal.services.cache_service import CacheService
from portal.utils.filters import filter_tags


def populate(cache, *param_sets):
    for params in param_sets:
        cache.set(build_key("getRoutine", params), {"count": 0}, tags=filter_tags(params))


def test_invalidate_by_pattern(routine_cache):
    service = CacheService(routine_cache)
    populate(routine_cache, {"department": "CSE"}, {"department": "EEE"})

    service.invalidate("CSE")

    assert service.get_stats()["keys"] == ['getRoutine:{"department":"EEE"}']

def test_invalidate_by_filters_accepts_models(routine_cache):
    service = CacheService(routine_cache)
    populate(routine_cache, {"shift": "Morning"}, {"shift": "Evening", "semester": 2})

    service.invalidate_by_filters(RoutineFilters(shift="Evening"))

    assert service.get_stats()["keys"] == ['getRoutine:{"shift":"Morning"}']

def test_clear(routine_cache):
    service = CacheService(routine_cache)
    populate(routine_cache, {"department": "CSE"}, {"semester": 1})

    service.clear()

    assert service.get_stats() == {"size": 0, "keys": []}

def test_health_check_leaves_no_entries(routine_cache):
    service = CacheService(routine_cache)
    populate(routine_cache, {"department": "CSE"})

    assert service.health_check() is True
    assert service.get_stats()["size"] == 1
