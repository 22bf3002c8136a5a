"""Routine cache configuration"""

# Cache key prefixes, one per read-through query
CACHE_KEYS = {
    "my_routine": "getMyRoutine",
    "routine_list": "getRoutine",
    "routine_detail": "getRoutineById",
    "health_check": "healthCheck",
}

# Filter dimensions an entry is tagged with when it is stored.
# invalidate_by_filters only looks at these.
FILTER_DIMENSIONS = ("department", "semester", "shift")
