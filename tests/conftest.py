import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import httpx
import pytest
from portal.core.cache import RoutineCache
from portal.services.api_client import ApiClient
from portal.services.local_store import MemoryLocalStore
from tests.helpers.fakes import FakeApiClient, FakeClock


@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def routine_cache(clock):
    return RoutineCache(ttl=300, clock=clock)

@pytest.fixture
def fake_client():
    return FakeApiClient()

@pytest.fixture
def local_store():
    return MemoryLocalStore()

@pytest.fixture
def mock_api():
    """ApiClient backed by httpx.MockTransport; set ``mock_api.state["handler"]`` to script responses."""
    state = {"handler": None, "requests": []}

    def dispatch(request: httpx.Request):
        state["requests"].append(request)
        return state["handler"](request)

    client = ApiClient(base_url="http://portal.test/api", timeout=5, transport=httpx.MockTransport(dispatch))
    client.state = state
    return client
