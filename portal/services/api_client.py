import httpx
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from portal.core.config import settings
from portal.core.exceptions import ApiError, NetworkError, RequestTimeoutError, ResponseParseError

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "csrftoken"
CSRF_HEADER_NAME = "X-CSRFToken"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class ApiClient:
    """Async JSON client for the portal backend.

    Every failure surfaces as an ApiError subclass: HTTP errors keep their
    status code, timeouts become RequestTimeoutError and unreachable hosts
    become NetworkError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    def build_url(self, endpoint: str) -> str:
        clean_endpoint = endpoint[1:] if endpoint.startswith("/") else endpoint
        return f"{self.base_url}/{clean_endpoint}"

    def _headers(self, is_json: bool = True) -> Dict[str, str]:
        headers = {}
        if is_json:
            headers["Content-Type"] = "application/json"

        csrf_token = self._get_client().cookies.get(CSRF_COOKIE_NAME)
        if csrf_token:
            headers[CSRF_HEADER_NAME] = csrf_token
        return headers

    async def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        client = self._get_client()
        url = self.build_url(endpoint)
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out after {self.timeout}s")
            raise RequestTimeoutError() from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise NetworkError(str(e) or type(e).__name__) from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        if not response.is_success:
            raise self._error_from_response(response)

        if response.status_code == 204:
            return {}

        try:
            return response.json()
        except ValueError:
            raise ResponseParseError(status_code=response.status_code)

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ApiError:
        fallback = f"HTTP {response.status_code}: {response.reason_phrase}"
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            return ApiError(fallback, status_code=response.status_code)

        return ApiError(
            body.get("error") or body.get("detail") or fallback,
            details=body.get("details"),
            status_code=response.status_code,
            field_errors=body.get("field_errors"),
        )

    async def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        query = None
        if params:
            query = {key: _query_value(value) for key, value in params.items() if value is not None}
        return await self._request("GET", endpoint, params=query, headers=self._headers())

    async def post(
        self,
        endpoint: str,
        data: Any = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        if files:
            return await self._request(
                "POST", endpoint, data=data, files=files, headers=self._headers(is_json=False)
            )
        return await self._request("POST", endpoint, json=data, headers=self._headers())

    async def put(self, endpoint: str, data: Any = None) -> Any:
        return await self._request("PUT", endpoint, json=data, headers=self._headers())

    async def patch(self, endpoint: str, data: Any = None) -> Any:
        return await self._request("PATCH", endpoint, json=data, headers=self._headers())

    async def delete(self, endpoint: str) -> Any:
        return await self._request("DELETE", endpoint, headers=self._headers())

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
