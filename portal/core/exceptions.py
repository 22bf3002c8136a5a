from typing import Any, Dict, List, Optional


def _get_error_code(status_code: Optional[int]) -> str:
    if status_code is None:
        return "NETWORK_ERROR"
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
        501: "NOT_IMPLEMENTED",
        502: "BAD_GATEWAY",
        503: "SERVICE_UNAVAILABLE",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")


class ApiError(Exception):
    """Structured failure raised for every unsuccessful backend call."""

    def __init__(
        self,
        error: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
        field_errors: Optional[Dict[str, List[str]]] = None,
    ):
        super().__init__(error)
        self.error = error
        self.details = details
        self.status_code = status_code
        self.field_errors = field_errors or {}

    @property
    def code(self) -> str:
        return _get_error_code(self.status_code)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "details": self.details,
            "status_code": self.status_code,
            "field_errors": self.field_errors,
            "code": self.code,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error={self.error!r}, status_code={self.status_code!r})"


class RequestTimeoutError(ApiError):
    def __init__(self):
        super().__init__("Request timeout", details="The request took too long to complete")

    @property
    def code(self) -> str:
        return "REQUEST_TIMEOUT"


class NetworkError(ApiError):
    def __init__(self, details: Optional[str] = None):
        super().__init__("Network error", details=details)


class ResponseParseError(ApiError):
    def __init__(self, status_code: Optional[int] = None):
        super().__init__(
            "Failed to parse response",
            details="The server returned an invalid response",
            status_code=status_code,
        )


class DocumentUploadError(Exception):
    """The admission was created but its documents could not be uploaded."""

    def __init__(self, admission_id: str, cause: Exception):
        super().__init__(
            "Admission submitted successfully, but document upload failed. "
            "Please try uploading documents again from your dashboard."
        )
        self.admission_id = admission_id
        self.cause = cause


def get_error_message(error: BaseException) -> str:
    if isinstance(error, ApiError):
        return error.details or error.error
    if str(error):
        return str(error)
    return "An unexpected error occurred"
