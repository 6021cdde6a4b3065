"""Custom exception hierarchy for StudyBolt."""

from typing import Any


class StudyBoltError(Exception):
    """Base exception for all StudyBolt errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ----- Validation Errors -----


class ValidationError(StudyBoltError):
    """Caller input is malformed."""

    pass


class PayloadTooLargeError(ValidationError):
    """Request body exceeds the configured limit."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            message=f"Request body exceeds {max_bytes} bytes",
            details={"max_bytes": max_bytes},
        )


# ----- External Service Errors -----


class ExternalServiceError(StudyBoltError):
    """Error talking to a third-party service."""

    def __init__(
        self,
        message: str,
        service: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.service = service
        super().__init__(message, {"service": service, **(details or {})})


class UpstreamError(ExternalServiceError):
    """Third-party API answered with a non-success status."""

    def __init__(self, message: str, service: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, service, {"status_code": status_code})


class NetworkError(ExternalServiceError):
    """Transport failure reaching a third-party API (DNS, connect, timeout)."""

    pass


class CacheUnavailable(ExternalServiceError):
    """Cache store could not be reached."""

    def __init__(self, message: str) -> None:
        super().__init__(message, service="cache")


# ----- Streaming -----


class StreamCancelled(StudyBoltError):
    """The consumer of a completion stream went away."""

    def __init__(self) -> None:
        super().__init__("Stream was cancelled by the caller")
