"""Custom exception hierarchy for vibeguide.

Exception Hierarchy:
    VibeguideError (base)
    ├── ApiError - calls to the vibeguide backend API
    │   ├── ApiConnectionError (retryable)
    │   ├── ApiRateLimitError (retryable)
    │   └── ApiResponseError
    ├── ConfigurationError - settings/environment issues
    └── LayoutError - invalid grid layout parameters

API errors are raised inside the Twitch client and converted to empty results
at its public boundary, so the layout and navigation code never sees them.

Usage:
    from vibeguide.exceptions import ApiConnectionError

    try:
        response = await client.get(url)
    except httpx.TransportError as e:
        raise ApiConnectionError("Request failed", service="twitch", url=url) from e
"""

from typing import Any, Optional


class VibeguideError(Exception):
    """Base exception for all vibeguide errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, URLs)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# API Errors
# =============================================================================


class ApiError(VibeguideError):
    """Base exception for backend API calls."""

    pass


class ApiConnectionError(ApiError):
    """Failed to reach the backend API - typically retryable."""

    def __init__(
        self,
        message: str = "API connection failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        super().__init__(message, retryable=True, **context)


class ApiRateLimitError(ApiError):
    """Hit rate limit on the backend API - retryable with backoff."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        service: Optional[str] = None,
        retry_after: Optional[float] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        if retry_after is not None:
            context["retry_after"] = retry_after
        super().__init__(message, retryable=True, **context)


class ApiResponseError(ApiError):
    """The backend answered with an error status or an unreadable body."""

    def __init__(
        self,
        message: str = "API returned an invalid response",
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        **context: Any,
    ) -> None:
        if status_code is not None:
            context["status_code"] = status_code
        if body:
            context["body"] = body[:200] + "..." if len(body) > 200 else body
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(VibeguideError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)


# =============================================================================
# Layout Errors
# =============================================================================


class LayoutError(VibeguideError):
    """Grid layout parameters that cannot produce a valid row."""

    def __init__(
        self,
        message: str = "Invalid layout parameters",
        **context: Any,
    ) -> None:
        super().__init__(message, **context)
