"""Tests for the vibeguide exception hierarchy."""

from vibeguide.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiRateLimitError,
    ApiResponseError,
    ConfigurationError,
    LayoutError,
    VibeguideError,
)


class TestVibeguideError:
    def test_message_only(self):
        err = VibeguideError("something broke")

        assert str(err) == "something broke"
        assert err.context == {}
        assert not err.retryable

    def test_context_in_message(self):
        err = VibeguideError("lookup failed", category_id="509658", limit=20)
        assert str(err) == "lookup failed (category_id='509658', limit=20)"


class TestApiErrors:
    def test_hierarchy(self):
        for cls in (ApiConnectionError, ApiRateLimitError, ApiResponseError):
            assert issubclass(cls, ApiError)
            assert issubclass(cls, VibeguideError)

    def test_connection_error_is_retryable(self):
        err = ApiConnectionError(service="vibeguide-api")

        assert err.retryable
        assert err.context == {"service": "vibeguide-api"}

    def test_rate_limit_retry_after(self):
        err = ApiRateLimitError(service="vibeguide-api", retry_after=2.5)

        assert err.retryable
        assert err.context["retry_after"] == 2.5

    def test_response_body_truncated(self):
        err = ApiResponseError(status_code=500, body="x" * 500)

        assert err.context["status_code"] == 500
        assert err.context["body"] == "x" * 200 + "..."
        assert not err.retryable


class TestOtherErrors:
    def test_configuration_error_setting(self):
        err = ConfigurationError("bad value", setting="VIBEGUIDE_AUTO_SCROLL")

        assert isinstance(err, VibeguideError)
        assert err.context["setting"] == "VIBEGUIDE_AUTO_SCROLL"

    def test_layout_error_default_message(self):
        err = LayoutError(max_width=0)
        assert str(err) == "Invalid layout parameters (max_width=0)"
