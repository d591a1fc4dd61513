"""Tests for credential checks and provider error mapping."""

from __future__ import annotations

import httpx
import pytest
from google.genai import errors as genai_errors

from naturelens.identify.diagnostics import (
    GENERIC_FAILURE_MESSAGE,
    check_credentials,
    describe_transport_error,
    error_text,
    is_placeholder_key,
)
from naturelens.identify.errors import ConfigurationError


class TestCredentials:
    @pytest.mark.parametrize(
        "key",
        [None, "", "   ", "your_api_key_here", "YOUR-API-KEY", "<GEMINI_API_KEY>", "changeme", "xxxxxxxx"],
    )
    def test_placeholders_detected(self, key: str | None) -> None:
        assert is_placeholder_key(key) is True

    def test_real_looking_key_accepted(self) -> None:
        assert is_placeholder_key("AIzaSyD-realistic-looking-key") is False

    def test_check_credentials_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="NATURELENS_GEMINI_API_KEY") as exc_info:
            check_credentials("your_api_key_here")
        assert "configured" in exc_info.value.message

    def test_check_credentials_passes_for_real_key(self) -> None:
        check_credentials("AIzaSyD-realistic-looking-key")


class TestDescribeTransportError:
    def test_invalid_api_key_gets_specific_message(self) -> None:
        exc = RuntimeError("400 Bad Request. API key not valid. Please pass a valid API key.")
        message = describe_transport_error(exc)
        assert message != GENERIC_FAILURE_MESSAGE
        assert "API key" in message

    def test_match_found_in_cause_chain(self) -> None:
        try:
            try:
                raise ValueError("API key not valid. Please pass a valid API key.")
            except ValueError as inner:
                raise RuntimeError("generate failed") from inner
        except RuntimeError as outer:
            message = describe_transport_error(outer)
        assert "API key" in message
        assert message != GENERIC_FAILURE_MESSAGE

    def test_provider_api_error(self) -> None:
        exc = genai_errors.ClientError(
            400,
            {
                "error": {
                    "code": 400,
                    "message": "API key not valid. Please pass a valid API key.",
                    "status": "INVALID_ARGUMENT",
                }
            },
        )
        assert "not valid" in describe_transport_error(exc)

    def test_quota_exhausted(self) -> None:
        exc = genai_errors.ClientError(
            429,
            {"error": {"code": 429, "message": "Resource has been exhausted", "status": "RESOURCE_EXHAUSTED"}},
        )
        assert "quota" in describe_transport_error(exc).lower()

    def test_network_failure(self) -> None:
        exc = httpx.ConnectError("[Errno -2] Name or service not known")
        assert "network" in describe_transport_error(exc).lower()

    def test_unknown_error_uses_generic_message(self) -> None:
        assert describe_transport_error(RuntimeError("boom")) == GENERIC_FAILURE_MESSAGE

    def test_error_text_survives_cyclic_context(self) -> None:
        a = RuntimeError("a")
        b = RuntimeError("b")
        a.__context__ = b
        b.__context__ = a
        text = error_text(a)
        assert "a" in text
        assert "b" in text
