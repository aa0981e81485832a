"""Tests for commitor.llm.base and commitor.llm.exceptions modules."""

import os
from types import SimpleNamespace

import pytest

from commitor.exceptions import CommitorError
from commitor.llm.base import (
    HEALTH_CHECK_MAX_TOKENS,
    HEALTH_CHECK_PROMPT,
    LLMResult,
    classify_provider_error,
)
from commitor.llm.exceptions import (
    PROVIDER_ERRORS,
    EmptyGeneratedMessageError,
    GenerationAuthError,
    GenerationRateLimitedError,
    GenerationServerError,
    GenerationUnknownError,
    LLMError,
    MissingAPIKeyError,
    ProviderErrorCode,
)


class TestExceptions:
    """Tests for LLM exception classes."""

    def test_llm_error_is_commitor_error(self):
        """Test that LLMError is a CommitorError."""
        assert isinstance(LLMError("test error"), CommitorError)

    def test_missing_api_key_is_llm_error(self):
        """Test that MissingAPIKeyError is an LLMError."""
        assert isinstance(MissingAPIKeyError("missing key"), LLMError)

    def test_retryable_flags(self):
        assert not GenerationAuthError("x").retryable
        assert not GenerationRateLimitedError("x").retryable
        assert not MissingAPIKeyError("x").retryable
        assert GenerationServerError("x").retryable
        assert GenerationUnknownError("x").retryable
        assert EmptyGeneratedMessageError("x").retryable

    def test_provider_error_map(self):
        assert PROVIDER_ERRORS[ProviderErrorCode.INVALID_CREDENTIAL] is GenerationAuthError
        assert PROVIDER_ERRORS[ProviderErrorCode.RATE_LIMITED] is GenerationRateLimitedError
        assert PROVIDER_ERRORS[ProviderErrorCode.SERVER_ERROR] is GenerationServerError
        assert PROVIDER_ERRORS[ProviderErrorCode.UNKNOWN] is GenerationUnknownError

    def test_error_carries_provider_and_attempts(self):
        error = GenerationServerError("down", provider="OpenAI")

        assert error.provider == "OpenAI"
        assert error.attempts == 0
        assert str(error) == "down"


class TestClassifyProviderError:
    """Tests for classify_provider_error function."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (401, ProviderErrorCode.INVALID_CREDENTIAL),
            (403, ProviderErrorCode.INVALID_CREDENTIAL),
            (429, ProviderErrorCode.RATE_LIMITED),
            (500, ProviderErrorCode.SERVER_ERROR),
            (503, ProviderErrorCode.SERVER_ERROR),
            (400, ProviderErrorCode.UNKNOWN),
            (404, ProviderErrorCode.UNKNOWN),
        ],
    )
    def test_status_codes(self, status_error, status, expected):
        assert classify_provider_error(status_error(status)) == expected

    def test_status_attribute(self):
        error = Exception("x")
        error.status = 429
        assert classify_provider_error(error) == ProviderErrorCode.RATE_LIMITED

    def test_code_attribute(self):
        error = Exception("x")
        error.code = 403
        assert classify_provider_error(error) == ProviderErrorCode.INVALID_CREDENTIAL

    def test_non_integer_code_is_ignored(self):
        error = Exception("x")
        error.code = "invalid_api_key"
        assert classify_provider_error(error) == ProviderErrorCode.UNKNOWN

    def test_status_on_response(self):
        error = Exception("x")
        error.response = SimpleNamespace(status_code=502)
        assert classify_provider_error(error) == ProviderErrorCode.SERVER_ERROR

    def test_no_status(self):
        assert classify_provider_error(ConnectionError("reset")) == ProviderErrorCode.UNKNOWN


class TestGetApiKey:
    """Tests for BaseLLMProvider.get_api_key."""

    def test_explicit_key(self, make_provider):
        assert make_provider().get_api_key() == "fake-key"

    def test_env_var(self, make_provider, mocker):
        provider = make_provider()
        provider._api_key = None
        mocker.patch.dict(os.environ, {"FAKE_API_KEY": "env-key"})

        assert provider.get_api_key() == "env-key"

    def test_credentials_file(self, make_provider, mocker):
        provider = make_provider()
        provider._api_key = None
        mocker.patch.dict(os.environ, {}, clear=True)
        get_credential = mocker.patch(
            "commitor.global_config.get_credential", return_value="stored-key"
        )

        assert provider.get_api_key() == "stored-key"
        get_credential.assert_called_once_with("FAKE_API_KEY")

    def test_missing_key(self, make_provider, mocker):
        provider = make_provider()
        provider._api_key = None
        mocker.patch.dict(os.environ, {}, clear=True)
        mocker.patch("commitor.global_config.get_credential", return_value=None)

        with pytest.raises(MissingAPIKeyError) as exc_info:
            provider.get_api_key()

        assert "FAKE_API_KEY" in str(exc_info.value)
        assert "commitor config set-key fake" in str(exc_info.value)


class TestGenerate:
    """Tests for BaseLLMProvider.generate."""

    def test_returns_result(self, make_provider):
        provider = make_provider(["feat: x"])

        result = provider.generate("prompt", "Turkish")

        assert isinstance(result, LLMResult)
        assert result.text == "feat: x"
        assert result.model == "fake-model"
        system_prompt, user_prompt, max_tokens = provider.calls[0]
        assert "in Turkish language" in system_prompt
        assert user_prompt == "prompt"
        assert max_tokens == 100

    @pytest.mark.parametrize(
        "status,error_class",
        [
            (401, GenerationAuthError),
            (429, GenerationRateLimitedError),
            (500, GenerationServerError),
            (418, GenerationUnknownError),
        ],
    )
    def test_sdk_errors_are_mapped(self, make_provider, status_error, status, error_class):
        provider = make_provider([status_error(status)])

        with pytest.raises(error_class) as exc_info:
            provider.generate("prompt", "English")

        assert exc_info.value.provider == "Fake"

    def test_error_messages(self, make_provider, status_error):
        with pytest.raises(GenerationAuthError, match="Invalid Fake API key"):
            make_provider([status_error(401)]).generate("prompt", "English")

        with pytest.raises(GenerationUnknownError, match="Fake API call failed: socket closed"):
            make_provider([OSError("socket closed")]).generate("prompt", "English")

    def test_llm_errors_pass_through(self, make_provider):
        with pytest.raises(MissingAPIKeyError):
            make_provider([MissingAPIKeyError("no key")]).generate("prompt", "English")

    def test_empty_response(self, make_provider):
        with pytest.raises(EmptyGeneratedMessageError):
            make_provider(["   \n"]).generate("prompt", "English")


class TestHealthCheck:
    """Tests for BaseLLMProvider.health_check."""

    def test_ok(self, make_provider):
        provider = make_provider(["Hi!"])

        status = provider.health_check()

        assert status.ok
        assert status.error is None
        assert provider.calls == [("", HEALTH_CHECK_PROMPT, HEALTH_CHECK_MAX_TOKENS)]

    @pytest.mark.parametrize(
        "status,expected",
        [
            (401, ProviderErrorCode.INVALID_CREDENTIAL),
            (429, ProviderErrorCode.RATE_LIMITED),
            (500, ProviderErrorCode.SERVER_ERROR),
        ],
    )
    def test_failures_are_reported(self, make_provider, status_error, status, expected):
        health = make_provider([status_error(status)]).health_check()

        assert not health.ok
        assert health.error == expected
        assert health.message

    def test_missing_key_is_invalid_credential(self, make_provider):
        health = make_provider([MissingAPIKeyError("no key")]).health_check()

        assert health.error == ProviderErrorCode.INVALID_CREDENTIAL
        assert health.message == "no key"

    def test_empty_reply(self, make_provider):
        health = make_provider([""]).health_check()

        assert not health.ok
        assert health.error == ProviderErrorCode.UNKNOWN
