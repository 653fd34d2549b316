"""Integration tests for LLM adapter layer."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from google.genai import errors as genai_errors

from bfhl_api.adapters.llm import GeminiClient, OpenAIClient, create_llm_client, get_llm_client
from bfhl_api.adapters.llm import factory as factory_mod
from bfhl_api.core.config import settings
from bfhl_api.core.errors import (
    ConfigurationAppError,
    LLMAppError,
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMNetworkError,
    ServiceUnavailableAppError,
)

_REQUEST = httpx.Request("POST", "https://api.example.test/v1/chat/completions")


def _openai_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


class TestGeminiClient:
    """Gemini adapter with the SDK call mocked out."""

    @pytest.mark.asyncio
    async def test_generate_text_success(self) -> None:
        client = GeminiClient(api_key="test-key", model="gemini-2.5-flash")

        with patch.object(
            client.client.aio.models,
            "generate_content",
            new_callable=AsyncMock,
            return_value=MagicMock(text="Paris"),
        ) as mock_generate:
            result = await client.generate_text("Answer Question: Capital of France?")

        assert result == "Paris"
        call_kwargs = mock_generate.call_args.kwargs
        assert call_kwargs["model"] == "gemini-2.5-flash"
        assert call_kwargs["contents"] == "Answer Question: Capital of France?"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", "   "])
    async def test_empty_text_raises(self, text) -> None:
        client = GeminiClient(api_key="test-key")

        with patch.object(
            client.client.aio.models,
            "generate_content",
            new_callable=AsyncMock,
            return_value=MagicMock(text=text),
        ):
            with pytest.raises(LLMEmptyResponseError):
                await client.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_unauthorized_maps_to_auth_error(self) -> None:
        client = GeminiClient(api_key="bad-key")
        error = genai_errors.ClientError(
            403,
            {"error": {"code": 403, "message": "Permission denied", "status": "PERMISSION_DENIED"}},
        )

        with patch.object(
            client.client.aio.models, "generate_content", new_callable=AsyncMock, side_effect=error
        ):
            with pytest.raises(LLMAuthenticationError) as exc:
                await client.generate_text("prompt")
        assert exc.value.code == "ai_auth_error"

    @pytest.mark.asyncio
    async def test_invalid_key_maps_to_auth_error(self) -> None:
        client = GeminiClient(api_key="bad-key")
        error = genai_errors.ClientError(
            400,
            {
                "error": {
                    "code": 400,
                    "message": "API key not valid. Please pass a valid API key.",
                    "status": "INVALID_ARGUMENT",
                }
            },
        )

        with patch.object(
            client.client.aio.models, "generate_content", new_callable=AsyncMock, side_effect=error
        ):
            with pytest.raises(LLMAuthenticationError):
                await client.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_server_error_maps_to_upstream_error(self) -> None:
        client = GeminiClient(api_key="test-key")
        error = genai_errors.ServerError(
            503,
            {"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}},
        )

        with patch.object(
            client.client.aio.models, "generate_content", new_callable=AsyncMock, side_effect=error
        ):
            with pytest.raises(LLMAppError) as exc:
                await client.generate_text("prompt")
        assert type(exc.value) is LLMAppError
        assert exc.value.message == "AI service error"

    @pytest.mark.asyncio
    async def test_transport_error_maps_to_network_error(self) -> None:
        client = GeminiClient(api_key="test-key")

        with patch.object(
            client.client.aio.models,
            "generate_content",
            new_callable=AsyncMock,
            side_effect=httpx.ConnectError("connection refused"),
        ):
            with pytest.raises(LLMNetworkError) as exc:
                await client.generate_text("prompt")
        assert exc.value.code == "ai_network_error"


class TestOpenAIClientIntegration:
    """OpenAI adapter with mocked API calls."""

    @pytest.mark.asyncio
    async def test_generate_text_success(self) -> None:
        client = OpenAIClient(api_key="test-key-123", model="gpt-4o-mini")

        with patch.object(
            client.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_openai_response("Paris"),
        ) as mock_create:
            result = await client.generate_text("Capital of France?", temperature=0.1)

        assert result == "Paris"
        call_kwargs = mock_create.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert call_kwargs["messages"] == [{"role": "user", "content": "Capital of France?"}]
        assert call_kwargs["temperature"] == 0.1

    @pytest.mark.asyncio
    async def test_empty_content_raises(self) -> None:
        client = OpenAIClient(api_key="test-key", model="gpt-4o-mini")

        with patch.object(
            client.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_openai_response(None),
        ):
            with pytest.raises(LLMEmptyResponseError):
                await client.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_connection_error_maps_to_network_error(self) -> None:
        client = OpenAIClient(api_key="test-key", model="gpt-4o-mini")

        with patch.object(
            client.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            side_effect=openai.APIConnectionError(request=_REQUEST),
        ):
            with pytest.raises(LLMNetworkError):
                await client.generate_text("prompt")

    @pytest.mark.asyncio
    async def test_authentication_error_maps_to_auth_error(self) -> None:
        client = OpenAIClient(api_key="test-key", model="gpt-4o-mini")
        error = openai.AuthenticationError(
            "Incorrect API key provided",
            response=httpx.Response(401, request=_REQUEST),
            body=None,
        )

        with patch.object(
            client.client.chat.completions, "create", new_callable=AsyncMock, side_effect=error
        ):
            with pytest.raises(LLMAuthenticationError) as exc:
                await client.generate_text("prompt")
        assert exc.value.details["upstream_status"] == 401


class TestLLMFactory:
    """LLM client factory and process-wide cache."""

    @pytest.fixture(autouse=True)
    def _reset_cache(self, monkeypatch):
        monkeypatch.setattr(factory_mod, "_client", None)
        monkeypatch.setattr(factory_mod, "_client_config", None)

    def test_creates_gemini_client_by_default(self, monkeypatch) -> None:
        monkeypatch.setattr(settings.llm, "provider", "gemini")
        monkeypatch.setattr(settings.llm, "model", "gemini-2.5-flash")
        monkeypatch.setattr(settings.llm, "api_key", "test-key")

        client = create_llm_client()

        assert isinstance(client, GeminiClient)
        assert client.model == "gemini-2.5-flash"

    def test_creates_openai_client(self, monkeypatch) -> None:
        monkeypatch.setattr(settings.llm, "provider", "OpenAI")
        monkeypatch.setattr(settings.llm, "model", "gpt-4o-mini")
        monkeypatch.setattr(settings.llm, "api_key", "test-key")

        client = create_llm_client()

        assert isinstance(client, OpenAIClient)
        assert client.model == "gpt-4o-mini"

    def test_missing_api_key_is_service_unavailable(self, monkeypatch) -> None:
        monkeypatch.setattr(settings.llm, "provider", "gemini")
        monkeypatch.setattr(settings.llm, "api_key", None)

        with pytest.raises(ServiceUnavailableAppError, match="AI service not configured") as exc:
            create_llm_client()
        assert exc.value.code == "ai_not_configured"

    def test_unknown_provider_is_configuration_error(self, monkeypatch) -> None:
        monkeypatch.setattr(settings.llm, "provider", "unknown-provider")
        monkeypatch.setattr(settings.llm, "api_key", "test-key")

        with pytest.raises(ConfigurationAppError, match="Unknown LLM provider") as exc:
            create_llm_client()
        assert exc.value.code == "llm_unknown_provider"

    def test_get_llm_client_caches_until_settings_change(self, monkeypatch) -> None:
        monkeypatch.setattr(settings.llm, "provider", "gemini")
        monkeypatch.setattr(settings.llm, "api_key", "test-key")

        first = get_llm_client()
        assert get_llm_client() is first

        monkeypatch.setattr(settings.llm, "api_key", "rotated-key")
        assert get_llm_client() is not first
