"""Factory pattern for creating LLM client instances."""

import logging

from bfhl_api.adapters.llm.base import AbstractLLMClient
from bfhl_api.adapters.llm.gemini_client import GeminiClient
from bfhl_api.adapters.llm.openai_client import OpenAIClient
from bfhl_api.core.config import settings
from bfhl_api.core.errors import ConfigurationAppError, ServiceUnavailableAppError

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("gemini", "openai")

_client: AbstractLLMClient | None = None
_client_config: tuple | None = None


def create_llm_client() -> AbstractLLMClient:
    """Instantiate the LLM client selected by ``LLM_PROVIDER``.

    Returns:
        AbstractLLMClient: Configured LLM client instance.

    Raises:
        ServiceUnavailableAppError: If no API key is configured.
        ConfigurationAppError: If the provider is unknown.
    """
    provider = settings.llm.provider.lower()

    if provider not in SUPPORTED_PROVIDERS:
        raise ConfigurationAppError(
            code="llm_unknown_provider",
            message=(
                f"Unknown LLM provider: '{provider}'. "
                f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
            ),
        )

    if not settings.llm.api_key:
        raise ServiceUnavailableAppError(
            code="ai_not_configured",
            message="AI service not configured",
            details={"provider": provider},
        )

    if provider == "gemini":
        return GeminiClient(
            api_key=settings.llm.api_key,
            model=settings.llm.model,
            timeout_seconds=settings.llm.timeout_seconds,
        )

    return OpenAIClient(
        api_key=settings.llm.api_key,
        model=settings.llm.model,
        base_url=settings.llm.base_url,
        timeout_seconds=settings.llm.timeout_seconds,
    )


def get_llm_client() -> AbstractLLMClient:
    """Return the process-wide LLM client, building it on first use.

    The client is rebuilt when the LLM settings change (primarily in tests).
    """
    global _client, _client_config

    config = (
        settings.llm.provider,
        settings.llm.model,
        settings.llm.api_key,
        settings.llm.base_url,
        settings.llm.timeout_seconds,
    )
    if _client is None or _client_config != config:
        _client = create_llm_client()
        _client_config = config
        logger.info(
            "llm.client_created",
            extra={"provider": _client.provider, "model": _client.model},
        )
    return _client
