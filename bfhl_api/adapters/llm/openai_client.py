"""OpenAI LLM client adapter."""

from typing import Any

import openai
from openai import AsyncOpenAI

from bfhl_api.adapters.llm.base import AbstractLLMClient
from bfhl_api.core.errors import (
    LLMAppError,
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMNetworkError,
)


class OpenAIClient(AbstractLLMClient):
    """Client for OpenAI (or OpenAI-compatible) chat completions.

    Uses the official OpenAI Python SDK with async support.
    """

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize OpenAI async client.

        Args:
            api_key: OpenAI API key for authentication.
            model: Model name (e.g., "gpt-4o-mini").
            base_url: Optional custom base URL for OpenAI API.
            timeout_seconds: Request timeout; None keeps the SDK default.
        """
        client_kwargs: dict[str, Any] = {"api_key": api_key, "base_url": base_url}
        if timeout_seconds is not None:
            client_kwargs["timeout"] = timeout_seconds
        self.client = AsyncOpenAI(**client_kwargs)
        self.model = model

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Answer a prompt with a single chat completion.

        Args:
            prompt: User prompt to send to the model.
            **kwargs: Provider options (temperature, max_tokens, top_p, seed).

        Returns:
            str: Text content of the first choice.
        """
        request_params: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }

        allowed_params = {"temperature", "max_tokens", "top_p", "seed"}
        for param in allowed_params:
            if param in kwargs:
                request_params[param] = kwargs[param]

        details = {"provider": self.provider, "model": self.model}
        try:
            response = await self.client.chat.completions.create(**request_params)
        except openai.APIConnectionError as exc:
            raise LLMNetworkError(
                code="ai_network_error",
                message="AI service unreachable",
                details=details,
            ) from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise LLMAuthenticationError(
                code="ai_auth_error",
                message="AI service authentication failed",
                details={**details, "upstream_status": exc.status_code},
            ) from exc
        except openai.OpenAIError as exc:
            raise LLMAppError(
                code="ai_upstream_error",
                message="AI service error",
                details=details,
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise LLMEmptyResponseError(
                code="ai_empty_response",
                message="AI service returned no answer",
                details=details,
            )
        return content
