"""Google Gemini LLM client adapter (google-genai SDK)."""

import asyncio
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from bfhl_api.adapters.llm.base import AbstractLLMClient
from bfhl_api.core.errors import (
    LLMAppError,
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMNetworkError,
)


def _is_auth_failure(exc: genai_errors.APIError) -> bool:
    # Gemini answers 400 INVALID_ARGUMENT (not 401) for a malformed key.
    if exc.code in (401, 403):
        return True
    return "api key" in str(exc).lower()


class GeminiClient(AbstractLLMClient):
    """Client for Gemini ``generate_content`` through the async SDK surface."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key (Google AI Studio).
            model: Model name (e.g., "gemini-2.5-flash").
            timeout_seconds: Request timeout; None keeps the SDK default.
        """
        http_options = None
        if timeout_seconds is not None:
            http_options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
        self.client = genai.Client(api_key=api_key, http_options=http_options)
        self.model = model

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Answer a prompt with a single ``generate_content`` call.

        Args:
            prompt: Prompt text.
            **kwargs: Optional ``temperature`` / ``max_output_tokens``.

        Returns:
            str: Concatenated text parts of the first candidate.
        """
        config = None
        generation = {k: kwargs[k] for k in ("temperature", "max_output_tokens") if k in kwargs}
        if generation:
            config = types.GenerateContentConfig(**generation)

        details = {"provider": self.provider, "model": self.model}
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
            text = response.text
        except (httpx.TransportError, asyncio.TimeoutError) as exc:
            raise LLMNetworkError(
                code="ai_network_error",
                message="AI service unreachable",
                details=details,
            ) from exc
        except genai_errors.APIError as exc:
            if _is_auth_failure(exc):
                raise LLMAuthenticationError(
                    code="ai_auth_error",
                    message="AI service authentication failed",
                    details={**details, "upstream_status": exc.code},
                ) from exc
            raise LLMAppError(
                code="ai_upstream_error",
                message="AI service error",
                details={**details, "upstream_status": exc.code},
            ) from exc
        except Exception as exc:
            raise LLMAppError(
                code="ai_upstream_error",
                message="AI service error",
                details=details,
            ) from exc

        if not text or not text.strip():
            raise LLMEmptyResponseError(
                code="ai_empty_response",
                message="AI service returned no answer",
                details=details,
            )
        return text
