"""LLM adapter layer - abstracts over generative-AI providers."""

from bfhl_api.adapters.llm.base import AbstractLLMClient
from bfhl_api.adapters.llm.factory import create_llm_client, get_llm_client
from bfhl_api.adapters.llm.gemini_client import GeminiClient
from bfhl_api.adapters.llm.openai_client import OpenAIClient

__all__ = [
    "AbstractLLMClient",
    "GeminiClient",
    "OpenAIClient",
    "create_llm_client",
    "get_llm_client",
]
