"""AI question answering on top of the LLM adapter layer."""

from __future__ import annotations

import logging
import time

from bfhl_api.adapters.llm.base import AbstractLLMClient
from bfhl_api.core.errors import LLMEmptyResponseError
from bfhl_api.utils.ai_text_cleaner import clean_ai_content

logger = logging.getLogger(__name__)

PROMPT_PREFIX = "Answer Question: "


def build_prompt(question: str) -> str:
    return f"{PROMPT_PREFIX}{question}"


class AIService:
    """Forward a question to the model once and return the cleaned answer.

    No retries, no streaming, no caching. Provider failures surface as the
    typed ``LLMAppError`` subclasses raised by the adapter.
    """

    def __init__(self, llm: AbstractLLMClient) -> None:
        self.llm = llm

    async def answer(self, question: str) -> str:
        """Ask the model and sanitize its reply.

        Args:
            question: Non-empty, stripped question text.

        Returns:
            str: Plain-text answer (may be empty if cleaning removed everything).

        Raises:
            LLMAppError: If the provider call fails or returns no text.
        """
        start = time.perf_counter()
        raw_answer = await self.llm.generate_text(build_prompt(question))

        content = (raw_answer or "").strip()
        if not content:
            raise LLMEmptyResponseError(
                code="ai_empty_response",
                message="AI service returned no answer",
                details={"provider": self.llm.provider, "model": self.llm.model},
            )

        cleaned = clean_ai_content(content)
        logger.info(
            "ai.answered",
            extra={
                "provider": self.llm.provider,
                "model": self.llm.model,
                "question": question,
                "raw_answer": content,
                "answer": cleaned,
                "raw_chars": len(content),
                "answer_chars": len(cleaned),
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return cleaned
