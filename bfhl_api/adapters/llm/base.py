from abc import ABC, abstractmethod
from typing import Any


class AbstractLLMClient(ABC):
	"""Interface for LLM clients that answer a prompt with free text."""

	provider: str = "unknown"
	model: str

	@abstractmethod
	async def generate_text(self, prompt: str, **kwargs: Any) -> str:
		"""Send a single prompt to the model and return its raw text answer.

		One call, no retry and no streaming.

		Args:
			prompt: Full prompt to send to the model.
			**kwargs: Provider-specific options (e.g., temperature).

		Returns:
			str: Non-empty text produced by the model.

		Raises:
			LLMNetworkError: If the provider could not be reached or timed out.
			LLMAuthenticationError: If the provider rejected the credential.
			LLMEmptyResponseError: If the provider returned no text.
			LLMAppError: For any other provider failure.
		"""
		...
