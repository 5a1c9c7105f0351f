"""Abstract base for all language-model providers."""

from abc import ABC, abstractmethod

from reverse_turing.models import ModelResponse

Message = dict[str, str]  # {"role": "user" | "assistant", "content": ...}


class ProviderError(Exception):
    """Raised when a provider call fails."""

    def __init__(self, provider_name: str, message: str) -> None:
        self.provider_name = provider_name
        super().__init__(f"[{provider_name}] {message}")


class AIProvider(ABC):
    """Abstract base for all language-model providers."""

    @abstractmethod
    def name(self) -> str:
        """Return the short provider name (e.g. 'openai', 'anthropic')."""
        ...

    @abstractmethod
    async def generate(self, system_prompt: str, messages: list[Message]) -> ModelResponse:
        """Generate the next assistant turn.

        Args:
            system_prompt: Instructions for the model's role.
            messages: Conversation so far as alternating user/assistant turns,
                ending with a user turn.

        Returns:
            ModelResponse dataclass with content and metadata.

        Raises:
            ProviderError: On API failure, timeout, or invalid response.
        """
        ...
