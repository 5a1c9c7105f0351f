"""Deterministic provider for tests and offline play. Never touches the network."""

from config.config_loader import RoleConfig
from reverse_turing.models import ModelResponse
from reverse_turing.providers.base import AIProvider, Message

MOCK_RESPONSE = "This is a mock LLM response."


class MockProvider(AIProvider):
    def __init__(self, config: RoleConfig) -> None:
        self._config = config

    def name(self) -> str:
        return "mock"

    async def generate(self, system_prompt: str, messages: list[Message]) -> ModelResponse:
        return ModelResponse(
            provider="mock",
            model=self._config.model,
            content=MOCK_RESPONSE,
            latency_sec=0.0,
            token_count=None,
        )
