"""OpenAI provider using openai SDK with native async."""

import asyncio
import logging
import os
import time

from openai import AsyncOpenAI

from config.config_loader import RoleConfig
from reverse_turing.models import ModelResponse
from reverse_turing.providers.base import AIProvider, Message, ProviderError

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """OpenAI provider via openai SDK. The system prompt travels as the first message."""

    def __init__(self, config: RoleConfig) -> None:
        self._config = config
        api_key_env = config.api_key_env or "OPENAI_API_KEY"
        api_key = os.environ.get(api_key_env, "").strip()
        if not api_key:
            raise ProviderError("openai", f"Missing API key: {api_key_env}")
        self._client = AsyncOpenAI(api_key=api_key)

    def name(self) -> str:
        return "openai"

    async def generate(self, system_prompt: str, messages: list[Message]) -> ModelResponse:
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self._config.model,
                    messages=[{"role": "system", "content": system_prompt}, *messages],
                    temperature=self._config.temperature,
                    max_tokens=self._config.max_tokens,
                ),
                timeout=self._config.timeout_sec,
            )
        except TimeoutError as exc:
            raise ProviderError("openai", f"Request timed out after {self._config.timeout_sec}s") from exc
        except Exception as exc:
            raise ProviderError("openai", f"API call failed: {exc}") from exc

        latency = time.monotonic() - start

        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message.content:
            raise ProviderError("openai", "Empty response content")

        token_count: int | None = None
        if response.usage:
            token_count = response.usage.total_tokens

        logger.info(
            "OpenAI %s (%s): %.2fs, %s tokens",
            self._config.name,
            self._config.model,
            latency,
            token_count,
        )

        return ModelResponse(
            provider="openai",
            model=self._config.model,
            content=choice.message.content,
            latency_sec=latency,
            token_count=token_count,
        )
