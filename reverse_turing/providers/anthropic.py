"""Anthropic Claude provider using anthropic SDK with native async."""

import asyncio
import logging
import os
import time

import anthropic as anthropic_sdk

from config.config_loader import RoleConfig
from reverse_turing.models import ModelResponse
from reverse_turing.providers.base import AIProvider, Message, ProviderError

logger = logging.getLogger(__name__)

# The messages API rejects temperatures above 1.0.
MAX_TEMPERATURE = 1.0


class AnthropicProvider(AIProvider):
    """Anthropic Claude provider via anthropic SDK."""

    def __init__(self, config: RoleConfig) -> None:
        self._config = config
        api_key_env = config.api_key_env or "ANTHROPIC_API_KEY"
        api_key = os.environ.get(api_key_env, "").strip()
        if not api_key:
            raise ProviderError("anthropic", f"Missing API key: {api_key_env}")
        self._client = anthropic_sdk.AsyncAnthropic(api_key=api_key)

    def name(self) -> str:
        return "anthropic"

    async def generate(self, system_prompt: str, messages: list[Message]) -> ModelResponse:
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._client.messages.create(
                    model=self._config.model,
                    system=system_prompt,
                    messages=messages,
                    max_tokens=self._config.max_tokens,
                    temperature=min(self._config.temperature, MAX_TEMPERATURE),
                ),
                timeout=self._config.timeout_sec,
            )
        except TimeoutError as exc:
            raise ProviderError("anthropic", f"Request timed out after {self._config.timeout_sec}s") from exc
        except Exception as exc:
            raise ProviderError("anthropic", f"API call failed: {exc}") from exc

        latency = time.monotonic() - start

        if not response.content:
            raise ProviderError("anthropic", "Empty response content")

        text_blocks = [b.text for b in response.content if b.type == "text"]
        if not text_blocks:
            raise ProviderError("anthropic", "No text blocks in response")

        content = "\n".join(text_blocks)

        token_count: int | None = None
        if response.usage:
            token_count = response.usage.input_tokens + response.usage.output_tokens

        logger.info(
            "Anthropic %s (%s): %.2fs, %s tokens",
            self._config.name,
            self._config.model,
            latency,
            token_count,
        )

        return ModelResponse(
            provider="anthropic",
            model=self._config.model,
            content=content,
            latency_sec=latency,
            token_count=token_count,
        )
