"""Role router: maps 'judge' / 'respondent' onto a configured provider."""

import logging

from config.config_loader import RoleConfig
from reverse_turing.providers.anthropic import AnthropicProvider
from reverse_turing.providers.base import AIProvider, Message
from reverse_turing.providers.mock import MockProvider
from reverse_turing.providers.openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[str, type[AIProvider]] = {
    "mock": MockProvider,
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


class ConfigError(Exception):
    """Raised when a role or provider is not configured."""


class LLMRouter:
    """Invoke a language model by role.

    Providers are instantiated on first use, so a misconfigured role only fails
    when something actually calls it.
    """

    def __init__(
        self,
        roles: dict[str, RoleConfig],
        provider_classes: dict[str, type[AIProvider]] | None = None,
    ) -> None:
        self._roles = roles
        self._provider_classes = provider_classes if provider_classes is not None else PROVIDER_CLASSES
        self._providers: dict[str, AIProvider] = {}

    def role_config(self, role: str) -> RoleConfig:
        cfg = self._roles.get(role)
        if cfg is None:
            raise ConfigError(f"Unknown role: {role}")
        return cfg

    def provider_for(self, role: str) -> AIProvider:
        if role in self._providers:
            return self._providers[role]
        cfg = self.role_config(role)
        provider_cls = self._provider_classes.get(cfg.provider)
        if provider_cls is None:
            known = ", ".join(sorted(self._provider_classes))
            raise ConfigError(f"Unknown LLM provider for role {role}: {cfg.provider} (known: {known})")
        provider = provider_cls(cfg)
        self._providers[role] = provider
        return provider

    def describe(self, role: str) -> str:
        cfg = self.role_config(role)
        return f"{cfg.provider}/{cfg.model}"

    async def invoke(self, role: str, system_prompt: str, messages: list[Message]) -> str:
        """Send a conversation to the model configured for ``role`` and return its text.

        Raises:
            ConfigError: If the role or its provider is unknown.
            ProviderError: If the provider call fails.
        """
        provider = self.provider_for(role)
        logger.debug("Invoking %s via %s with %d messages", role, provider.name(), len(messages))
        response = await provider.generate(system_prompt, messages)
        return response.content
