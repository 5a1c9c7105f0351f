"""Shared pytest fixtures."""

import json
import random
from unittest.mock import AsyncMock

import pytest

from config.config_loader import AppConfig, GameConfig, PromptsConfig, RoleConfig, ServerConfig
from reverse_turing.game import GameService
from reverse_turing.llm import LLMRouter
from reverse_turing.models import ModelResponse, Round
from reverse_turing.providers.base import AIProvider, Message, ProviderError
from reverse_turing.recent import RecentQuestions


def make_role_config(role: str, provider: str = "mock", temperature: float = 0.7) -> RoleConfig:
    return RoleConfig(
        name=role,
        provider=provider,
        model="test-model-1",
        temperature=temperature,
        max_tokens=1024,
        timeout_sec=30,
        api_key_env="TEST_API_KEY",
    )


@pytest.fixture
def sample_prompts_config() -> PromptsConfig:
    return PromptsConfig(
        interview="You are the interview judge. Ask 3 questions.",
        respondent="You are an AI respondent.",
        verdict="You are the verdict judge. Reply in JSON.",
    )


@pytest.fixture
def mock_roles() -> dict[str, RoleConfig]:
    return {
        "judge": make_role_config("judge"),
        "respondent": make_role_config("respondent"),
    }


@pytest.fixture
def sample_app_config(mock_roles, sample_prompts_config) -> AppConfig:
    return AppConfig(
        game=GameConfig(rounds=3, recent_questions=5),
        server=ServerConfig(static_dir=None),
        roles=mock_roles,
        prompts=sample_prompts_config,
    )


@pytest.fixture
def human_history() -> list[Round]:
    """A human transcript at the start of round 3, last question unanswered."""
    return [
        Round("What is your favorite color?", "Blue"),
        Round("What do you enjoy doing?", "I enjoy solving problems"),
        Round("What is the meaning of existence?"),
    ]


class ScriptedProvider(AIProvider):
    """Test double AIProvider that records every call.

    ``replies`` is either a fixed string or a callable taking
    (system_prompt, messages) and returning the reply text.
    """

    def __init__(self, provider_name: str = "scripted", replies="Scripted reply") -> None:
        self._name = provider_name
        self._replies = replies
        self.calls: list[tuple[str, list[Message]]] = []

    def name(self) -> str:
        return self._name

    async def generate(self, system_prompt: str, messages: list[Message]) -> ModelResponse:
        self.calls.append((system_prompt, [dict(m) for m in messages]))
        content = self._replies(system_prompt, messages) if callable(self._replies) else self._replies
        return ModelResponse(
            provider=self._name,
            model="scripted-model",
            content=content,
            latency_sec=0.01,
            token_count=5,
        )


def verdict_json(human_is: str = "A", **extra) -> str:
    payload = {
        "humanIs": human_is,
        "analysisA": "Respondent A over-performs being a machine",
        "analysisB": "Respondent B just answers",
        "summary": "Imitating an AI is harder than it looks",
    }
    payload.update(extra)
    return json.dumps(payload)


class ScriptedJudge(ScriptedProvider):
    """Judge that numbers its questions and answers verdict requests with JSON."""

    def __init__(self, verdict: str | None = None) -> None:
        self._asked = 0
        self._verdict = verdict if verdict is not None else verdict_json("A")
        super().__init__("judge", self._reply)

    def _reply(self, system_prompt: str, messages: list[Message]) -> str:
        if "verdict" in system_prompt:
            return self._verdict
        self._asked += 1
        return f"Judge question {self._asked}?"


def make_router(judge: AIProvider, respondent: AIProvider, roles: dict[str, RoleConfig]) -> LLMRouter:
    router = LLMRouter(roles)
    router._providers = {"judge": judge, "respondent": respondent}
    return router


@pytest.fixture
def judge() -> ScriptedJudge:
    return ScriptedJudge()


@pytest.fixture
def respondent() -> ScriptedProvider:
    return ScriptedProvider("respondent", lambda _system, messages: f"AI answer to: {messages[-1]['content']}")


@pytest.fixture
def scripted_router(judge, respondent, mock_roles) -> LLMRouter:
    return make_router(judge, respondent, mock_roles)


@pytest.fixture
def game_service(scripted_router, sample_prompts_config) -> GameService:
    return GameService(
        scripted_router,
        sample_prompts_config,
        num_rounds=3,
        recent=RecentQuestions(5),
        rng=random.Random(1234),
    )


@pytest.fixture
def failing_provider() -> ScriptedProvider:
    provider = ScriptedProvider("failing")
    provider.generate = AsyncMock(side_effect=ProviderError("failing", "503 Service Unavailable"))  # type: ignore[method-assign]
    return provider
