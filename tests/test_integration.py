"""Integration tests — real API calls, no mocks. Requires .env with the configured providers' keys."""

import os

import pytest
from dotenv import load_dotenv

load_dotenv()

# Skip entire module unless both vendor keys are set
_AVAILABLE_KEYS = [k for k in ["OPENAI_API_KEY", "ANTHROPIC_API_KEY"] if os.environ.get(k, "").strip()]
pytestmark = pytest.mark.integration

if len(_AVAILABLE_KEYS) < 2:
    pytestmark = pytest.mark.skip(reason=f"Need OPENAI_API_KEY and ANTHROPIC_API_KEY, found {len(_AVAILABLE_KEYS)}")


async def test_full_game_against_real_models(monkeypatch):
    """Judge on OpenAI, respondent on Anthropic; play three canned answers through to a verdict."""
    from config.config_loader import load_config
    from reverse_turing.game import GameService
    from reverse_turing.llm import LLMRouter
    from reverse_turing.models import AdvanceResult, GameResult, Round

    monkeypatch.setenv("JUDGE_PROVIDER", "openai")
    monkeypatch.setenv("JUDGE_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("RESPONDENT_PROVIDER", "anthropic")
    monkeypatch.setenv("RESPONDENT_MODEL", "claude-haiku-4-5")
    config = load_config()
    service = GameService(LLMRouter(config.roles), config.prompts, num_rounds=config.game.rounds)

    start = await service.start()
    assert start.question
    history = [Round(start.question)]
    round_number = start.round

    canned = ["I am a large language model.", "I do not have preferences.", "I generate text from patterns."]
    for answer in canned:
        result = await service.answer(answer, round_number, history)
        if isinstance(result, AdvanceResult):
            assert result.question
            history = result.history + [Round(result.question)]
            round_number = result.round

    assert isinstance(result, GameResult)
    assert result.verdict.human_is in ("A", "B")
    assert len(result.ai_transcript) == 3
    assert result.ai_transcript[0].question == start.question
