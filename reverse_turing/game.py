"""Game session handling. Stateless per request: the client resends its history."""

import logging
import random
from collections.abc import Sequence

from config.config_loader import PromptsConfig
from reverse_turing.interview import ask_question, run_interview
from reverse_turing.llm import LLMRouter
from reverse_turing.models import AdvanceResult, GameResult, Round, StartResult, Transcript
from reverse_turing.recent import DEFAULT_CAPACITY, RecentQuestions
from reverse_turing.verdict import assign_labels, synthesize_verdict

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 3


class InvalidHistoryError(ValueError):
    """Raised when a client-supplied history cannot belong to a valid game."""


def _validate_history(history: Sequence[Round], round_number: int, num_rounds: int) -> None:
    if not history:
        raise InvalidHistoryError("history must contain at least the current question")
    if len(history) > num_rounds:
        raise InvalidHistoryError(f"history has {len(history)} rounds, the game only has {num_rounds}")
    if any(not rnd.answered for rnd in history[:-1]):
        raise InvalidHistoryError("only the last round of history may be unanswered")
    if history[-1].answered:
        raise InvalidHistoryError("the last round of history is already answered")
    if len(history) != round_number:
        raise InvalidHistoryError(f"round {round_number} does not match history length {len(history)}")


class GameService:
    """Drives a game from start to verdict.

    One instance serves every player. The only state it keeps between requests
    is the recent opening questions buffer.
    """

    def __init__(
        self,
        router: LLMRouter,
        prompts: PromptsConfig,
        num_rounds: int = DEFAULT_ROUNDS,
        recent: RecentQuestions | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.router = router
        self.prompts = prompts
        self.num_rounds = num_rounds
        self.recent = recent if recent is not None else RecentQuestions(DEFAULT_CAPACITY)
        self._rng = rng or random.Random()

    async def start(self) -> StartResult:
        question = await ask_question(
            self.router,
            self.prompts,
            transcript=[],
            recent_questions=self.recent.snapshot(),
        )
        self.recent.record(question)
        logger.info("Game started")
        return StartResult(question=question, round=1)

    async def answer(
        self,
        human_answer: str,
        round_number: int,
        history: Sequence[Round],
    ) -> AdvanceResult | GameResult:
        """Record the human's answer, then ask the next question or finish the game.

        Args:
            human_answer: The player's answer to the last question in ``history``.
            round_number: The round being answered (1-indexed).
            history: The player's transcript so far; its last round has no answer yet.

        Returns:
            AdvanceResult while rounds remain, GameResult after the final round.

        Raises:
            InvalidHistoryError: If ``history`` and ``round_number`` are inconsistent.
            ProviderError: If any model call fails.
        """
        _validate_history(history, round_number, self.num_rounds)

        human_transcript: Transcript = [Round(rnd.question, rnd.answer) for rnd in history]
        human_transcript[-1].answer = human_answer

        if round_number >= self.num_rounds:
            return await self._finish(human_transcript)

        question = await ask_question(self.router, self.prompts, human_transcript)
        logger.info("Round %d answered, asking round %d", round_number, round_number + 1)
        return AdvanceResult(question=question, round=round_number + 1, history=human_transcript)

    async def _finish(self, human_transcript: Transcript) -> GameResult:
        logger.info("Final round answered, interviewing AI respondent (%s)", self.router.describe("respondent"))
        ai_transcript = await run_interview(
            self.router,
            self.prompts,
            num_rounds=self.num_rounds,
            seed_question=human_transcript[0].question,
        )
        labeled = assign_labels(human_transcript, ai_transcript, self._rng)
        verdict = await synthesize_verdict(self.router, self.prompts, labeled)
        return GameResult(
            verdict=verdict,
            human_transcript=human_transcript,
            ai_transcript=ai_transcript,
            human_label=labeled.human_label,
        )
