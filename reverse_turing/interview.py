"""Interview orchestration: judge asks, respondent answers, one round at a time."""

import logging
from collections.abc import Sequence

from config.config_loader import PromptsConfig
from reverse_turing.llm import LLMRouter
from reverse_turing.models import Round, Transcript
from reverse_turing.providers.base import Message

logger = logging.getLogger(__name__)

OPENING_INSTRUCTION = "Begin the interview. Ask your first question."


def _opening_turn(recent_questions: Sequence[str] = ()) -> Message:
    content = OPENING_INSTRUCTION
    if recent_questions:
        listed = "\n".join(f"- {q}" for q in recent_questions)
        content += (
            "\n\nYou recently opened other interviews with these questions. "
            f"Do not repeat them or ask close variants:\n{listed}"
        )
    return {"role": "user", "content": content}


def _answer_turn(answer: str) -> Message:
    return {"role": "user", "content": f"Respondent's answer: {answer}\n\nAsk your next question."}


def build_interview_messages(
    transcript: Sequence[Round],
    recent_questions: Sequence[str] = (),
) -> list[Message]:
    """Replay a transcript as the judge's side of the conversation.

    Questions become assistant turns, answers become user turns. A trailing
    unanswered round contributes only its question.
    """
    messages: list[Message] = [_opening_turn(recent_questions)]
    for rnd in transcript:
        messages.append({"role": "assistant", "content": rnd.question})
        if rnd.answer is not None:
            messages.append(_answer_turn(rnd.answer))
    return messages


async def ask_question(
    router: LLMRouter,
    prompts: PromptsConfig,
    transcript: Sequence[Round],
    recent_questions: Sequence[str] = (),
) -> str:
    """Ask the judge for the next question given everything answered so far."""
    messages = build_interview_messages(transcript, recent_questions)
    return await router.invoke("judge", prompts.interview, messages)


async def run_interview(
    router: LLMRouter,
    prompts: PromptsConfig,
    num_rounds: int,
    seed_question: str | None = None,
) -> Transcript:
    """Interview the AI respondent for ``num_rounds`` rounds.

    Args:
        router: Role router used for both the judge and the respondent.
        prompts: Prompt templates from config.
        num_rounds: Number of question/answer rounds.
        seed_question: If given, used verbatim as the first question so the AI
            faces the same opening as the human. The judge is not called for it.

    Returns:
        Transcript with exactly ``num_rounds`` answered rounds.

    Raises:
        ProviderError: On the first failed model call. Nothing is retried.
    """
    transcript: Transcript = []
    messages: list[Message] = [_opening_turn()]

    for i in range(num_rounds):
        if i == 0 and seed_question is not None:
            question = seed_question
        else:
            question = await router.invoke("judge", prompts.interview, messages)
        messages.append({"role": "assistant", "content": question})

        # The respondent sees only the current question, never earlier rounds.
        answer = await router.invoke(
            "respondent",
            prompts.respondent,
            [{"role": "user", "content": question}],
        )
        transcript.append(Round(question=question, answer=answer))
        logger.info("AI interview round %d/%d complete", i + 1, num_rounds)

        if i < num_rounds - 1:
            messages.append(_answer_turn(answer))

    return transcript
