"""Verdict synthesis: anonymize both transcripts, ask the judge, parse its JSON."""

import json
import logging
import random
import re
from collections.abc import Sequence

from config.config_loader import PromptsConfig
from reverse_turing.llm import LLMRouter
from reverse_turing.models import LABELS, Label, LabeledTranscripts, Round, Transcript, Verdict

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


def assign_labels(
    human: Transcript,
    ai: Transcript,
    rng: random.Random | None = None,
) -> LabeledTranscripts:
    """Put the human's transcript under a randomly chosen label.

    The judge must not be able to infer the human from ordering, so the label
    is drawn fresh for every game.
    """
    human_label: Label = (rng or random).choice(LABELS)
    if human_label == "A":
        return LabeledTranscripts(transcript_a=human, transcript_b=ai, human_label="A")
    return LabeledTranscripts(transcript_a=ai, transcript_b=human, human_label="B")


def format_transcript(label: Label, transcript: Sequence[Round]) -> str:
    """Render a transcript as numbered Q/A blocks, answers tagged with ``label``."""
    return "\n\n".join(
        f"Q{i}: {rnd.question}\n{label}: {rnd.answer}"
        for i, rnd in enumerate(transcript, start=1)
    )


def build_verdict_message(labeled: LabeledTranscripts) -> str:
    return "".join(
        [
            "Here are the transcripts from both interviews:\n",
            f"--- Respondent A ---\n{format_transcript('A', labeled.transcript_a)}",
            f"\n\n--- Respondent B ---\n{format_transcript('B', labeled.transcript_b)}",
            "\n\nDeliver your verdict as JSON.",
        ]
    )


def _strip_fences(raw: str) -> str:
    return _FENCE_RE.sub("", raw).replace("```", "").strip()


def _commentary(rounds_raw: object) -> list[str]:
    if not isinstance(rounds_raw, list):
        return []
    commentary: list[str] = []
    for entry in rounds_raw:
        if isinstance(entry, dict):
            commentary.append(str(entry.get("commentary", "")))
        elif isinstance(entry, str):
            commentary.append(entry)
    return commentary


def fallback_verdict(raw: str, human_label: Label) -> Verdict:
    """Verdict used when the judge's reply cannot be parsed.

    Keeps the game alive: the raw reply is shown as analysis A and the guess
    defaults to the true human label.
    """
    return Verdict(human_is=human_label, analysis_a=raw, analysis_b="", summary="")


def parse_verdict(raw: str, human_label: Label) -> Verdict:
    """Parse the judge's verdict reply. Never raises."""
    try:
        data = json.loads(_strip_fences(raw))
    except (json.JSONDecodeError, RecursionError):
        logger.warning("Failed to parse verdict JSON: %r", raw[:500])
        return fallback_verdict(raw, human_label)

    if not isinstance(data, dict) or data.get("humanIs") not in LABELS:
        logger.warning("Verdict JSON missing a valid humanIs: %r", raw[:500])
        return fallback_verdict(raw, human_label)

    return Verdict(
        human_is=data["humanIs"],
        analysis_a=str(data.get("analysisA") or ""),
        analysis_b=str(data.get("analysisB") or ""),
        summary=str(data.get("summary") or ""),
        commentary=_commentary(data.get("rounds")),
    )


async def synthesize_verdict(
    router: LLMRouter,
    prompts: PromptsConfig,
    labeled: LabeledTranscripts,
) -> Verdict:
    """Ask the judge which labeled respondent is the human.

    Raises:
        ProviderError: If the judge call fails. A malformed reply is not an
            error; it yields the fallback verdict.
    """
    messages = [{"role": "user", "content": build_verdict_message(labeled)}]
    logger.info("Requesting verdict from judge (%s)", router.describe("judge"))
    raw = await router.invoke("judge", prompts.verdict, messages)
    verdict = parse_verdict(raw, labeled.human_label)
    logger.info(
        "Verdict: judge picked %s, human was %s",
        verdict.human_is,
        labeled.human_label,
    )
    return verdict
