"""Pure dataclasses for the reverse Turing test game. No I/O, no deps."""

from dataclasses import dataclass, field, replace
from typing import Literal

Label = Literal["A", "B"]

LABELS: tuple[Label, Label] = ("A", "B")


def other_label(label: Label) -> Label:
    return "B" if label == "A" else "A"


@dataclass
class Round:
    question: str
    answer: str | None = None  # None only for the in-flight (last) round

    @property
    def answered(self) -> bool:
        return self.answer is not None


Transcript = list[Round]


@dataclass
class ModelResponse:
    provider: str          # "mock", "openai", "anthropic"
    model: str             # actual model string used
    content: str
    latency_sec: float
    token_count: int | None


@dataclass
class LabeledTranscripts:
    """Both transcripts under anonymous labels, plus which label is the human."""

    transcript_a: Transcript
    transcript_b: Transcript
    human_label: Label

    @property
    def human_transcript(self) -> Transcript:
        return self.transcript_a if self.human_label == "A" else self.transcript_b

    @property
    def ai_transcript(self) -> Transcript:
        return self.transcript_b if self.human_label == "A" else self.transcript_a

    def by_label(self, label: Label) -> Transcript:
        return self.transcript_a if label == "A" else self.transcript_b

    def swapped(self) -> "LabeledTranscripts":
        return LabeledTranscripts(
            transcript_a=self.transcript_b,
            transcript_b=self.transcript_a,
            human_label=other_label(self.human_label),
        )


@dataclass
class Verdict:
    human_is: Label
    analysis_a: str
    analysis_b: str
    summary: str
    commentary: list[str] = field(default_factory=list)  # one entry per round, may be empty

    def analysis_for(self, label: Label) -> str:
        return self.analysis_a if label == "A" else self.analysis_b

    def swapped(self) -> "Verdict":
        """Return the same verdict with labels A and B exchanged."""
        return replace(
            self,
            human_is=other_label(self.human_is),
            analysis_a=self.analysis_b,
            analysis_b=self.analysis_a,
        )


@dataclass
class StartResult:
    question: str
    round: int = 1


@dataclass
class AdvanceResult:
    question: str
    round: int
    history: Transcript


@dataclass
class GameResult:
    verdict: Verdict
    human_transcript: Transcript
    ai_transcript: Transcript
    human_label: Label

    @property
    def judge_correct(self) -> bool:
        return self.verdict.human_is == self.human_label
