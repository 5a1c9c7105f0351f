"""Tests for reverse_turing/models.py dataclasses."""

from reverse_turing.models import GameResult, LabeledTranscripts, Round, Verdict, other_label


def test_round_defaults_to_unanswered():
    rnd = Round(question="What is your favorite color?")
    assert rnd.answer is None
    assert rnd.answered is False


def test_round_answered():
    assert Round("Q?", "").answered is True


def test_other_label():
    assert other_label("A") == "B"
    assert other_label("B") == "A"


def test_labeled_transcripts_accessors():
    human = [Round("Q1", "human")]
    ai = [Round("Q1", "ai")]
    labeled = LabeledTranscripts(transcript_a=ai, transcript_b=human, human_label="B")
    assert labeled.human_transcript is human
    assert labeled.ai_transcript is ai
    assert labeled.by_label("B") is human


def test_labeled_transcripts_swapped_keeps_identity_of_human():
    human = [Round("Q1", "human")]
    ai = [Round("Q1", "ai")]
    labeled = LabeledTranscripts(transcript_a=human, transcript_b=ai, human_label="A")
    swapped = labeled.swapped()
    assert swapped.human_label == "B"
    assert swapped.transcript_b is human
    assert swapped.human_transcript is human
    assert swapped.ai_transcript is ai


def test_verdict_swapped_relabels():
    verdict = Verdict(human_is="A", analysis_a="about A", analysis_b="about B", summary="s", commentary=["c1"])
    swapped = verdict.swapped()
    assert swapped.human_is == "B"
    assert swapped.analysis_a == "about B"
    assert swapped.analysis_b == "about A"
    assert swapped.summary == "s"
    assert swapped.commentary == ["c1"]
    assert swapped.swapped() == verdict


def test_verdict_analysis_for():
    verdict = Verdict(human_is="B", analysis_a="a", analysis_b="b", summary="")
    assert verdict.analysis_for("A") == "a"
    assert verdict.analysis_for("B") == "b"


def test_game_result_judge_correct():
    verdict = Verdict(human_is="B", analysis_a="", analysis_b="", summary="")
    assert GameResult(verdict, [], [], human_label="B").judge_correct is True
    assert GameResult(verdict, [], [], human_label="A").judge_correct is False
