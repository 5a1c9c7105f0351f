"""Rich console output for terminal play."""

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from reverse_turing.models import GameResult, Label, Round, other_label

console = Console(legacy_windows=False)


def print_question(round_number: int, num_rounds: int, question: str) -> None:
    console.print(Rule(f"[bold cyan]Round {round_number} of {num_rounds}[/bold cyan]"))
    # Model and player text go through Text so brackets are not read as markup
    console.print(Panel(Text(question), title="[bold]Judge[/bold]", border_style="cyan"))


def _transcript_panel(title: str, transcript: list[Round], label: Label) -> Panel:
    body = Text()
    for i, rnd in enumerate(transcript, start=1):
        body.append(f"Q{i}: ", style="bold")
        body.append(f"{rnd.question}\n")
        body.append(f"{label}: ", style="bold")
        body.append(f"{rnd.answer or ''}\n\n")
    body.rstrip()
    return Panel(body, title=title, border_style="dim")


def print_result(result: GameResult) -> None:
    """Print both transcripts, the judge's analysis and whether it was fooled."""
    ai_label = other_label(result.human_label)
    verdict = result.verdict

    console.print(Rule("[bold green]Verdict[/bold green]"))
    console.print(_transcript_panel(f"Respondent {result.human_label} (you)", result.human_transcript, result.human_label))
    console.print(_transcript_panel(f"Respondent {ai_label} (AI)", result.ai_transcript, ai_label))

    for label in ("A", "B"):
        analysis = verdict.analysis_for(label)
        if analysis:
            console.print(Panel(Text(analysis), title=f"Analysis of {label}", border_style="dim"))
    for i, comment in enumerate(verdict.commentary, start=1):
        console.print(Text(f"Round {i}: {comment}", style="dim"))
    if verdict.summary:
        console.print(Panel(Text(verdict.summary), title="Summary", border_style="green"))

    if result.judge_correct:
        console.print(Text(f"The judge picked {verdict.human_is}. You were caught.", style="bold red"))
    else:
        console.print(Text(f"The judge picked {verdict.human_is}. You passed as an AI.", style="bold green"))
