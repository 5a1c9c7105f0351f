"""Click CLI: serve the game over HTTP, play it in the terminal, or check providers."""

import asyncio
import logging
import sys

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from config.config_loader import AppConfig, load_config
from reverse_turing.game import GameService
from reverse_turing.healthcheck import run_health_checks
from reverse_turing.llm import LLMRouter
from reverse_turing.models import AdvanceResult, Round
from reverse_turing.output import print_question, print_result
from reverse_turing.recent import RecentQuestions

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _load(verbose: bool) -> AppConfig:
    load_dotenv()
    _setup_logging(verbose)
    try:
        return load_config()
    except FileNotFoundError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        sys.exit(1)


def _check_providers(router: LLMRouter) -> bool:
    """Ping both roles and print results. Returns True when all pass."""
    console.print("\n[bold]Checking providers...[/bold]")
    results = asyncio.run(run_health_checks(router))
    all_ok = True
    for role in sorted(results):
        ok, err = results[role]
        if ok:
            console.print(f"  [green]OK  [/green] {role} ({router.describe(role)})")
        else:
            short_err = err.splitlines()[0][:120] if err else "unknown error"
            console.print(f"  [red]FAIL[/red] {role} ({router.describe(role)}): {short_err}")
            all_ok = False
    console.print()
    return all_ok


async def _play(service: GameService) -> None:
    start = await service.start()
    question, round_number = start.question, start.round
    history: list[Round] = []

    while True:
        print_question(round_number, service.num_rounds, question)
        history.append(Round(question=question))
        answer = click.prompt("Your answer", type=str)

        if round_number >= service.num_rounds:
            console.print("[dim]Interviewing the second respondent and deliberating...[/dim]")
        result = await service.answer(answer, round_number, history)
        if not isinstance(result, AdvanceResult):
            print_result(result)
            return
        question, round_number, history = result.question, result.round, result.history


@click.group()
def main() -> None:
    """Reverse Turing Test -- convince an AI judge that you are the AI.

    \b
    Examples:
      reverse-turing serve --port 3000
      reverse-turing play
      JUDGE_PROVIDER=mock RESPONDENT_PROVIDER=mock reverse-turing play
      reverse-turing check
    """


@main.command()
@click.option("--host", default=None, help="Host to bind (default: from config)")
@click.option("--port", default=None, type=int, help="Port to bind (default: from config)")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
@click.option("--skip-health-check", is_flag=True, default=False,
              help="Skip the API connectivity check at startup")
def serve(host: str | None, port: int | None, reload: bool, verbose: bool, skip_health_check: bool) -> None:
    """Start the HTTP server (uvicorn)."""
    import uvicorn

    config = _load(verbose)
    router = LLMRouter(config.roles)

    if not skip_health_check and not _check_providers(router):
        if not click.confirm("Some providers failed. Start the server anyway?", default=False):
            sys.exit(1)

    effective_host = host or config.server.host
    effective_port = port or config.server.port
    console.print(f"[bold cyan]Reverse Turing Test[/bold cyan] running at http://{effective_host}:{effective_port}")
    console.print(f"Judge: {router.describe('judge')}")
    console.print(f"Respondent: {router.describe('respondent')}")

    uvicorn.run(
        "reverse_turing.api:create_app",
        factory=True,
        host=effective_host,
        port=effective_port,
        reload=reload,
        log_config=None,
    )


@main.command()
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
def play(verbose: bool) -> None:
    """Play one game in the terminal against the configured judge."""
    config = _load(verbose)
    service = GameService(
        LLMRouter(config.roles),
        config.prompts,
        num_rounds=config.game.rounds,
        recent=RecentQuestions(config.game.recent_questions),
    )
    console.print(
        "\n[bold cyan]Reverse Turing Test[/bold cyan]: two respondents claim to be AI. "
        "You are the human. Convince the judge you are the machine.\n"
    )
    try:
        asyncio.run(_play(service))
    except Exception as exc:
        logger.debug("Game failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)


@main.command()
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
def check(verbose: bool) -> None:
    """Ping the judge and respondent models."""
    config = _load(verbose)
    if not _check_providers(LLMRouter(config.roles)):
        sys.exit(1)


if __name__ == "__main__":
    main()
