"""FastAPI surface: /api/start and /api/answer. Holds no per-game state."""

import logging
from typing import Literal, Optional, Union

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config.config_loader import AppConfig, load_config
from reverse_turing.game import GameService, InvalidHistoryError
from reverse_turing.llm import LLMRouter
from reverse_turing.models import GameResult, Round, Transcript, Verdict
from reverse_turing.recent import RecentQuestions

logger = logging.getLogger(__name__)

START_FAILED = "Failed to start game. Check your LLM configuration."
ANSWER_FAILED = "Something went wrong. Try again."


# ---------- Pydantic IO models ----------
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoundIO(_CamelModel):
    question: str
    answer: Optional[str] = None


class StartOut(_CamelModel):
    question: str
    round: int


class AnswerIn(_CamelModel):
    human_answer: str
    round: int = Field(..., ge=1)
    history: list[RoundIO]


class AdvanceOut(_CamelModel):
    question: str
    round: int
    history: list[RoundIO]


class RoundCommentaryOut(_CamelModel):
    commentary: str


class VerdictOut(_CamelModel):
    human_is: Literal["A", "B"]
    analysis_a: str
    analysis_b: str
    summary: str
    rounds: Optional[list[RoundCommentaryOut]] = None


class FinalOut(_CamelModel):
    verdict: VerdictOut
    human_transcript: list[RoundIO]
    ai_transcript: list[RoundIO]
    human_label: Literal["A", "B"]


class HealthOut(_CamelModel):
    status: str
    judge: str
    respondent: str


def _rounds_out(transcript: Transcript) -> list[RoundIO]:
    return [RoundIO(question=r.question, answer=r.answer) for r in transcript]


def _verdict_out(verdict: Verdict) -> VerdictOut:
    return VerdictOut(
        human_is=verdict.human_is,
        analysis_a=verdict.analysis_a,
        analysis_b=verdict.analysis_b,
        summary=verdict.summary,
        # Omitted entirely when the judge gave no per-round commentary
        rounds=[RoundCommentaryOut(commentary=c) for c in verdict.commentary] or None,
    )


def _final_out(result: GameResult) -> FinalOut:
    return FinalOut(
        verdict=_verdict_out(result.verdict),
        human_transcript=_rounds_out(result.human_transcript),
        ai_transcript=_rounds_out(result.ai_transcript),
        human_label=result.human_label,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------- App ----------
def create_app(config: AppConfig | None = None, router: LLMRouter | None = None) -> FastAPI:
    """Build the application. Serve with ``uvicorn --factory reverse_turing.api:create_app``."""
    config = config or load_config()
    router = router or LLMRouter(config.roles)
    service = GameService(
        router,
        config.prompts,
        num_rounds=config.game.rounds,
        recent=RecentQuestions(config.game.recent_questions),
    )

    app = FastAPI(title="Reverse Turing Test API", version="1.0.0")
    app.state.service = service

    @app.get("/api/health", response_model=HealthOut)
    async def health():
        return HealthOut(
            status="ok",
            judge=router.describe("judge"),
            respondent=router.describe("respondent"),
        )

    @app.post("/api/start", response_model=StartOut)
    async def start():
        try:
            result = await service.start()
        except Exception:
            logger.exception("Error in /api/start")
            return _error(500, START_FAILED)
        return StartOut(question=result.question, round=result.round)

    @app.post(
        "/api/answer",
        response_model=Union[AdvanceOut, FinalOut],
        response_model_exclude_none=True,
    )
    async def answer(payload: AnswerIn):
        history = [Round(question=r.question, answer=r.answer) for r in payload.history]
        try:
            result = await service.answer(payload.human_answer, payload.round, history)
        except InvalidHistoryError as exc:
            logger.warning("Rejected /api/answer: %s", exc)
            return _error(400, str(exc))
        except Exception:
            logger.exception("Error in /api/answer")
            return _error(500, ANSWER_FAILED)

        if isinstance(result, GameResult):
            return _final_out(result)
        return AdvanceOut(
            question=result.question,
            round=result.round,
            history=_rounds_out(result.history),
        )

    static_dir = config.server.static_dir
    if static_dir is not None and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info("Serving static files from %s", static_dir)

    return app
