"""Load settings.yaml into typed dataclasses. Environment variables override role settings."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

ROLES = ("judge", "respondent")


@dataclass
class RoleConfig:
    name: str              # "judge" or "respondent"
    provider: str          # "mock", "openai", "anthropic"
    model: str
    temperature: float
    max_tokens: int
    timeout_sec: int
    api_key_env: str | None = None


@dataclass
class PromptsConfig:
    interview: str
    respondent: str
    verdict: str


@dataclass
class GameConfig:
    rounds: int = 3
    recent_questions: int = 5


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    static_dir: Path | None = None


@dataclass
class AppConfig:
    game: GameConfig
    server: ServerConfig
    roles: dict[str, RoleConfig]
    prompts: PromptsConfig
    api_key_envs: dict[str, str] = field(default_factory=dict)


def _env(role: str, key: str) -> str | None:
    value = os.environ.get(f"{role.upper()}_{key}", "").strip()
    return value or None


def _load_role(role: str, raw: dict, api_key_envs: dict[str, str]) -> RoleConfig:
    provider = _env(role, "PROVIDER") or str(raw["provider"])
    model = _env(role, "MODEL") or str(raw["model"])
    temperature_raw = _env(role, "TEMPERATURE")
    temperature = float(temperature_raw) if temperature_raw is not None else float(raw["temperature"])
    return RoleConfig(
        name=role,
        provider=provider,
        model=model,
        temperature=temperature,
        max_tokens=int(raw["max_tokens"]),
        timeout_sec=int(raw["timeout_sec"]),
        api_key_env=api_key_envs.get(provider),
    )


def load_config(settings_path: Path = _SETTINGS_PATH) -> AppConfig:
    """Load configuration from settings.yaml and apply environment overrides.

    Per-role overrides: JUDGE_PROVIDER, JUDGE_MODEL, JUDGE_TEMPERATURE and the
    RESPONDENT_* equivalents. HOST and PORT override the server section.

    Raises FileNotFoundError if settings file missing. Provider names are not
    validated here; an unknown provider fails when the role is first invoked.
    """
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    game_raw = raw.get("game", {})
    game = GameConfig(
        rounds=int(game_raw.get("rounds", 3)),
        recent_questions=int(game_raw.get("recent_questions", 5)),
    )

    server_raw = raw.get("server", {})
    static_dir = server_raw.get("static_dir")
    server = ServerConfig(
        host=os.environ.get("HOST", "").strip() or str(server_raw.get("host", "127.0.0.1")),
        port=int(os.environ.get("PORT", "").strip() or server_raw.get("port", 3000)),
        static_dir=Path(static_dir) if static_dir else None,
    )

    api_key_envs = {
        name: str(provider_raw["api_key_env"])
        for name, provider_raw in (raw.get("providers") or {}).items()
        if provider_raw and provider_raw.get("api_key_env")
    }

    roles: dict[str, RoleConfig] = {}
    for role in ROLES:
        roles[role] = _load_role(role, raw["roles"][role], api_key_envs)
        logger.info(
            "Role %s: %s / %s (temperature %.2f)",
            role,
            roles[role].provider,
            roles[role].model,
            roles[role].temperature,
        )

    prompts_raw = raw["prompts"]
    prompts = PromptsConfig(
        interview=prompts_raw["interview"].format(rounds=game.rounds),
        respondent=prompts_raw["respondent"],
        verdict=prompts_raw["verdict"].format(rounds=game.rounds),
    )

    return AppConfig(
        game=game,
        server=server,
        roles=roles,
        prompts=prompts,
        api_key_envs=api_key_envs,
    )
