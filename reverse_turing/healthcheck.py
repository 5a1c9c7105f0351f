"""Provider health checks: ping each role's model before serving."""

import asyncio
import logging

from reverse_turing.llm import LLMRouter

logger = logging.getLogger(__name__)

_PING_SYSTEM = "You are a health check."
_PING_PROMPT = "Reply with the word OK only."
_TIMEOUT_SEC = 15.0


async def _check_one(router: LLMRouter, role: str) -> tuple[str, bool, str]:
    """Ping a single role. Returns (role, ok, error_message)."""
    try:
        await asyncio.wait_for(
            router.invoke(role, _PING_SYSTEM, [{"role": "user", "content": _PING_PROMPT}]),
            timeout=_TIMEOUT_SEC,
        )
        return role, True, ""
    except Exception as exc:
        logger.debug("Health check for %s failed: %s", role, exc)
        return role, False, str(exc) or type(exc).__name__


async def run_health_checks(
    router: LLMRouter,
    roles: tuple[str, ...] = ("judge", "respondent"),
) -> dict[str, tuple[bool, str]]:
    """Ping every role in parallel.

    Returns:
        Dict mapping role -> (ok, error_message).
        error_message is "" when ok is True.
    """
    results = await asyncio.gather(*(_check_one(router, r) for r in roles))
    return {role: (ok, err) for role, ok, err in results}
