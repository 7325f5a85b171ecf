"""
POST /api/hint: short tutoring hint from the AI provider.
- unconfigured provider -> 503 with a static message, no client is built
- provider error -> 503 "hints unavailable", never 500
Provider, cache and settings come from the app that serves the request (app.state).
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from sqlstudio.schemas.hint import HintRequest, HintResponse
from sqlstudio.services.hint_cache import RedisHintCache
from sqlstudio.services.hint_service import (
    HINTS_DISABLED_MESSAGE,
    HINTS_UNAVAILABLE_MESSAGE,
    HintProvider,
    HintProviderUnavailable,
    hint_cache_key,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["hint"])


def _unavailable(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"hint": message, "error": message},
    )


def get_hint_provider(request: Request) -> HintProvider:
    return request.app.state.hint_provider


def get_hint_cache(request: Request) -> RedisHintCache | None:
    """Hint cache over the lifespan's Redis client, or None when Redis is disabled/down."""
    client = getattr(request.app.state, "redis", None)
    if client is None:
        return None
    return RedisHintCache(client, request.app.state.settings.hint_cache_ttl_seconds)


@router.post("/hint", response_model=HintResponse)
async def get_hint(
    body: HintRequest,
    provider: HintProvider = Depends(get_hint_provider),
    cache: RedisHintCache | None = Depends(get_hint_cache),
):
    if not provider.configured:
        return _unavailable(HINTS_DISABLED_MESSAGE)

    context = body.assignment_context.model_dump(by_alias=True)
    cache_key = hint_cache_key(context, body.current_query)
    if cache:
        cached = await cache.get(cache_key)
        if cached:
            return HintResponse(hint=cached)

    loop = asyncio.get_event_loop()
    try:
        hint = await loop.run_in_executor(None, lambda: provider.generate_hint(context, body.current_query))
    except HintProviderUnavailable:
        logger.exception("AI hint failed")
        return _unavailable(HINTS_UNAVAILABLE_MESSAGE)

    if cache:
        await cache.set(cache_key, hint)
    return HintResponse(hint=hint)
