"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from voicescribe.dependencies import get_orchestrator
from voicescribe.routes import scribe_router


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    # only unwind an orchestrator that was actually built
    if get_orchestrator.cache_info().currsize:
        await get_orchestrator().shutdown()


def create_app() -> FastAPI:
    """Builds the scribe API application."""
    app = FastAPI(title="VoiceScribe", lifespan=_lifespan)
    app.include_router(scribe_router)
    return app
