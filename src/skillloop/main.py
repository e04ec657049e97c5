"""FastAPI application entrypoint for SkillLoop."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import api_router
from .core.database import init_db
from .core.errors import PersistenceFailure, SnapshotConflict

logger = logging.getLogger(__name__)


async def _persistence_failure_handler(request: Request, exc: PersistenceFailure) -> JSONResponse:
    if isinstance(exc, SnapshotConflict):
        return JSONResponse(status_code=409, content={"detail": str(exc)})
    logger.error("storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Storage unavailable."})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    app = FastAPI(title="SkillLoop API", version="0.1.0", lifespan=lifespan)
    app.include_router(api_router, prefix="/api/v1")
    app.add_exception_handler(PersistenceFailure, _persistence_failure_handler)
    return app


app = create_app()
