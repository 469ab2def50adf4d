from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.health import router as health_router
from app.api.routers.chat import router as chat_router
from app.core.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.api_key_configured():
        logger.warning("OPENAI_API_KEY is not set; /chat will answer 500 until it is")
    if not settings.system_prompt_path.is_file():
        logger.warning("System prompt file not found at %s", settings.system_prompt_path)
    logger.info("Server is running on port %s", settings.port)

    yield


app = FastAPI(title="Chat Completion Proxy", lifespan=lifespan)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(chat_router)
app.include_router(health_router)
