from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.api.deps import get_chat_handler
from app.schemas.chat import ChatRequest, ChatResponse, ErrorResponse
from app.services.chat_service import ChatHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    # The body is validated by ChatHandler so malformed input gets the fixed error texts.
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ChatRequest.model_json_schema()}},
        }
    },
)
async def chat(
    request: Request,
    handler: ChatHandler = Depends(get_chat_handler),
) -> JSONResponse:
    raw = await request.body()
    if raw.strip():
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.info("Rejected chat request with malformed JSON body")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Invalid JSON body"},
            )
    else:
        payload = {}

    reply = await handler.handle(payload)
    return JSONResponse(status_code=reply.status_code, content=reply.body)
