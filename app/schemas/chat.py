from __future__ import annotations

from pydantic import BaseModel


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    output: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
