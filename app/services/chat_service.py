from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.services.completion_client import (
    CompletionClient,
    CompletionFailure,
    FailureKind,
)
from app.services.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)

MISSING_MESSAGE_ERROR = "Missing required field: message"
MESSAGE_TYPE_ERROR = "Message must be a string"
API_KEY_MISSING_ERROR = "OpenAI API key is not configured"
GENERIC_FAILURE_ERROR = "Failed to process chat request"

# Downstream failures that get a fixed reply. Everything else is a generic 500.
# Downstream statuses are not passed through: a 400 or 503 upstream is still a 500 here.
FAILURE_RESPONSES: dict[FailureKind, tuple[int, str]] = {
    FailureKind.UNAUTHORIZED: (401, "Invalid OpenAI API key"),
    FailureKind.RATE_LIMITED: (429, "Rate limit exceeded"),
}


@dataclass(slots=True)
class ChatReply:
    status_code: int
    body: dict[str, str]


def _is_missing(value: Any) -> bool:
    """JSON-style falsiness: null, false, 0 and "" are missing; [] and {} are not."""
    if value is None or value is False:
        return True
    if isinstance(value, float) and value != value:  # NaN
        return True
    if isinstance(value, (str, int, float)):
        return not value
    return False


class ChatHandler:
    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        prompt_loader: PromptLoader,
        completion_client: CompletionClient,
    ):
        self._api_key = api_key
        self._model = model
        self._prompt_loader = prompt_loader
        self._completion_client = completion_client

    async def handle(self, body: Any) -> ChatReply:
        message = body.get("message") if isinstance(body, dict) else None

        if _is_missing(message):
            logger.info("Chat request rejected: missing message field")
            return ChatReply(400, {"error": MISSING_MESSAGE_ERROR})

        if not isinstance(message, str):
            logger.info(
                "Chat request rejected: message is %s, not a string", type(message).__name__
            )
            return ChatReply(400, {"error": MESSAGE_TYPE_ERROR})

        if not self._api_key:
            logger.error("Chat request rejected: no OpenAI API key configured")
            return ChatReply(500, {"error": API_KEY_MISSING_ERROR})

        try:
            system_prompt = await self._prompt_loader.load()
        except OSError as e:
            # File paths go to the log only.
            logger.error("Failed to load system prompt: %s", e)
            return self._generic_failure(
                f"System prompt could not be loaded: {e.strerror or e}"
            )
        except Exception as e:
            logger.exception("Failed to load system prompt")
            return self._generic_failure(str(e) or type(e).__name__)

        try:
            outcome = await self._completion_client.complete(
                model=self._model, system_message=system_prompt, user_message=message
            )
        except Exception as e:
            logger.exception("Failed to process chat request")
            return self._generic_failure(str(e) or type(e).__name__)

        if isinstance(outcome, CompletionFailure):
            return self._failure_reply(outcome)

        return ChatReply(200, {"output": outcome.text})

    def _failure_reply(self, failure: CompletionFailure) -> ChatReply:
        mapped = FAILURE_RESPONSES.get(failure.kind)
        if mapped is None:
            logger.error(
                "Error calling completion API (status=%s): %s",
                failure.status_code,
                failure.message,
            )
            return self._generic_failure(failure.message)

        status_code, error = mapped
        logger.warning(
            "Completion API rejected request (status=%s): %s",
            failure.status_code,
            failure.kind.value,
        )
        return ChatReply(status_code, {"error": error})

    @staticmethod
    def _generic_failure(details: str) -> ChatReply:
        return ChatReply(500, {"error": GENERIC_FAILURE_ERROR, "details": details})
