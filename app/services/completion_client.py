from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Union

import httpx

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"

    @classmethod
    def from_status(cls, status_code: int | None) -> "FailureKind":
        return STATUS_FAILURE_KINDS.get(status_code, cls.UNKNOWN)


# Downstream statuses with a dedicated kind. Anything else is UNKNOWN.
STATUS_FAILURE_KINDS: dict[int | None, FailureKind] = {
    401: FailureKind.UNAUTHORIZED,
    429: FailureKind.RATE_LIMITED,
}


@dataclass(slots=True, frozen=True)
class CompletionSuccess:
    text: str


@dataclass(slots=True, frozen=True)
class CompletionFailure:
    kind: FailureKind
    message: str
    status_code: int | None = None

    @classmethod
    def from_status(cls, status_code: int | None, message: str) -> "CompletionFailure":
        return cls(
            kind=FailureKind.from_status(status_code),
            message=message,
            status_code=status_code,
        )


CompletionOutcome = Union[CompletionSuccess, CompletionFailure]


class CompletionClient(Protocol):
    async def complete(
        self, *, model: str, system_message: str, user_message: str
    ) -> CompletionOutcome: ...


def _error_message(resp: httpx.Response) -> str:
    """Best-effort message text from an error response.

    OpenAI-style bodies look like ``{"error": {"message": "..."}}``.
    """
    try:
        data = resp.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and isinstance(err.get("message"), str):
            return err["message"]
        if isinstance(err, str) and err:
            return err

    reason = resp.reason_phrase or ""
    return f"{resp.status_code} {reason}".strip()


def _first_choice_text(data: Any) -> str | None:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


class OpenAICompletionClient:
    """Calls an OpenAI-compatible ``/chat/completions`` endpoint.

    Never raises for downstream problems: HTTP errors, timeouts, transport
    failures and malformed bodies all come back as ``CompletionFailure``.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def complete(
        self, *, model: str, system_message: str, user_message: str
    ) -> CompletionOutcome:
        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_message},
                {"role": "user", "content": user_message},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                logger.info("Calling LLM at %s with model %s", self._base_url, model)
                resp = await client.post("/chat/completions", json=payload, headers=headers)
                resp.raise_for_status()
                data = resp.json()

        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.debug("LLM API error: %s - %s", e.response.status_code, message)
            return CompletionFailure.from_status(e.response.status_code, message)

        except httpx.TimeoutException:
            logger.debug("LLM API timeout after %.1fs", self._timeout)
            return CompletionFailure.from_status(
                None, "Request to completion API timed out"
            )

        except httpx.HTTPError as e:
            logger.debug("LLM transport error: %s", e)
            return CompletionFailure.from_status(None, str(e) or type(e).__name__)

        except ValueError:
            logger.debug("LLM API returned a non-JSON body")
            return CompletionFailure.from_status(
                None, "Completion API returned an invalid JSON body"
            )

        text = _first_choice_text(data)
        if text is None:
            logger.debug("LLM API response has no choices[0].message.content")
            return CompletionFailure.from_status(
                None, "Completion API response did not contain a message"
            )
        return CompletionSuccess(text=text)
