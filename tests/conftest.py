from __future__ import annotations

from collections.abc import Callable

import pytest

from app.services.chat_service import ChatHandler
from app.services.completion_client import (
    CompletionFailure,
    CompletionOutcome,
    CompletionSuccess,
)


class StaticPromptLoader:
    def __init__(self, text: str = "You are a test assistant.", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = 0

    async def load(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text.strip()


class StubCompletionClient:
    """Returns a fixed outcome, or echoes the user message when none is given."""

    def __init__(self, outcome: CompletionOutcome | None = None):
        self.outcome = outcome
        self.calls: list[dict[str, str]] = []

    async def complete(
        self, *, model: str, system_message: str, user_message: str
    ) -> CompletionOutcome:
        self.calls.append(
            {"model": model, "system_message": system_message, "user_message": user_message}
        )
        if self.outcome is None:
            return CompletionSuccess(text=f"echo: {user_message}")
        return self.outcome


@pytest.fixture
def prompt_loader() -> StaticPromptLoader:
    return StaticPromptLoader()


@pytest.fixture
def make_handler(prompt_loader) -> Callable[..., tuple[ChatHandler, StubCompletionClient]]:
    def _make(
        outcome: CompletionOutcome | None = None,
        *,
        api_key: str = "sk-test",
        model: str = "gpt-3.5-turbo",
        loader=None,
    ) -> tuple[ChatHandler, StubCompletionClient]:
        client = StubCompletionClient(outcome)
        handler = ChatHandler(
            api_key=api_key,
            model=model,
            prompt_loader=loader or prompt_loader,
            completion_client=client,
        )
        return handler, client

    return _make


@pytest.fixture
def success() -> Callable[[str], CompletionSuccess]:
    return lambda text: CompletionSuccess(text=text)


@pytest.fixture
def failure() -> Callable[[int | None, str], CompletionFailure]:
    return CompletionFailure.from_status


@pytest.fixture
def make_loader() -> type[StaticPromptLoader]:
    return StaticPromptLoader
