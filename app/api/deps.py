from __future__ import annotations

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services.chat_service import ChatHandler
from app.services.completion_client import CompletionClient, OpenAICompletionClient
from app.services.prompt_loader import FilePromptLoader, PromptLoader


def get_prompt_loader(settings: Settings = Depends(get_settings)) -> PromptLoader:
    return FilePromptLoader(settings.system_prompt_path)


def get_completion_client(
    settings: Settings = Depends(get_settings),
) -> CompletionClient:
    return OpenAICompletionClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout_seconds,
    )


def get_chat_handler(
    settings: Settings = Depends(get_settings),
    prompt_loader: PromptLoader = Depends(get_prompt_loader),
    completion_client: CompletionClient = Depends(get_completion_client),
) -> ChatHandler:
    return ChatHandler(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        prompt_loader=prompt_loader,
        completion_client=completion_client,
    )
