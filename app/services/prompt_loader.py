from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol


class PromptLoader(Protocol):
    async def load(self) -> str: ...


class FilePromptLoader:
    """Reads the system prompt from disk on every call.

    No caching: editing the file takes effect on the next request. Missing or
    unreadable files raise ``OSError`` to the caller.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> str:
        text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        return text.strip()
