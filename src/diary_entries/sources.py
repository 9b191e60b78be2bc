from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter

from .models import DiaryEntry
from .wire_models import DiaryEntryValue

logger = logging.getLogger("diary-entries")

_ENTRY_LIST = TypeAdapter(list[DiaryEntryValue])


class EntrySource(Protocol):
    async def get_entries(self, user_id: str) -> list[DiaryEntry]: ...


class InMemoryEntrySource:
    def __init__(self, entries: list[DiaryEntry] | None = None) -> None:
        self._entries: list[DiaryEntry] = list(entries or [])

    def add(self, entry: DiaryEntry) -> None:
        self._entries.append(entry)

    async def get_entries(self, user_id: str) -> list[DiaryEntry]:
        return [entry for entry in self._entries if not entry.user_id or entry.user_id == user_id]


class JsonFileEntrySource:
    """Reads an exported entry list (the diary store's JSON shape)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> list[DiaryEntry]:
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            raw = raw.get("entries", [])
        return [item.to_domain() for item in _ENTRY_LIST.validate_python(raw)]

    async def get_entries(self, user_id: str) -> list[DiaryEntry]:
        entries = self._read()
        selected = [entry for entry in entries if not entry.user_id or entry.user_id == user_id]
        logger.info("loaded entries path=%s user=%s count=%d", self.path, user_id, len(selected))
        return selected
