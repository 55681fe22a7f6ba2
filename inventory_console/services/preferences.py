"""
Small persisted key/value store for session conveniences: the unsaved
new-product draft and the theme flag. Failures here are logged and never
reach the inventory state.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional

import aiofiles
from pydantic import ValidationError as PydanticValidationError

from inventory_console.schemas.product import ProductDraft

logger = logging.getLogger(__name__)

DRAFT_STORAGE_KEY = "productFormDraft"
THEME_STORAGE_KEY = "theme"


class PreferenceStore:
    """String values keyed by name, kept in one JSON file."""

    def __init__(self, path: str):
        self.path = Path(path)

    async def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            content = await f.read()
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            logger.exception("Preference file %s is corrupt, starting empty", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    async def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2))

    async def get(self, key: str) -> Optional[str]:
        return (await self._read_all()).get(key)

    async def set(self, key: str, value: str) -> None:
        data = await self._read_all()
        data[key] = value
        await self._write_all(data)

    async def remove(self, key: str) -> None:
        data = await self._read_all()
        if key in data:
            del data[key]
            await self._write_all(data)


class Preferences:
    def __init__(self, store: PreferenceStore, prefers_dark_mode: bool = False):
        self.store = store
        self.prefers_dark_mode = prefers_dark_mode

    async def get_theme(self) -> str:
        try:
            theme = await self.store.get(THEME_STORAGE_KEY)
        except OSError:
            logger.exception("Could not read theme preference")
            theme = None
        if theme in ("dark", "light"):
            return theme
        return "dark" if self.prefers_dark_mode else "light"

    async def set_theme(self, theme: str) -> str:
        if theme not in ("dark", "light"):
            raise ValueError(f"Unknown theme '{theme}'")
        try:
            await self.store.set(THEME_STORAGE_KEY, theme)
        except OSError:
            logger.exception("Could not save theme preference")
        return theme

    async def save_draft(self, draft: ProductDraft) -> bool:
        try:
            await self.store.set(DRAFT_STORAGE_KEY, draft.model_dump_json(by_alias=True))
        except OSError:
            logger.exception("Could not save product draft")
            return False
        return True

    async def load_draft(self) -> Optional[ProductDraft]:
        """The saved draft, if it holds anything worth restoring."""
        try:
            raw = await self.store.get(DRAFT_STORAGE_KEY)
        except OSError:
            logger.exception("Could not load product draft")
            return None
        if not raw:
            return None

        try:
            draft = ProductDraft.model_validate_json(raw)
        except PydanticValidationError:
            logger.exception("Discarding unreadable product draft")
            await self.clear_draft()
            return None

        if draft.name or draft.sku or draft.price > 0:
            return draft
        return None

    async def clear_draft(self) -> None:
        try:
            await self.store.remove(DRAFT_STORAGE_KEY)
        except OSError:
            logger.exception("Could not clear product draft")
