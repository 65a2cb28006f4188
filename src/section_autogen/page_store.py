from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Dict, Protocol

from .models.autogen import AutogenResult
from .models.page import PageRecord

HOME_PAGE_NAME = "Home"


class PageStore(Protocol):
    def save_draft(self, project_id: str, result: AutogenResult) -> PageRecord:
        ...

    def get_page(self, project_id: str) -> PageRecord | None:
        ...


class InMemoryPageStore:
    """Keeps one home page per project; used in dev and tests."""

    def __init__(self) -> None:
        self._pages: Dict[str, PageRecord] = {}
        self._lock = threading.Lock()

    def save_draft(self, project_id: str, result: AutogenResult) -> PageRecord:
        with self._lock:
            existing = self._pages.get(project_id)
            now = datetime.utcnow()
            page = PageRecord(
                id=existing.id if existing else self._generate_id(project_id),
                project_id=project_id,
                name=HOME_PAGE_NAME,
                draft=result.document,
                settings={"ai_intent": result.ai_intent()},
                meta=result.meta,
                theme=result.theme,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._pages[project_id] = page
            return page

    def get_page(self, project_id: str) -> PageRecord | None:
        with self._lock:
            return self._pages.get(project_id)

    def _generate_id(self, project_id: str) -> str:
        safe = project_id.replace("/", "-")
        return f"page_{safe}_{uuid.uuid4().hex[:6]}"


__all__ = ["PageStore", "InMemoryPageStore", "HOME_PAGE_NAME"]
