from __future__ import annotations

import logging
from datetime import datetime

from google.cloud import firestore

from .models.autogen import AutogenResult
from .models.page import PageMeta, PageRecord
from .models.section import DraftDocument
from .page_store import HOME_PAGE_NAME

logger = logging.getLogger(__name__)


class FirestorePageStore:
    """Firestore-backed page store; one home-page document per project."""

    COLLECTION_NAME = "pages"

    def __init__(self, project_id: str | None = None, *, client: firestore.Client | None = None) -> None:
        self._db = client or firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def save_draft(self, project_id: str, result: AutogenResult) -> PageRecord:
        """Create the home page on first run, otherwise replace its draft."""
        doc_ref = self._collection.document(self._document_id(project_id))
        snapshot = doc_ref.get()
        now = datetime.utcnow()

        data = {
            "project_id": project_id,
            "name": HOME_PAGE_NAME,
            "path": "/",
            "draft": result.document.model_dump(),
            "settings": {"ai_intent": result.ai_intent()},
            "meta": result.meta.model_dump(),
            "theme": dict(result.theme),
            "updated_at": now,
        }

        if snapshot.exists:
            doc_ref.update(data)
            logger.info("Updated page draft", extra={"project_id": project_id})
        else:
            doc_ref.set({**data, "created_at": now})
            logger.info("Created page", extra={"project_id": project_id})

        return self._from_firestore_dict(doc_ref.id, doc_ref.get().to_dict())

    def get_page(self, project_id: str) -> PageRecord | None:
        doc = self._collection.document(self._document_id(project_id)).get()
        if not doc.exists:
            return None
        return self._from_firestore_dict(doc.id, doc.to_dict())

    @staticmethod
    def _document_id(project_id: str) -> str:
        # "/" would address a subcollection
        return project_id.replace("/", "-")

    def _from_firestore_dict(self, page_id: str, data: dict) -> PageRecord:
        meta = data.get("meta")
        return PageRecord(
            id=page_id,
            project_id=data["project_id"],
            name=data.get("name", HOME_PAGE_NAME),
            path=data.get("path", "/"),
            draft=DraftDocument.model_validate(data.get("draft") or {}),
            settings=data.get("settings") or {},
            meta=PageMeta.model_validate(meta) if meta else None,
            theme=data.get("theme") or {},
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


__all__ = ["FirestorePageStore"]
