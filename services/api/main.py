from __future__ import annotations

from section_autogen.api import create_app
from section_autogen.config import get_settings
from section_autogen.firestore_page_store import FirestorePageStore
from section_autogen.generator import SiteGenerator
from section_autogen.logging_config import setup_logging
from section_autogen.page_store import InMemoryPageStore

settings = get_settings()

# Setup logging
setup_logging(environment=settings.environment, project_id=settings.project_id)

# Use Firestore when configured, in-memory for dev
if settings.page_store_backend == "firestore":
    page_store = FirestorePageStore(project_id=settings.project_id)
else:
    page_store = InMemoryPageStore()

app = create_app(SiteGenerator.from_settings(settings), page_store)
