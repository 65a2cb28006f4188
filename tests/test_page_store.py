from datetime import datetime

from section_autogen.firestore_page_store import FirestorePageStore
from section_autogen.models.autogen import AutogenResult
from section_autogen.models.page import PageMeta
from section_autogen.models.section import DraftDocument, GeneratedSection
from section_autogen.page_store import InMemoryPageStore


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, store: dict, doc_id: str) -> None:
        self._store = store
        self.id = doc_id

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._store.get(self.id))

    def set(self, data: dict) -> None:
        self._store[self.id] = dict(data)

    def update(self, data: dict) -> None:
        self._store[self.id].update(data)


class FakeFirestore:
    def __init__(self) -> None:
        self.documents: dict[str, dict] = {}

    def collection(self, name: str) -> "FakeFirestore":
        assert name == "pages"
        return self

    def document(self, doc_id: str) -> FakeDocument:
        return FakeDocument(self.documents, doc_id)


def make_result(heading: str = "Ahoj") -> AutogenResult:
    section = GeneratedSection(id="s1", type="h001", version=1, data={"heading": heading})
    return AutogenResult(
        document=DraftDocument(sections=[section]),
        theme={"background": "#000000"},
        meta=PageMeta(title="Jana", description="Fotografka", locale="cs_CZ"),
        language="cs",
        brief="Fotografka z Brna",
        template_id="t001",
        selected=["h001"],
    )


def test_in_memory_store_keeps_one_page_per_project():
    store = InMemoryPageStore()

    first = store.save_draft("proj-1", make_result("První"))
    second = store.save_draft("proj-1", make_result("Druhá"))
    other = store.save_draft("proj-2", make_result())

    assert first.id == second.id
    assert first.created_at == second.created_at
    assert other.id != first.id
    assert store.get_page("proj-1").draft.sections[0].data == {"heading": "Druhá"}
    assert store.get_page("missing") is None


def test_firestore_store_round_trips_page():
    db = FakeFirestore()
    store = FirestorePageStore(client=db)

    page = store.save_draft("proj-1", make_result())

    assert page.id == "proj-1"
    assert page.name == "Home"
    assert page.draft.sections[0].data == {"heading": "Ahoj"}
    assert page.settings["ai_intent"]["templateId"] == "t001"
    assert page.meta.title == "Jana"
    assert isinstance(db.documents["proj-1"]["created_at"], datetime)


def test_firestore_store_updates_existing_page():
    db = FakeFirestore()
    store = FirestorePageStore(client=db)
    created = store.save_draft("proj-1", make_result("První"))

    updated = store.save_draft("proj-1", make_result("Druhá"))

    assert updated.created_at == created.created_at
    assert store.get_page("proj-1").draft.sections[0].data == {"heading": "Druhá"}
    assert store.get_page("proj-2") is None


def test_firestore_store_keeps_slashes_out_of_document_ids():
    db = FakeFirestore()
    store = FirestorePageStore(client=db)

    page = store.save_draft("team/proj-1", make_result())

    assert list(db.documents) == ["team-proj-1"]
    assert page.project_id == "team/proj-1"
    assert store.get_page("team/proj-1").id == "team-proj-1"
