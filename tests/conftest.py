import itertools
import json
from pathlib import Path

import pytest

from section_autogen.models.section import SectionDefinition

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def load_catalog():
    raw = json.loads((DATA_DIR / "catalog.json").read_text(encoding="utf-8"))

    def _load(*types: str) -> dict[str, SectionDefinition]:
        keys = types or tuple(raw)
        return {key: SectionDefinition.model_validate(raw[key]) for key in keys}

    return _load


@pytest.fixture
def sleeps():
    """Records requested backoff delays instead of waiting."""
    recorded: list[float] = []

    async def _sleep(delay: float) -> None:
        recorded.append(delay)

    _sleep.calls = recorded
    return _sleep


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"sec{next(counter)}"
