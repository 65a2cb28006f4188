from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .classifiers import Classifier, default_section_classifier
from .dictionaries import PREFERRED_ORDER, SELECTION_CANDIDATES
from .models.section import SectionCatalog

logger = logging.getLogger(__name__)


class SectionSelector:
    """Decides which section types to generate for one invocation."""

    def __init__(
        self,
        *,
        classifier: Classifier | None = None,
        candidates: Mapping[str, Sequence[str]] = SELECTION_CANDIDATES,
        preferred_order: Sequence[str] = PREFERRED_ORDER,
    ) -> None:
        self._classifier = classifier or default_section_classifier()
        self._candidates = {key: tuple(value) for key, value in candidates.items()}
        self._preferred_order = tuple(preferred_order)

    def select(
        self,
        brief: str,
        catalog: SectionCatalog,
        max_count: int,
        *,
        forced: Sequence[str] | None = None,
        preset_sections: Sequence[str] | None = None,
    ) -> list[str]:
        """Return at most ``max_count`` section types, all present in ``catalog``.

        Priority: template preset, then the forced list, then keyword
        classification of the brief, then the preferred order, then catalog
        order. An empty result means nothing matched.
        """
        if not catalog or max_count <= 0:
            return []

        picked = _available(preset_sections, catalog)
        source = "preset"
        if not picked:
            picked = _available(forced, catalog)
            source = "forced"
        if not picked:
            picked = self._pick_by_brief(brief, catalog)
            source = "brief"

        picked = picked[:max_count]
        logger.debug(
            "Selected sections",
            extra={"source": source, "picked": picked, "max_count": max_count},
        )
        return picked

    def _pick_by_brief(self, brief: str, catalog: SectionCatalog) -> list[str]:
        category = self._classifier.classify(brief)
        if category is not None:
            picked = _available(self._candidates.get(category), catalog)
            if picked:
                return picked

        picked = _available(self._preferred_order, catalog)
        if picked:
            return picked
        return list(catalog.keys())


def _available(types: Sequence[str] | None, catalog: SectionCatalog) -> list[str]:
    if not types:
        return []
    return [section_type for section_type in types if section_type in catalog]


__all__ = ["SectionSelector"]
