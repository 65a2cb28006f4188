from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from .brief import normalize_language
from .classifiers import Classifier, default_intent_classifier
from .dictionaries import (
    CONTACT_TYPES,
    HEADER_TYPES,
    HERO_TYPES,
    NAV_LABELS,
    NAV_ORDER,
    PORTFOLIO_TYPES,
    SERVICES_CTA_TYPES,
)
from .models.section import DraftDocument, GeneratedSection

logger = logging.getLogger(__name__)

CONTACT_INTENT = "contact"


def section_link(section_id: str) -> dict[str, str]:
    return {"mode": "section", "value": section_id}


class PostProcessor:
    """Wires generated sections together once all of them exist."""

    def __init__(
        self,
        *,
        nav_labels: Mapping[str, Mapping[str, str]] = NAV_LABELS,
        nav_order: Sequence[str] = NAV_ORDER,
        header_types: Sequence[str] = HEADER_TYPES,
        hero_types: Sequence[str] = HERO_TYPES,
        services_cta_types: Sequence[str] = SERVICES_CTA_TYPES,
        contact_types: Sequence[str] = CONTACT_TYPES,
        portfolio_types: Sequence[str] = PORTFOLIO_TYPES,
        intent_classifier: Classifier | None = None,
    ) -> None:
        self._nav_labels = nav_labels
        self._nav_order = tuple(nav_order)
        self._header_types = tuple(header_types)
        self._hero_types = tuple(hero_types)
        self._services_cta_types = tuple(services_cta_types)
        self._contact_types = tuple(contact_types)
        self._portfolio_types = tuple(portfolio_types)
        self._intent_classifier = intent_classifier or default_intent_classifier()

    def process(
        self,
        document: DraftDocument,
        *,
        website_goal: str | None = None,
        language: str = "cs",
    ) -> DraftDocument:
        sections = self.patch_header_nav(list(document.sections), language=language)
        sections = self.rewire_ctas(sections, website_goal=website_goal)
        return document.model_copy(update={"sections": sections})

    def build_nav(self, sections: Sequence[GeneratedSection], *, language: str = "cs") -> list[dict[str, Any]]:
        labels = self._nav_labels[normalize_language(language)]
        id_by_type = {section.type: section.id for section in sections}

        nav: list[dict[str, Any]] = []
        seen: set[str] = set()
        for section_type in self._nav_order:
            section_id = id_by_type.get(section_type)
            label = labels.get(section_type)
            if not section_id or not label or label in seen:
                continue
            seen.add(label)
            nav.append({"href": section_link(section_id), "label": label})
        return nav

    def patch_header_nav(
        self,
        sections: Sequence[GeneratedSection],
        *,
        language: str = "cs",
    ) -> list[GeneratedSection]:
        header = self._first_of(sections, self._header_types)
        if header is None or not isinstance(header.data, dict):
            return list(sections)

        nav = self.build_nav(sections, language=language)
        patched = _with_data(header, {**header.data, "nav": nav})
        return [patched if section is header else section for section in sections]

    def rewire_ctas(
        self,
        sections: Sequence[GeneratedSection],
        *,
        website_goal: str | None = None,
    ) -> list[GeneratedSection]:
        contact = self._first_of(sections, self._contact_types)
        portfolio = self._first_of(sections, self._portfolio_types)
        if contact is None and portfolio is None:
            return list(sections)

        contact_intent = self._intent_classifier.classify(website_goal or "") == CONTACT_INTENT
        rewired: list[GeneratedSection] = []
        for section in sections:
            if not isinstance(section.data, dict) or (contact is not None and section is contact):
                rewired.append(section)
                continue

            updates: dict[str, Any] = {}
            if section.type in self._header_types:
                if contact is not None and contact_intent:
                    _retarget(updates, section.data, "cta", contact.id, create=True)
                    _retarget(updates, section.data, "ctaSecondary", contact.id)
            elif section.type in self._hero_types:
                if contact is not None:
                    _retarget(updates, section.data, "ctaPrimary", contact.id)
                secondary = portfolio or contact
                _retarget(updates, section.data, "ctaSecondary", secondary.id)
            elif section.type in self._services_cta_types:
                if contact is not None:
                    _retarget(updates, section.data, "cta", contact.id)

            rewired.append(_with_data(section, {**section.data, **updates}) if updates else section)

        logger.debug(
            "Rewired CTAs",
            extra={
                "contact_id": contact.id if contact else None,
                "portfolio_id": portfolio.id if portfolio else None,
                "contact_intent": contact_intent,
            },
        )
        return rewired

    @staticmethod
    def _first_of(sections: Sequence[GeneratedSection], types: Sequence[str]) -> GeneratedSection | None:
        """First section of the highest-priority type present in the document."""
        by_type: dict[str, GeneratedSection] = {}
        for section in sections:
            by_type.setdefault(section.type, section)
        for section_type in types:
            if section_type in by_type:
                return by_type[section_type]
        return None


def _retarget(
    updates: dict[str, Any],
    data: Mapping[str, Any],
    key: str,
    section_id: str,
    *,
    create: bool = False,
) -> None:
    current = data.get(key)
    if isinstance(current, dict):
        updates[key] = {**current, "href": section_link(section_id)}
    elif current is None and create:
        updates[key] = {"href": section_link(section_id)}


def _with_data(section: GeneratedSection, data: dict[str, Any]) -> GeneratedSection:
    return section.model_copy(update={"data": data})


__all__ = ["PostProcessor", "section_link"]
