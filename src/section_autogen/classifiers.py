from __future__ import annotations

import re
from typing import Protocol, Sequence

from .dictionaries import INTENT_PATTERNS, SELECTION_PATTERNS


class Classifier(Protocol):
    def classify(self, text: str) -> str | None:
        ...


class KeywordClassifier:
    """Returns the first category whose pattern matches the lower-cased text."""

    def __init__(self, rules: Sequence[tuple[str, re.Pattern[str]]]) -> None:
        self._rules = tuple(rules)

    def classify(self, text: str) -> str | None:
        lowered = (text or "").lower()
        for category, pattern in self._rules:
            if pattern.search(lowered):
                return category
        return None


def default_section_classifier() -> KeywordClassifier:
    return KeywordClassifier(SELECTION_PATTERNS)


def default_intent_classifier() -> KeywordClassifier:
    return KeywordClassifier(INTENT_PATTERNS)


__all__ = [
    "Classifier",
    "KeywordClassifier",
    "default_section_classifier",
    "default_intent_classifier",
]
