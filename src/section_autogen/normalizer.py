from __future__ import annotations

import copy
import json
from typing import Any

from .models.generation import GenerationResult
from .models.section import Json, SectionWarning


def extract_json_object(raw: str | None) -> dict[str, Any] | None:
    """Pull a JSON object out of raw model text.

    Takes the whole trimmed text when it is one object, otherwise the span
    from the first ``{`` to the last ``}``. Returns ``None`` when nothing
    parses to an object; never raises.
    """
    text = (raw or "").strip()
    if not text:
        return None

    if text.startswith("{") and text.endswith("}"):
        candidate = text
    else:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None
        candidate = text[start : end + 1]

    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def settle_section(
    section_type: str,
    default_data: Json,
    result: GenerationResult,
) -> tuple[Json, SectionWarning | None]:
    """Resolve a generation result into section data plus an optional warning."""
    if result.ok:
        return result.payload, None
    warning = SectionWarning(type=section_type, message=result.failure.describe(section_type))
    return copy.deepcopy(default_data), warning


__all__ = ["extract_json_object", "settle_section"]
