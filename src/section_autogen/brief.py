from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .models.onboarding import OnboardingProfile, clean
from .models.page import PageMeta

SUPPORTED_LANGUAGES = ("cs", "en")


@dataclass(frozen=True)
class BriefLabels:
    intro: str
    fields: Sequence[tuple[str, str]]
    closing: str


BRIEF_LABELS: Mapping[str, BriefLabels] = {
    "cs": BriefLabels(
        intro="Vytvoř moderní one-page web pro osobní služby / podnikání.",
        fields=(
            ("name", "Jméno / značka"),
            ("primary_focus", "Obor"),
            ("ideal_customer", "Ideální zákazník"),
            ("main_problem", "Hlavní problém, který řeším"),
            ("avoid_customer", "S kým nechci spolupracovat"),
            ("project_count", "Zkušenosti (projekty)"),
            ("tone_of_voice", "Tone of voice"),
            ("brag", "Důkaz / konkrétní opora"),
            ("website_goal", "Primární cíl webu (CTA)"),
            ("template_id", "Vybraný design (template)"),
        ),
        closing="Piš česky. Buď konkrétní, konverzní, bez klišé.",
    ),
    "en": BriefLabels(
        intro="Create a modern one-page website for a service business / personal brand.",
        fields=(
            ("name", "Brand / name"),
            ("primary_focus", "Industry"),
            ("ideal_customer", "Ideal customer"),
            ("main_problem", "Main problem solved"),
            ("avoid_customer", "Avoid customers like"),
            ("project_count", "Experience (projects)"),
            ("tone_of_voice", "Tone of voice"),
            ("brag", "Proof / credibility"),
            ("website_goal", "Primary website goal (CTA)"),
            ("template_id", "Selected design (template)"),
        ),
        closing="Write in English. Be specific, conversion-focused, avoid generic cliches.",
    ),
}


def normalize_language(language: str | None) -> str:
    language = clean(language).lower()
    return language if language in SUPPORTED_LANGUAGES else "cs"


def compose_brief(
    profile: OnboardingProfile | None,
    legacy_text: str | None = None,
    *,
    language: str = "cs",
) -> str:
    """Build the brief that anchors every section prompt.

    An active onboarding profile wins over the legacy description. The output
    depends only on the inputs, so identical requests yield identical briefs.
    """
    if profile is None or not profile.is_active:
        return clean(legacy_text)

    labels = BRIEF_LABELS[normalize_language(language)]
    lines = [labels.intro]
    for field_name, label in labels.fields:
        value = profile.field(field_name)
        if value:
            lines.append(f"{label}: {value}")
    lines.append(labels.closing)
    return "\n".join(lines).strip()


def derive_persona(explicit: str | None, profile: OnboardingProfile | None) -> str | None:
    persona = clean(explicit)
    if persona:
        return persona
    if profile is not None:
        return profile.field("primary_focus") or None
    return None


def build_page_meta(profile: OnboardingProfile | None, language: str = "cs") -> PageMeta:
    language = normalize_language(language)
    name = profile.field("name") if profile else ""
    focus = profile.field("primary_focus") if profile else ""
    customer = profile.field("ideal_customer") if profile else ""
    problem = profile.field("main_problem") if profile else ""
    goal = profile.field("website_goal") if profile else ""

    title = " — ".join(part for part in (name, focus) if part)[:120]

    if language == "cs":
        parts = (
            f"Pomáhám řešit: {problem}" if problem else "",
            f"Pro: {customer}" if customer else "",
            f"Cíl: {goal}" if goal else "",
        )
        title = title or "Osobní web — služby a kontakt"
        fallback_description = "Moderní one-page web pro služby, důvěru a konverze."
        locale = "cs_CZ"
    else:
        parts = (
            f"I help solve: {problem}" if problem else "",
            f"For: {customer}" if customer else "",
            f"Goal: {goal}" if goal else "",
        )
        title = title or "Service website — contact & conversions"
        fallback_description = "Modern one-page website for services, trust and conversions."
        locale = "en_US"

    description = " • ".join(part for part in parts if part)[:300]
    return PageMeta(
        title=title,
        description=description or fallback_description,
        locale=locale,
    )


__all__ = [
    "BRIEF_LABELS",
    "BriefLabels",
    "SUPPORTED_LANGUAGES",
    "normalize_language",
    "compose_brief",
    "derive_persona",
    "build_page_meta",
]
