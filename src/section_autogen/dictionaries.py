from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Sequence


@dataclass(frozen=True)
class TemplatePreset:
    id: str
    name: str
    subtitle: str
    theme: str
    sections: Sequence[str]


@dataclass(frozen=True)
class SectionMeta:
    id: str
    type: str
    title: str
    ai_hint: str | None = None
    note: str | None = None


TEMPLATE_PRESETS: Sequence[TemplatePreset] = (
    TemplatePreset(
        id="t001",
        name="Showcase Services",
        subtitle="Showroom, services and proof",
        theme="blacky",
        sections=("hd001", "h002", "st002", "sh001", "st001", "ab001", "ab002", "sv001", "ts001", "ct001"),
    ),
    TemplatePreset(
        id="t002",
        name="Services First",
        subtitle="Services on top, showroom later",
        theme="whitey",
        sections=("hd001", "h001", "st002", "sv002", "st001", "ab001", "ab002", "sh002", "ts002", "ct001"),
    ),
    TemplatePreset(
        id="t003",
        name="Personal Story",
        subtitle="More about you and trust",
        theme="blacky",
        sections=("hd001", "h002", "ab001", "st002", "sv001", "ab002", "ts001", "st001", "ct002"),
    ),
    TemplatePreset(
        id="t004",
        name="Results Led",
        subtitle="Results, services, call to action",
        theme="whitey",
        sections=("hd001", "h001", "st001", "st002", "sv002", "ts001", "sh001", "ab001", "ct001"),
    ),
    TemplatePreset(
        id="t005",
        name="Portfolio Heavy",
        subtitle="Work samples as the main draw",
        theme="blacky",
        sections=("hd001", "h002", "sh003", "st002", "sh001", "sv001", "ts002", "ab002", "ct001"),
    ),
    TemplatePreset(
        id="t006",
        name="Conversion Compact",
        subtitle="Short, punchy, converting",
        theme="whitey",
        sections=("hd001", "h002", "sv002", "st002", "ts001", "ct001"),
    ),
)


PREFERRED_ORDER: Sequence[str] = (
    "hd001",
    "h001",
    "h002",
    "sh001",
    "sv001",
    "sv002",
    "st001",
    "st002",
    "ab001",
    "ab002",
    "ga001",
    "ts001",
    "ts002",
    "ct001",
    "ct002",
)


# Brief keyword categories, checked in order against the lower-cased brief.
SELECTION_PATTERNS: Sequence[tuple[str, re.Pattern[str]]] = (
    ("portfolio", re.compile(r"portfolio|ukázk|projek|reference|case|work")),
    ("services", re.compile(r"služb|nabídk|spolupr|freelanc|agentura|studio|konzult")),
    ("results", re.compile(r"výsledk|čís|stat|růst|konverz|poptávk|lead|%")),
)

SELECTION_CANDIDATES: Mapping[str, Sequence[str]] = {
    "portfolio": ("hd001", "h001", "sh001", "ga001", "ts001", "ct001"),
    "services": ("hd001", "h001", "sv001", "sv002", "ts001", "ct001"),
    "results": ("hd001", "h001", "st001", "st002", "ts001", "ct001"),
}


# Website-goal intent; booking wins over plain contact.
INTENT_PATTERNS: Sequence[tuple[str, re.Pattern[str]]] = (
    (
        "booking",
        re.compile(
            r"\brezerv|\bobjedn|\btermín|\bhovor|\bzavol|\bschůz|calendly"
            r"|\bbook|\bcall\b|\bmeeting|\bschedul|\bappointment"
        ),
    ),
    (
        "contact",
        re.compile(r"kontakt|napsa|napiš|poptáv|formulář|zpráv|e-?mail|contact|message|inquir|enquir|reach out"),
    ),
)


HEADER_TYPES: Sequence[str] = ("hd001",)
HERO_TYPES: Sequence[str] = ("h001", "h002")
SERVICES_CTA_TYPES: Sequence[str] = ("sv002",)
CONTACT_TYPES: Sequence[str] = ("ct001", "ct002")
PORTFOLIO_TYPES: Sequence[str] = ("sh001", "sh002", "sh003")


NAV_LABELS: Mapping[str, Mapping[str, str]] = {
    "cs": {
        "sh001": "Projekty",
        "sh002": "Projekty",
        "sh003": "Projekty",
        "sv001": "Služby",
        "sv002": "Služby",
        "ts001": "Reference",
        "ts002": "Reference",
        "ab001": "O mně",
        "ab002": "O mně",
        "ct001": "Kontakt",
        "ct002": "Kontakt",
        "ga001": "Galerie",
        "st001": "Klienti",
        "st002": "Výsledky",
    },
    "en": {
        "sh001": "Projects",
        "sh002": "Projects",
        "sh003": "Projects",
        "sv001": "Services",
        "sv002": "Services",
        "ts001": "Reviews",
        "ts002": "Reviews",
        "ab001": "About",
        "ab002": "About",
        "ct001": "Contact",
        "ct002": "Contact",
        "ga001": "Gallery",
        "st001": "Clients",
        "st002": "Results",
    },
}

NAV_ORDER: Sequence[str] = (
    "sh001",
    "sh002",
    "sh003",
    "sv001",
    "sv002",
    "ts001",
    "ts002",
    "ab001",
    "ab002",
    "ct001",
    "ct002",
    "ga001",
    "st001",
    "st002",
)


SECTION_META: Sequence[SectionMeta] = (
    SectionMeta(
        id="hd001",
        type="header",
        title="Header",
        ai_hint="Logo on the left, 3-6 navigation links, optional primary CTA button on the right.",
        note=(
            "Name the navigation after the real content of the site (services, projects, reviews, about, contact). "
            "If defaultData contains a CTA button, align its label with websiteGoal."
        ),
    ),
    SectionMeta(
        id="h001",
        type="hero",
        title="Hero 1 - classic CTA",
        ai_hint="Strong headline, short subheadline, primary CTA, secondary link, supporting text or badge.",
        note=(
            "The headline states what I do, for whom and with what result, without cliches. "
            "The subheadline adds how. The CTA matches websiteGoal (contact, inquiry, booking)."
        ),
    ),
    SectionMeta(
        id="h002",
        type="hero",
        title="Hero 2 - gallery",
        ai_hint="Headline, subheadline and CTA next to a gallery grid showing work or product.",
        note="Write meaningful alt texts and titles for gallery items. Keep the copy consistent with a portfolio angle.",
    ),
    SectionMeta(
        id="sh001",
        type="showroom",
        title="Showroom 1 - project preview",
        ai_hint="One main visual plus project name, short text, 2-4 highlights and a CTA to the detail.",
        note="Describe the project as a case: goal, what was done, impact. Highlights are concrete, never generic.",
    ),
    SectionMeta(
        id="sh002",
        type="showroom",
        title="Showroom 2 - project highlight",
        ai_hint="Selected case study with visual, benefits, metrics, role and technologies.",
        note="Include at least one measurable or verifiable result without exaggerating. State the role concretely.",
    ),
    SectionMeta(
        id="sh003",
        type="showroom",
        title="Showroom 3 - visual variant",
        ai_hint="Visual-first layout with short copy and quick benefits.",
        note="Shorter than sh002 but still concrete. Short punchy sentences, no long paragraphs.",
    ),
    SectionMeta(
        id="lg001",
        type="logo-loop",
        title="Logo loop - social proof",
        ai_hint="Horizontal loop of 6-20 client or partner logos.",
        note="Without real brands use neutral names ('Studio A') rather than fake enterprise names.",
    ),
    SectionMeta(
        id="st001",
        type="stats",
        title="Stats 1",
        ai_hint="3-6 metrics: number, label and short context.",
        note=(
            "Metrics come from the onboarding context (projectCount, brag). Without data use safe metrics "
            "such as delivery speed or response time, without hard numbers."
        ),
    ),
    SectionMeta(
        id="st002",
        type="stats",
        title="Stats 2 - extended",
        ai_hint="Metrics with longer explanations or icons for credibility.",
        note="Each metric is a claim plus a short reason why it matters to the ideal customer.",
    ),
    SectionMeta(
        id="sv001",
        type="services",
        title="Services 1 - list",
        ai_hint="3-8 services with name and short description.",
        note="Services explicitly address mainProblem. Every service states the outcome for the client.",
    ),
    SectionMeta(
        id="sv002",
        type="services",
        title="Services 2 - card grid",
        ai_hint="Grid of service cards with a single CTA below.",
        note="Cards are concrete packages with outcomes. The CTA leads to the contact action of websiteGoal.",
    ),
    SectionMeta(
        id="ts001",
        type="testimonials",
        title="Testimonials 1",
        ai_hint="2-6 client quotes with name and role.",
        note="Quotes sound like real people and mention a concrete result. No superlatives.",
    ),
    SectionMeta(
        id="ts002",
        type="testimonials",
        title="Testimonials 2 - variant",
        ai_hint="Alternative testimonial layout.",
        note="Keep quotes short and specific to idealCustomer.",
    ),
    SectionMeta(
        id="ct001",
        type="cta",
        title="CTA banner 1",
        ai_hint="Closing call to action with headline, short text and a button or form.",
        note="One clear action matching websiteGoal. Lower the barrier (response time, what happens next).",
    ),
    SectionMeta(
        id="ct002",
        type="cta",
        title="CTA banner 2 - variant",
        ai_hint="Alternative closing CTA layout.",
        note="Same rules as ct001, shorter copy.",
    ),
    SectionMeta(
        id="ab001",
        type="about",
        title="About 1 - profile",
        ai_hint="Photo, name, role and a short personal introduction.",
        note="Write in first person, concrete experience relevant to idealCustomer.",
    ),
    SectionMeta(
        id="ab002",
        type="about",
        title="About 2 - story",
        ai_hint="Longer story text about background and approach.",
        note="Tell why and how I work, not a CV. Tie it to mainProblem.",
    ),
    SectionMeta(
        id="ga001",
        type="gallery",
        title="Gallery 1",
        ai_hint="Image grid with captions.",
        note="Meaningful captions and alt texts, never 'image 1'.",
    ),
)

SECTION_META_BY_ID: Mapping[str, SectionMeta] = {meta.id: meta for meta in SECTION_META}


THEMES: Mapping[str, Mapping[str, object]] = {
    "blacky": {
        "body": "#d4d4d8",
        "font": "system",
        "heading": "#ffffff",
        "primary": "#ffffff",
        "primary_hover": "#e5e7eb",
        "secondary": "#000000",
        "secondary_hover": "#27272a",
        "background": "#000000",
        "surface": "#ffffff",
        "inverse_surface": "#000000",
        "input": "#0a0a0a",
        "border": "#27272a",
        "on_primary": "#000000",
        "on_surface": "#000000",
        "on_secondary": "#ffffff",
        "on_background": "#ffffff",
        "border_radius": 16,
    },
    "whitey": {
        "body": "#0a0a0a",
        "font": "system",
        "heading": "#0a0a0a",
        "primary": "#0a0a0a",
        "primary_hover": "#18181b",
        "secondary": "#ffffff",
        "secondary_hover": "#f4f4f5",
        "background": "#ffffff",
        "surface": "#0a0a0a",
        "inverse_surface": "#0a0a0a",
        "input": "#ffffff",
        "border": "#e4e4e7",
        "on_primary": "#ffffff",
        "on_surface": "#ffffff",
        "on_secondary": "#0a0a0a",
        "on_background": "#0a0a0a",
        "border_radius": 16,
    },
}

DEFAULT_THEME_KEY = "blacky"


def get_preset(preset_id: str | None) -> TemplatePreset | None:
    if not preset_id:
        return None
    for preset in TEMPLATE_PRESETS:
        if preset.id == preset_id:
            return preset
    return None


def resolve_theme(theme_key: str | None) -> dict[str, object]:
    return dict(THEMES.get(theme_key or DEFAULT_THEME_KEY, THEMES[DEFAULT_THEME_KEY]))


__all__ = [
    "TemplatePreset",
    "SectionMeta",
    "TEMPLATE_PRESETS",
    "PREFERRED_ORDER",
    "SELECTION_PATTERNS",
    "SELECTION_CANDIDATES",
    "INTENT_PATTERNS",
    "HEADER_TYPES",
    "HERO_TYPES",
    "SERVICES_CTA_TYPES",
    "CONTACT_TYPES",
    "PORTFOLIO_TYPES",
    "NAV_LABELS",
    "NAV_ORDER",
    "SECTION_META",
    "SECTION_META_BY_ID",
    "THEMES",
    "DEFAULT_THEME_KEY",
    "get_preset",
    "resolve_theme",
]
