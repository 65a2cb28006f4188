from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .brief import normalize_language
from .dictionaries import SECTION_META_BY_ID, SectionMeta
from .models.onboarding import OnboardingProfile

USER_PROMPT_ORDER: Sequence[str] = (
    "persona",
    "brief",
    "onboarding",
    "section_type",
    "section_meta",
    "default_data",
)


@dataclass(frozen=True)
class PromptPack:
    """Language-specific prompt text."""

    system_intro: Sequence[str]
    output: Sequence[str]
    constraints: Sequence[str]
    length: Sequence[str]
    style: Sequence[str]
    tone_rules: Sequence[str]
    headings: Mapping[str, str]
    labels: Mapping[str, str]


@dataclass(frozen=True)
class PromptConfig:
    temperature: float = 0.7
    max_tokens: int = 2000
    packs: Mapping[str, PromptPack] = field(default_factory=dict)
    user_prompt_order: Sequence[str] = USER_PROMPT_ORDER

    def pack(self, language: str) -> PromptPack:
        return self.packs[normalize_language(language)]


CS_PACK = PromptPack(
    system_intro=(
        "Jsi zkušený seniorní český copywriter pro webové stránky.",
        "Píšeš webové texty, které rychle vysvětlují hodnotu a vedou ke konverzní akci.",
        "Specializuješ se na moderní landing page pro služby a osobní značky.",
        "Píšeš přirozeně, konkrétně a s respektem k cílové skupině.",
    ),
    output=(
        "Odpověz POUZE validním JSONem, který přesně odpovídá struktuře defaultData.",
        "Zachovej stejné klíče i datové typy hodnot. NIC nepřidávej ani neubírej.",
        "Žádné vysvětlování, žádné komentáře, žádný text okolo JSONu.",
        "Žádné výplně typu „Lorem ipsum“, „Nadpis“, „Popis“, apod.",
        "Všechny texty PIŠ ČESKY. Nikde žádná angličtina.",
    ),
    constraints=(
        "Jasně vysvětli hodnotu nabídky během prvních 5–10 sekund (hlavně hero).",
        "Mluv jazykem cílové skupiny (žádný marketingový balast).",
        "Veď čtenáře k jedné konkrétní akci, která odpovídá websiteGoal.",
        "Piš konkrétně, stručně a lidsky s přihlédnutím na toneOfVoice.",
        "Musí být zřetelně reflektovaný idealCustomer.",
        "V hero a službách musí být vidět mainProblem.",
        "Dodrž SECTION META (co je to za sekci a co má obsahovat).",
        "SECTION META NOTE má NEJVYŠŠÍ PRIORITU. Nikdy ji neignoruj.",
        "Když chybí informace, domysli typické a realistické informace jako zkušený freelancer v oboru (primaryFocus).",
    ),
    length=(
        "Nadpisy a labely krátké, úderné.",
        "Popisy a body text konkrétní a specifické (často 4–8 vět).",
        "Žádný zbytečný balast. Každá věta musí mít důvod.",
    ),
    style=(
        "Styl: sebevědomý, profesionální.",
        "Bez vykřičníků. Bez hype. Bez přehnaných slibů.",
        "Česky, přirozeně, jako bys mluvil s reálným člověkem.",
    ),
    tone_rules=(
        "Vše piš česky.",
        "Žádný marketingový balast a agenturní fráze.",
        "Žádné klišé typu „posuňte své podnikání“ nebo „řešení na míru“ bez konkrétního důkazu v onboardingu.",
        "Primární CTA musí jasně odpovídat websiteGoal.",
    ),
    headings={
        "output": "DŮLEŽITÉ (výstup):",
        "constraints": "TVRDÁ PRAVIDLA:",
        "length": "DÉLKA A STRUKTURA:",
        "style": "STYL:",
        "tone_rules": "TÓN PSANÍ:",
    },
    labels={
        "persona": "Persona",
        "brief": "Brief",
        "brief_missing": "nezadáno",
        "onboarding": "ONBOARDING (zdroj pravdy)",
        "section_type": "ID sekce",
        "meta_heading": "SECTION META — NEJVYŠŠÍ PRIORITA (nikdy neignoruj):",
        "meta_note": "NOTE (NEJVYŠŠÍ PRIORITA)",
        "meta_footer": "Musíš dodržet NOTE výše i za cenu větší konkrétnosti. Pokud je text vágní, vyhraj NOTE.",
        "meta_missing": "SECTION META — NEJVYŠŠÍ PRIORITA: (nenalezeno pro toto id) — drž se striktně defaultData.",
        "default_data": "Struktura defaultData k vyplnění",
    },
)


EN_PACK = PromptPack(
    system_intro=(
        "You are a senior-level English web copywriter.",
        "You write conversion-focused copy for modern service businesses / personal brands.",
        "Be specific and persuasive. Avoid generic cliches.",
    ),
    output=(
        "Reply STRICTLY with JSON that matches the given defaultData structure.",
        "Keep the exact same keys and value types. Do NOT add/remove fields.",
        "No explanations or comments around the JSON.",
        "No placeholders like 'Lorem ipsum', 'Title', 'Description', etc.",
    ),
    constraints=(
        "Explicitly reflect idealCustomer.",
        "Reflect mainProblem in hero/services copy.",
        "Match the selected toneOfVoice in writing style.",
        "Primary CTA must align with websiteGoal.",
        "Follow SECTION META. Its NOTE has the HIGHEST PRIORITY.",
    ),
    length=(
        "Headings/labels short and punchy.",
        "Descriptions/body text concrete and specific (often 4–8 sentences).",
    ),
    style=(
        "Confident and professional.",
        "No exclamation marks, no hype, no overpromising.",
    ),
    tone_rules=(
        "Write in English.",
        "Be conversion-focused and concrete.",
        "Avoid vague claims unless supported by onboarding proof.",
    ),
    headings={
        "output": "IMPORTANT (output):",
        "constraints": "HARD CONSTRAINTS:",
        "length": "LENGTH:",
        "style": "STYLE:",
        "tone_rules": "TONE:",
    },
    labels={
        "persona": "Persona",
        "brief": "Brief",
        "brief_missing": "not provided",
        "onboarding": "ONBOARDING (source of truth)",
        "section_type": "Section type",
        "meta_heading": "SECTION META — HIGHEST PRIORITY (never ignore):",
        "meta_note": "NOTE (HIGHEST PRIORITY)",
        "meta_footer": "Follow the NOTE above even at the cost of more specificity.",
        "meta_missing": "SECTION META — HIGHEST PRIORITY: (not found for this id) — stick strictly to defaultData.",
        "default_data": "defaultData structure to fill",
    },
)


DEFAULT_PROMPT_CONFIG = PromptConfig(packs={"cs": CS_PACK, "en": EN_PACK})

SYSTEM_BLOCKS: Sequence[str] = ("output", "constraints", "length", "style", "tone_rules")


class PromptBuilder:
    def __init__(
        self,
        config: PromptConfig = DEFAULT_PROMPT_CONFIG,
        *,
        section_meta: Mapping[str, SectionMeta] = SECTION_META_BY_ID,
    ) -> None:
        self.config = config
        self._section_meta = section_meta

    def build_system_prompt(self, language: str = "cs") -> str:
        pack = self.config.pack(language)
        lines = list(pack.system_intro)
        for block in SYSTEM_BLOCKS:
            lines.append("")
            lines.append(pack.headings[block])
            lines.extend(f"- {rule}" for rule in getattr(pack, block))
        return "\n".join(lines)

    def build_user_prompt(
        self,
        *,
        section_type: str,
        default_data: Any,
        brief: str,
        persona: str | None = None,
        onboarding: OnboardingProfile | None = None,
        section_meta: SectionMeta | None = None,
        language: str = "cs",
    ) -> str:
        """Assemble the per-section prompt.

        Blocks follow ``config.user_prompt_order``; a block with no content is
        left out entirely. The default-data block always carries the exact
        JSON shape the model has to fill.
        """
        pack = self.config.pack(language)
        labels = pack.labels
        meta = section_meta if section_meta is not None else self._section_meta.get(section_type)

        blocks = {
            "persona": f"{labels['persona']}: {persona}" if persona else "",
            "brief": f"{labels['brief']}:\n{brief or labels['brief_missing']}",
            "onboarding": (
                f"{labels['onboarding']}:\n{_dump(onboarding.to_prompt_dict())}" if onboarding else ""
            ),
            "section_type": f'{labels["section_type"]}: "{section_type}"',
            "section_meta": _meta_block(meta, labels),
            "default_data": f"{labels['default_data']}:\n{_dump(default_data)}",
        }
        return "\n\n".join(
            blocks[name] for name in self.config.user_prompt_order if blocks.get(name, "").strip()
        )


def _meta_block(meta: SectionMeta | None, labels: Mapping[str, str]) -> str:
    if meta is None:
        return labels["meta_missing"]
    lines = [
        labels["meta_heading"],
        f"- id: {meta.id}",
        f"- type: {meta.type}",
        f"- title: {meta.title}",
    ]
    if meta.ai_hint:
        lines.append(f"- aiHint: {meta.ai_hint}")
    if meta.note:
        lines.append(f"- {labels['meta_note']}: {meta.note}")
    lines.append("")
    lines.append(labels["meta_footer"])
    return "\n".join(lines)


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2)


__all__ = [
    "PromptPack",
    "PromptConfig",
    "PromptBuilder",
    "DEFAULT_PROMPT_CONFIG",
    "USER_PROMPT_ORDER",
]
