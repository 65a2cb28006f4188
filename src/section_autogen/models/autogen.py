from __future__ import annotations

from typing import Any, Literal, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .onboarding import OnboardingProfile
from .page import PageMeta
from .section import DraftDocument, GeneratedSection, SectionDefinition, SectionWarning

ThemeKey = Literal["blacky", "whitey"]


class AutogenRequest(BaseModel):
    """Inbound payload for one page-generation action."""

    model_config = ConfigDict(populate_by_name=True)

    language: str = "cs"
    definitions: Mapping[str, SectionDefinition] = Field(default_factory=dict)
    max_sections: int | None = Field(default=None, alias="maxSections")
    onboarding: OnboardingProfile | None = None
    desc: str | None = None
    template_id: str | None = Field(default=None, alias="templateId")
    theme_key: ThemeKey | None = Field(default=None, alias="themeKey")
    persona: str | None = None
    forced_sections: Sequence[str] | None = Field(default=None, alias="forcedSections")
    version: int = 1


class AutogenResult(BaseModel):
    document: DraftDocument
    warnings: Sequence[SectionWarning] = Field(default_factory=list)
    theme: Mapping[str, Any] = Field(default_factory=dict)
    meta: PageMeta
    language: str
    brief: str
    persona: str | None = None
    onboarding: OnboardingProfile | None = None
    template_id: str | None = None
    theme_key: ThemeKey | None = None
    selected: Sequence[str] = Field(default_factory=list)
    version: int = 1

    @property
    def sections(self) -> Sequence[GeneratedSection]:
        return self.document.sections

    def ai_intent(self) -> dict[str, Any]:
        return {
            "brief": self.brief,
            "persona": self.persona,
            "onboarding": self.onboarding.to_prompt_dict() if self.onboarding else None,
            "templateId": self.template_id,
            "themeKey": self.theme_key,
            "version": self.version,
        }


__all__ = ["AutogenRequest", "AutogenResult", "ThemeKey"]
