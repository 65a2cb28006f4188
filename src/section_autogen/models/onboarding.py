from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OnboardingProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    primary_focus: str | None = Field(default=None, alias="primaryFocus")
    ideal_customer: str | None = Field(default=None, alias="idealCustomer")
    main_problem: str | None = Field(default=None, alias="mainProblem")
    avoid_customer: str | None = Field(default=None, alias="avoidCustomer")
    project_count: str | None = Field(default=None, alias="projectCount")
    tone_of_voice: str | None = Field(default=None, alias="toneOfVoice")
    brag: str | None = None
    website_goal: str | None = Field(default=None, alias="websiteGoal")
    template_id: str | None = Field(default=None, alias="templateId")

    @property
    def is_active(self) -> bool:
        """True when at least one field carries non-blank text."""
        return any(clean(value) for value in self.model_dump().values())

    def field(self, name: str) -> str:
        return clean(getattr(self, name, None))

    def to_prompt_dict(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)


def clean(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


__all__ = ["OnboardingProfile", "clean"]
