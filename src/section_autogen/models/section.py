from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

Json = Any


class SectionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: int = 1
    default_data: Json = Field(default=None, alias="defaultData")
    title: str | None = None


SectionCatalog = Mapping[str, SectionDefinition]


class GeneratedSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    version: int
    data: Json = None
    title: str | None = None


class DraftDocument(BaseModel):
    version: int = 1
    sections: Sequence[GeneratedSection] = Field(default_factory=list)

    def find(self, section_type: str) -> GeneratedSection | None:
        for section in self.sections:
            if section.type == section_type:
                return section
        return None


class SectionWarning(BaseModel):
    type: str
    message: str


__all__ = [
    "Json",
    "SectionDefinition",
    "SectionCatalog",
    "GeneratedSection",
    "DraftDocument",
    "SectionWarning",
]
