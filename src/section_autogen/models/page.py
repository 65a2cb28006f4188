from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field

from .section import DraftDocument


class PageMeta(BaseModel):
    title: str
    description: str
    locale: str
    robots: str = "noindex,nofollow"
    og_title: str | None = Field(default=None, serialization_alias="ogTitle")
    og_description: str | None = Field(default=None, serialization_alias="ogDescription")
    og_image: str | None = Field(default=None, serialization_alias="ogImage")
    twitter_card: Literal["summary_large_image", "summary", "app", "player"] | None = Field(
        default=None, serialization_alias="twitterCard"
    )


class PageRecord(BaseModel):
    id: str
    project_id: str
    name: str = "Home"
    path: str = "/"
    draft: DraftDocument = Field(default_factory=DraftDocument)
    settings: Mapping[str, Any] = Field(default_factory=dict)
    meta: PageMeta | None = None
    theme: Mapping[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


__all__ = ["PageMeta", "PageRecord"]
