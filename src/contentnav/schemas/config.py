"""Models for the JSON5 sidecar configuration files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ROOT_GROUP = ""


class OrderingConfig(BaseModel):
    """Pinned sibling order per parent slug path.

    ``groups`` maps a parent slug path (``""`` for the category level) to the
    slugs pinned to the front of that group, in display order.
    """

    model_config = ConfigDict(frozen=True)

    groups: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    def pinned_for(self, parent: str) -> tuple[str, ...]:
        return self.groups.get(parent, ())


class RedirectEntry(BaseModel):
    """One vanity redirect from a retired path to its replacement."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class HomeConfig(BaseModel):
    """Homepage configuration; unknown keys pass through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    featured_articles: list[str] = Field(default_factory=list, alias="featuredArticles")
    featured_topics: list[str] = Field(default_factory=list, alias="featuredTopics")
    profile: dict[str, Any] | None = None
    profile_actions: dict[str, Any] | None = Field(default=None, alias="profileActions")


class SiteConfig(BaseModel):
    """Static site metadata, consumed verbatim."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    base_url: str | None = Field(default=None, alias="baseUrl")
