"""Content tree models."""

from __future__ import annotations

from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

DRAFT_TITLE_PREFIX = "Draft:"


class NodeKind(str, Enum):
    """Kind of a content node, fixed by its depth under the content root."""

    CATEGORY = "category"
    TOPIC = "topic"
    ARTICLE = "article"

    @classmethod
    def from_depth(cls, depth: int) -> NodeKind:
        """Map a directory depth (1-based) to a node kind."""
        try:
            return _KIND_BY_DEPTH[depth]
        except KeyError:
            raise ValueError(f"No content node kind at depth {depth}") from None


_KIND_BY_DEPTH = {
    1: NodeKind.CATEGORY,
    2: NodeKind.TOPIC,
    3: NodeKind.ARTICLE,
}

MAX_CONTENT_DEPTH = len(_KIND_BY_DEPTH)


def freeze(value: Any) -> Any:
    """Return a read-only copy: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of :func:`freeze` for serialisation."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


class ContentNode(BaseModel):
    """A category, topic or article in the assembled navigation tree.

    Attributes:
        kind: Category, topic or article.
        slug: Directory name; unique among siblings.
        slug_path: Slash-joined slugs from the content root (``cat/topic``).
        url_path: Canonical site path of the node (``/articles/cat/topic``).
        path: Filesystem path to the node's README.md.
        title: Text of the first H1 heading, verbatim.
        description: Markdown between the H1 and the first H2, trimmed.
        order: Rank among siblings, contiguous from 0.
        children: Child nodes in resolved order.
        last_updated_on: Optional date from frontmatter.
        frontmatter: Frontmatter keys passed through untouched.
    """

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    slug: str
    slug_path: str
    url_path: str
    path: str
    title: str = Field(..., min_length=1)
    description: str = ""
    order: int = Field(..., ge=0)
    children: tuple["ContentNode", ...] = ()
    last_updated_on: date | None = None
    frontmatter: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("frontmatter", mode="after")
    @classmethod
    def _freeze_frontmatter(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @field_serializer("frontmatter")
    def _thaw_frontmatter(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return thaw(value)

    @property
    def is_draft(self) -> bool:
        """Whether the title marks the node as an unfinished draft.

        The prefix is matched case-insensitively after trimming.
        """
        return self.title.strip().lower().startswith(DRAFT_TITLE_PREFIX.lower())
