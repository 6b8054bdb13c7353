"""Navigation model consumed by the rendering layer."""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from contentnav.schemas.nodes import ContentNode, freeze, thaw
from contentnav.url_utils import normalize_path


class NavigationModel(BaseModel):
    """Immutable result of one build.

    Attributes:
        categories: Top-level nodes in resolved order.
        redirects: Validated vanity table, source path to target.
        featured_articles: Article nodes selected for the homepage.
        featured_topics: Topic nodes selected for the homepage.
        site: ``site.json5`` contents, verbatim.
        home: ``home.json5`` contents, verbatim.

    Mapping fields are read-only views; a dump turns them back into dicts.
    """

    model_config = ConfigDict(frozen=True)

    categories: tuple[ContentNode, ...] = ()
    redirects: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    featured_articles: tuple[ContentNode, ...] = ()
    featured_topics: tuple[ContentNode, ...] = ()
    site: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    home: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("redirects", "site", "home", mode="after")
    @classmethod
    def _freeze_mappings(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @field_serializer("redirects", "site", "home")
    def _thaw_mappings(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return thaw(value)

    def iter_nodes(self) -> Iterator[ContentNode]:
        """Yield every node depth-first in display order."""
        stack = list(reversed(self.categories))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, slug_path: str) -> ContentNode | None:
        """Return the node at ``slug_path`` (``cat/topic/article``), if any."""
        wanted = slug_path.strip("/")
        for node in self.iter_nodes():
            if node.slug_path == wanted:
                return node
        return None

    def url_paths(self) -> set[str]:
        return {node.url_path for node in self.iter_nodes()}

    def resolve_redirect(self, path: str) -> str | None:
        """Look up a retired path; a hit is always a final destination."""
        return self.redirects.get(normalize_path(path))
