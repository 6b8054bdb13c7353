"""Compose scanned nodes, metadata and resolved order into the navigation model."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from contentnav.config import CONTENTNAV_URL_PREFIX
from contentnav.metadata import ExtractedMetadata
from contentnav.scanner import ScannedNode
from contentnav.schemas import (
    ROOT_GROUP,
    ContentNode,
    HomeConfig,
    NavigationModel,
    NodeKind,
    SiteConfig,
)
from contentnav.url_utils import url_path_for

logger = logging.getLogger(__name__)


def assemble_tree(
    nodes: Iterable[ScannedNode],
    metadata: Mapping[str, ExtractedMetadata],
    order: Mapping[str, Sequence[str]],
    *,
    url_prefix: str = CONTENTNAV_URL_PREFIX,
) -> tuple[ContentNode, ...]:
    """Build the category tree.

    Nodes without a valid title are left out together with their subtree, as
    are nodes whose parent directory is not itself a node. Ranks are assigned
    after exclusion so they stay contiguous from 0.

    Args:
        nodes: Every scanned node.
        metadata: Extracted metadata keyed by slug path.
        order: Ordered child slugs keyed by parent slug path.
        url_prefix: URL prefix for node paths.

    Returns:
        The categories in display order.
    """
    by_path = {node.slug_path: node for node in nodes}

    def build(parent: str) -> tuple[ContentNode, ...]:
        built: list[ContentNode] = []
        for slug in order.get(parent, ()):
            slug_path = f"{parent}/{slug}" if parent else slug
            scanned = by_path.get(slug_path)
            extracted = metadata.get(slug_path)
            if scanned is None or extracted is None or not extracted.is_valid:
                logger.debug("Excluding %s from navigation", slug_path)
                continue
            children = build(slug_path) if scanned.kind is not NodeKind.ARTICLE else ()
            built.append(
                ContentNode(
                    kind=scanned.kind,
                    slug=scanned.slug,
                    slug_path=slug_path,
                    url_path=url_path_for(slug_path, url_prefix),
                    path=scanned.readme_path.as_posix(),
                    title=extracted.title,
                    description=extracted.description,
                    order=len(built),
                    children=children,
                    last_updated_on=extracted.last_updated_on,
                    frontmatter=extracted.frontmatter,
                )
            )
        return tuple(built)

    categories = build(ROOT_GROUP)
    included = _count(categories)
    if included < len(by_path):
        logger.warning(
            "%d of %d content nodes excluded from navigation",
            len(by_path) - included,
            len(by_path),
        )
    return categories


def assemble_navigation(
    categories: tuple[ContentNode, ...],
    *,
    redirects: Mapping[str, str] | None = None,
    featured_articles: tuple[ContentNode, ...] = (),
    featured_topics: tuple[ContentNode, ...] = (),
    site: SiteConfig | None = None,
    home: HomeConfig | None = None,
) -> NavigationModel:
    """Wrap the assembled tree and resolved tables into a NavigationModel."""
    return NavigationModel(
        categories=categories,
        redirects=dict(redirects or {}),
        featured_articles=featured_articles,
        featured_topics=featured_topics,
        site=site.model_dump(by_alias=True, exclude_none=True) if site else {},
        home=home.model_dump(by_alias=True, exclude_none=True) if home else {},
    )


def _count(nodes: Iterable[ContentNode]) -> int:
    return sum(1 + _count(node.children) for node in nodes)
