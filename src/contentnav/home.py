"""Resolve homepage references from ``home.json5``."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from contentnav.schemas import ContentNode, Diagnostic, DiagnosticKind, HomeConfig, NodeKind

COMPONENT = "home"


def check_home_profile(config: HomeConfig, *, display: str = "home.json5") -> list[Diagnostic]:
    """Check the profile block the homepage template expects."""
    issues: list[str] = []
    if not config.profile:
        issues.append("Missing profile object")
    else:
        if not config.profile.get("name"):
            issues.append("Missing profile.name")
        if not config.profile.get("title"):
            issues.append("Missing profile.title")
    if config.profile_actions is None:
        issues.append("Missing profileActions object")
    return [Diagnostic.warning(DiagnosticKind.HOME, COMPONENT, display, issue) for issue in issues]


def resolve_featured(
    config: HomeConfig | None,
    nodes: Iterable[ContentNode],
    *,
    display: str = "home.json5",
) -> tuple[tuple[ContentNode, ...], tuple[ContentNode, ...], list[Diagnostic]]:
    """Resolve featured article and topic references to assembled nodes.

    A reference is either a full slug path (``category/topic/article``) or a
    bare slug naming exactly one node of the expected kind. Nodes excluded
    from navigation cannot be featured.

    Returns:
        Tuple of (featured articles, featured topics, diagnostics).
    """
    if config is None:
        return (), (), []

    by_path: dict[str, ContentNode] = {}
    by_slug: dict[tuple[NodeKind, str], list[ContentNode]] = defaultdict(list)
    for node in nodes:
        by_path[node.slug_path] = node
        by_slug[(node.kind, node.slug)].append(node)

    diagnostics: list[Diagnostic] = []
    articles = _resolve_list(
        config.featured_articles, NodeKind.ARTICLE, by_path, by_slug, display, diagnostics
    )
    topics = _resolve_list(
        config.featured_topics, NodeKind.TOPIC, by_path, by_slug, display, diagnostics
    )
    return articles, topics, diagnostics


def _resolve_list(
    references: list[str],
    kind: NodeKind,
    by_path: dict[str, ContentNode],
    by_slug: dict[tuple[NodeKind, str], list[ContentNode]],
    display: str,
    diagnostics: list[Diagnostic],
) -> tuple[ContentNode, ...]:
    resolved: list[ContentNode] = []
    seen: set[str] = set()
    for reference in references:
        node, problem = _resolve_reference(reference, kind, by_path, by_slug)
        if node is None:
            diagnostics.append(Diagnostic.error(DiagnosticKind.HOME, COMPONENT, display, problem))
            continue
        if node.slug_path in seen:
            diagnostics.append(
                Diagnostic.warning(
                    DiagnosticKind.HOME,
                    COMPONENT,
                    display,
                    f"Featured {kind.value} {reference!r} is listed more than once",
                )
            )
            continue
        seen.add(node.slug_path)
        resolved.append(node)
    return tuple(resolved)


def _resolve_reference(
    reference: str,
    kind: NodeKind,
    by_path: dict[str, ContentNode],
    by_slug: dict[tuple[NodeKind, str], list[ContentNode]],
) -> tuple[ContentNode | None, str]:
    key = reference.strip().strip("/")
    if "/" in key:
        node = by_path.get(key)
        if node is not None and node.kind is kind:
            return node, ""
        return None, f"Featured {kind.value} not found: {reference}"

    matches = by_slug.get((kind, key), [])
    if not matches:
        return None, f"Featured {kind.value} not found: {reference}"
    if len(matches) > 1:
        return None, (
            f"Featured {kind.value} {reference!r} is ambiguous ({len(matches)} matches); "
            "use the full slug path"
        )
    return matches[0], ""
