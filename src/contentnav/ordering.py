"""Merge pinned ordering configuration with the scanned sibling groups."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Sequence

from contentnav.scanner import ScannedNode
from contentnav.schemas import ROOT_GROUP, Diagnostic, DiagnosticKind, NodeKind, OrderingConfig

logger = logging.getLogger(__name__)

COMPONENT = "ordering"


def _group_label(parent: str) -> str:
    return repr(parent) if parent != ROOT_GROUP else "(root)"


def order_siblings(
    parent: str,
    slugs: Iterable[str],
    pinned: Sequence[str],
    *,
    display: str = "ordering.json5",
    require_complete: bool = False,
) -> tuple[list[str], list[Diagnostic]]:
    """Order one sibling group.

    Pinned slugs come first in configuration order; the remaining siblings
    follow sorted by slug. Unknown slugs are reported and skipped, and for a
    slug pinned twice the first occurrence wins.

    Args:
        parent: Slug path of the parent (``""`` for categories).
        slugs: Slugs present on disk in this group.
        pinned: Slugs listed for this group in the ordering file.
        display: Path of the ordering file for diagnostics.
        require_complete: Warn about siblings the ordering file leaves out.

    Returns:
        Tuple of (ordered slugs, diagnostics).
    """
    present = set(slugs)
    label = _group_label(parent)
    ordered: list[str] = []
    seen: set[str] = set()
    diagnostics: list[Diagnostic] = []

    for slug in pinned:
        if slug in seen:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.ORDERING,
                    COMPONENT,
                    display,
                    f"Duplicate slug {slug!r} in ordering group {label}; first occurrence wins",
                )
            )
            continue
        seen.add(slug)
        if slug not in present:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.ORDERING,
                    COMPONENT,
                    display,
                    f"Ordering group {label} references unknown slug {slug!r}",
                )
            )
            continue
        ordered.append(slug)

    unlisted = sorted(present - seen)
    if require_complete:
        for slug in unlisted:
            diagnostics.append(
                Diagnostic.warning(
                    DiagnosticKind.ORDERING,
                    COMPONENT,
                    display,
                    f"Slug {slug!r} is missing from ordering group {label}",
                )
            )
    ordered.extend(unlisted)
    return ordered, diagnostics


def resolve_tree_order(
    nodes: Iterable[ScannedNode],
    config: OrderingConfig | None,
    *,
    display: str = "ordering.json5",
    require_complete: bool = False,
) -> tuple[dict[str, list[str]], list[Diagnostic]]:
    """Resolve sibling order for every group of the scanned tree.

    Must run on the complete node set so that references to nodes scanned
    later are not mistaken for dangling ones.

    Returns:
        Tuple of (ordered child slugs keyed by parent slug path, diagnostics).
    """
    config = config or OrderingConfig()
    children: dict[str, list[str]] = defaultdict(list)
    parents = {ROOT_GROUP}
    for node in nodes:
        children[node.parent_path].append(node.slug)
        if node.kind is not NodeKind.ARTICLE:
            parents.add(node.slug_path)

    diagnostics: list[Diagnostic] = []
    for group in sorted(config.groups):
        if group not in parents:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.ORDERING,
                    COMPONENT,
                    display,
                    f"Ordering group {group!r} does not match any category or topic",
                )
            )

    resolved: dict[str, list[str]] = {}
    for parent in sorted(parents):
        ordered, group_diagnostics = order_siblings(
            parent,
            children.get(parent, []),
            config.pinned_for(parent),
            display=display,
            require_complete=require_complete,
        )
        resolved[parent] = ordered
        diagnostics.extend(group_diagnostics)

    logger.debug("Resolved order for %d groups", len(resolved))
    return resolved, diagnostics


def check_unique_slugs(nodes: Iterable[ScannedNode]) -> list[Diagnostic]:
    """Report slugs shared by more than one node anywhere in the tree.

    Topic groups and featured references may name nodes by bare slug, so a
    slug has to identify one node site-wide. One error is reported per slug,
    against the second node that uses it.
    """
    by_slug: dict[str, list[ScannedNode]] = defaultdict(list)
    for node in nodes:
        by_slug[node.slug].append(node)

    diagnostics: list[Diagnostic] = []
    for slug, owners in by_slug.items():
        if len(owners) < 2:
            continue
        paths = ", ".join(owner.slug_path for owner in owners)
        diagnostics.append(
            Diagnostic.error(
                DiagnosticKind.ORDERING,
                COMPONENT,
                owners[1].display_path,
                f"Slug {slug!r} is not unique across the site: {paths}",
            )
        )
    return diagnostics
