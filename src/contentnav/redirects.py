"""Validate vanity redirects against the assembled navigation tree."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Sequence

from contentnav.config import CONTENTNAV_URL_PREFIX, STATIC_ROUTES
from contentnav.schemas import Diagnostic, DiagnosticKind, RedirectEntry
from contentnav.url_utils import is_external, normalize_path, url_path_for

logger = logging.getLogger(__name__)

COMPONENT = "redirects"


def canonical_target(target: str, *, url_prefix: str = CONTENTNAV_URL_PREFIX) -> str:
    """Normalise a redirect target.

    External URLs pass through unchanged, ``/``-rooted targets are site paths,
    and anything else is a slug path under the articles prefix.
    """
    target = target.strip()
    if is_external(target):
        return target
    if target.startswith("/"):
        return normalize_path(target)
    return url_path_for(target, url_prefix)


def resolve_redirects(
    entries: Sequence[RedirectEntry],
    valid_paths: Iterable[str],
    *,
    display: str = "vanity.json5",
    url_prefix: str = CONTENTNAV_URL_PREFIX,
    static_routes: Iterable[str] = STATIC_ROUTES,
) -> tuple[dict[str, str], list[Diagnostic]]:
    """Build the redirect table from vanity entries.

    A source defined more than once is reported once and dropped entirely.
    Internal targets must be a node URL or a static route, and may not point
    at another redirect source. External targets are not checked.

    Args:
        entries: Entries in file order.
        valid_paths: URL paths of every node in the assembled tree.
        display: Path of the vanity file for diagnostics.
        url_prefix: URL prefix for slug-path targets.
        static_routes: Site routes that exist without a content node. The
            index at ``url_prefix`` is always accepted.

    Returns:
        Tuple of (source path to target, diagnostics).
    """
    known = {normalize_path(path) for path in valid_paths}
    known.update(normalize_path(route) for route in static_routes)
    known.add(normalize_path(url_prefix))

    sources = [normalize_path(entry.source) for entry in entries]
    counts = Counter(sources)
    source_set = set(counts)

    diagnostics: list[Diagnostic] = []
    for source, count in counts.items():
        if count > 1:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.REDIRECT,
                    COMPONENT,
                    display,
                    f"Redirect source {source} is defined {count} times",
                )
            )

    table: dict[str, str] = {}
    for source, entry in zip(sources, entries):
        if counts[source] > 1:
            continue
        target = canonical_target(entry.target, url_prefix=url_prefix)
        if is_external(target):
            table[source] = target
            continue
        if target in source_set:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.REDIRECT,
                    COMPONENT,
                    display,
                    f"Redirect {source} -> {target} points at another redirect",
                )
            )
            continue
        if target not in known:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.REDIRECT,
                    COMPONENT,
                    display,
                    f"Invalid internal redirect target: {source} -> {target}",
                )
            )
            continue
        table[source] = target

    logger.debug("Resolved %d of %d redirects", len(table), len(entries))
    return table, diagnostics
