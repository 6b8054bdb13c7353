"""Load the JSON5 sidecar files that live beside the articles directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import json5
from pydantic import ValidationError

from contentnav.exceptions import ConfigLoadError
from contentnav.schemas import (
    ROOT_GROUP,
    Diagnostic,
    DiagnosticKind,
    HomeConfig,
    OrderingConfig,
    RedirectEntry,
    SiteConfig,
)

logger = logging.getLogger(__name__)

COMPONENT = "config"

# Keys of the original ordering file that describe the homepage, not sibling order.
_HOMEPAGE_KEYS = ("featuredArticles", "featuredTopics")


def load_json5(path: Path) -> Any | None:
    """Parse a JSON5 file.

    Returns:
        The parsed document, or None if the file does not exist.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed.
    """
    if not path.is_file():
        return None
    try:
        with path.open(encoding="utf-8") as handle:
            return json5.load(handle, allow_duplicate_keys=False)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise ConfigLoadError(f"Cannot parse {path.name}: {exc}") from exc


def _load_document(
    path: Path, display: str, diagnostics: list[Diagnostic], *, missing_warning: str | None
) -> Any | None:
    try:
        document = load_json5(path)
    except ConfigLoadError as exc:
        diagnostics.append(Diagnostic.error(DiagnosticKind.CONFIG, COMPONENT, display, str(exc)))
        return None
    if document is None and missing_warning:
        diagnostics.append(
            Diagnostic.warning(DiagnosticKind.CONFIG, COMPONENT, display, missing_warning)
        )
    return document


def load_ordering_config(
    path: Path, *, display: str | None = None
) -> tuple[OrderingConfig | None, list[Diagnostic]]:
    """Load ``ordering.json5`` into pinned slug lists keyed by parent slug path.

    Both the flat form (``{"parent/path": [...]}``) and the hierarchical form
    (``{categories: [{id, topics: [{id, articles}]}]}``) are accepted.
    """
    display = display or path.name
    diagnostics: list[Diagnostic] = []
    document = _load_document(
        path,
        display,
        diagnostics,
        missing_warning=f"{path.name} not found; every group is ordered alphabetically",
    )
    if document is None:
        return None, diagnostics
    if not isinstance(document, dict):
        diagnostics.append(
            Diagnostic.error(
                DiagnosticKind.CONFIG, COMPONENT, display, "Ordering file must contain an object"
            )
        )
        return None, diagnostics

    document = dict(document)
    for key in _HOMEPAGE_KEYS:
        if key in document:
            document.pop(key)
            diagnostics.append(
                Diagnostic.warning(
                    DiagnosticKind.CONFIG,
                    COMPONENT,
                    display,
                    f"Ignoring {key}: featured content is configured in home.json5",
                )
            )

    categories = document.get("categories")
    if isinstance(categories, list) and any(isinstance(item, dict) for item in categories):
        groups = _flatten_hierarchical(categories, display, diagnostics)
        for key in document:
            if key != "categories":
                logger.debug("Ignoring key %r in hierarchical ordering file", key)
    else:
        groups = _read_flat_groups(document, display, diagnostics)

    return OrderingConfig(groups=groups), diagnostics


def _read_flat_groups(
    document: dict[str, Any], display: str, diagnostics: list[Diagnostic]
) -> dict[str, tuple[str, ...]]:
    groups: dict[str, tuple[str, ...]] = {}
    for raw_key, value in document.items():
        key = str(raw_key).strip().strip("/")
        label = key or "(root)"
        if key in groups:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.ORDERING,
                    COMPONENT,
                    display,
                    f"Ordering group {label!r} is defined more than once; keeping the first",
                )
            )
            continue
        slugs = _string_list(value, f"group {label!r}", display, diagnostics)
        if slugs is not None:
            groups[key] = slugs
    return groups


def _flatten_hierarchical(
    categories: list[Any], display: str, diagnostics: list[Diagnostic]
) -> dict[str, tuple[str, ...]]:
    groups: dict[str, tuple[str, ...]] = {}
    root: list[str] = []
    for category in categories:
        category_id = _entry_id(category, "category", display, diagnostics)
        if category_id is None:
            continue
        root.append(category_id)
        topic_ids: list[str] = []
        topics = category.get("topics") or []
        if not isinstance(topics, list):
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.ORDERING,
                    COMPONENT,
                    display,
                    f"Topics of category {category_id!r} must be a list",
                )
            )
            topics = []
        for topic in topics:
            topic_id = _entry_id(topic, f"topic in {category_id!r}", display, diagnostics)
            if topic_id is None:
                continue
            topic_ids.append(topic_id)
            articles = _string_list(
                topic.get("articles") or [],
                f"articles of {category_id}/{topic_id}",
                display,
                diagnostics,
            )
            groups.setdefault(f"{category_id}/{topic_id}", articles or ())
        groups.setdefault(category_id, tuple(topic_ids))
    groups[ROOT_GROUP] = tuple(root)
    return groups


def _entry_id(entry: Any, label: str, display: str, diagnostics: list[Diagnostic]) -> str | None:
    if isinstance(entry, dict) and isinstance(entry.get("id"), str) and entry["id"].strip():
        return entry["id"].strip()
    diagnostics.append(
        Diagnostic.error(
            DiagnosticKind.ORDERING, COMPONENT, display, f"Skipping {label} without a string id"
        )
    )
    return None


def _string_list(
    value: Any, label: str, display: str, diagnostics: list[Diagnostic]
) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        diagnostics.append(
            Diagnostic.error(
                DiagnosticKind.ORDERING,
                COMPONENT,
                display,
                f"Ordering {label} must be a list of slugs",
            )
        )
        return None
    slugs: list[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            slugs.append(item.strip())
        else:
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.ORDERING,
                    COMPONENT,
                    display,
                    f"Ignoring non-slug entry {item!r} in ordering {label}",
                )
            )
    return tuple(slugs)


def load_redirects(
    path: Path, *, display: str | None = None
) -> tuple[list[RedirectEntry], list[Diagnostic]]:
    """Load ``vanity.json5``; a missing file means no redirects.

    Entries use ``{from, to}``; the ``{id, target}`` spelling is accepted too.
    """
    display = display or path.name
    diagnostics: list[Diagnostic] = []
    document = _load_document(path, display, diagnostics, missing_warning=None)
    if document is None:
        return [], diagnostics
    if not isinstance(document, list):
        diagnostics.append(
            Diagnostic.error(
                DiagnosticKind.CONFIG, COMPONENT, display, "Redirect file must contain a list"
            )
        )
        return [], diagnostics

    entries: list[RedirectEntry] = []
    for index, item in enumerate(document):
        source = target = None
        if isinstance(item, dict):
            source = item.get("from", item.get("id"))
            target = item.get("to", item.get("target"))
        if not (isinstance(source, str) and source.strip()) or not (
            isinstance(target, str) and target.strip()
        ):
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.REDIRECT,
                    COMPONENT,
                    f"{display}[{index}]",
                    "Redirect entry needs string 'from' and 'to' fields",
                )
            )
            continue
        entries.append(RedirectEntry(source=source.strip(), target=target.strip()))
    return entries, diagnostics


def load_home_config(
    path: Path, *, display: str | None = None
) -> tuple[HomeConfig | None, list[Diagnostic]]:
    """Load ``home.json5``."""
    display = display or path.name
    diagnostics: list[Diagnostic] = []
    document = _load_document(path, display, diagnostics, missing_warning=f"{path.name} not found")
    if document is None:
        return None, diagnostics
    return _validate_model(HomeConfig, document, display, diagnostics), diagnostics


def load_site_config(
    path: Path, *, display: str | None = None
) -> tuple[SiteConfig | None, list[Diagnostic]]:
    """Load ``site.json5``; its contents are passed through verbatim."""
    display = display or path.name
    diagnostics: list[Diagnostic] = []
    document = _load_document(path, display, diagnostics, missing_warning=f"{path.name} not found")
    if document is None:
        return None, diagnostics
    return _validate_model(SiteConfig, document, display, diagnostics), diagnostics


def _validate_model(
    model: Any, document: Any, display: str, diagnostics: list[Diagnostic]
) -> Any | None:
    if not isinstance(document, dict):
        diagnostics.append(
            Diagnostic.error(
                DiagnosticKind.CONFIG, COMPONENT, display, "File must contain an object"
            )
        )
        return None
    try:
        return model.model_validate(document)
    except ValidationError as exc:
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"])
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.CONFIG, COMPONENT, display, f"{location}: {error['msg']}"
                )
            )
        return None
