"""Derive titles, descriptions and frontmatter from README.md files."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable

import frontmatter
import yaml

from contentnav.fs_utils import read_text_async
from contentnav.scanner import ScannedNode
from contentnav.schemas import Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)

COMPONENT = "metadata"
LAST_UPDATED_KEY = "lastUpdatedOn"

_H1_RE = re.compile(r"^ {0,3}#(?:[ \t]+(?P<text>.*?))?(?:[ \t]+#+)?[ \t]*$")
_H2_RE = re.compile(r"^ {0,3}##(?:[ \t]+.*)?$")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})")
# Used only when the frontmatter library rejects the block.
_FRONT_BLOCK_RE = re.compile(r"\A(---|\+\+\+)[ \t]*\r?\n.*?\r?\n\1[ \t]*(?:\r?\n|\Z)", re.DOTALL)


@dataclass
class ExtractedMetadata:
    """Metadata derived from one markdown file.

    ``title`` is None when the file has no usable H1; such nodes are invalid
    and never reach the navigation tree.
    """

    title: str | None
    description: str = ""
    frontmatter: dict[str, Any] = field(default_factory=dict)
    last_updated_on: date | None = None

    @property
    def is_valid(self) -> bool:
        return self.title is not None


def extract_metadata(
    text: str, *, node_path: str = "<string>"
) -> tuple[ExtractedMetadata, list[Diagnostic]]:
    """Extract title, description and frontmatter from markdown text.

    The title is the text of the first H1. The description is everything
    between that H1 and the next H2 (or end of file), trimmed. A ``Draft:``
    prefix on the H1 is kept as part of the title.

    Args:
        text: Raw markdown, optionally starting with a frontmatter block.
        node_path: Path used in diagnostics.

    Returns:
        Tuple of (metadata, diagnostics).
    """
    diagnostics: list[Diagnostic] = []
    meta, body = _split_frontmatter(text, node_path, diagnostics)
    last_updated_on = _parse_last_updated(meta.get(LAST_UPDATED_KEY), node_path, diagnostics)

    title, description, h1_count = _scan_headings(body)
    if title is None:
        diagnostics.append(
            Diagnostic.error(DiagnosticKind.METADATA, COMPONENT, node_path, "Missing H1 heading")
        )
    elif not title:
        title = None
        diagnostics.append(
            Diagnostic.error(DiagnosticKind.METADATA, COMPONENT, node_path, "H1 heading is empty")
        )
    elif h1_count > 1:
        diagnostics.append(
            Diagnostic.warning(
                DiagnosticKind.METADATA,
                COMPONENT,
                node_path,
                f"Multiple H1 headings found ({h1_count}); using the first",
            )
        )

    return (
        ExtractedMetadata(
            title=title,
            description=description,
            frontmatter=meta,
            last_updated_on=last_updated_on,
        ),
        diagnostics,
    )


async def extract_node_metadata(
    node: ScannedNode, semaphore: asyncio.Semaphore | None = None
) -> tuple[ExtractedMetadata, list[Diagnostic]]:
    """Read one node's README.md off the event loop and extract its metadata."""
    try:
        if semaphore is None:
            text = await read_text_async(node.readme_path)
        else:
            async with semaphore:
                text = await read_text_async(node.readme_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to read %s: %s", node.readme_path, exc)
        return ExtractedMetadata(title=None), [
            Diagnostic.error(
                DiagnosticKind.METADATA,
                COMPONENT,
                node.display_path,
                f"Cannot read file: {exc}",
            )
        ]
    return extract_metadata(text, node_path=node.display_path)


async def extract_tree_metadata(
    nodes: Iterable[ScannedNode], *, max_concurrency: int
) -> tuple[dict[str, ExtractedMetadata], list[Diagnostic]]:
    """Extract metadata for every scanned node concurrently.

    Returns:
        Tuple of (metadata keyed by slug path, diagnostics in node order).
    """
    node_list = list(nodes)
    semaphore = asyncio.Semaphore(max(1, max_concurrency))
    results = await asyncio.gather(*(extract_node_metadata(node, semaphore) for node in node_list))

    metadata: dict[str, ExtractedMetadata] = {}
    diagnostics: list[Diagnostic] = []
    for node, (extracted, node_diagnostics) in zip(node_list, results):
        metadata[node.slug_path] = extracted
        diagnostics.extend(node_diagnostics)
    return metadata, diagnostics


def _split_frontmatter(
    text: str, node_path: str, diagnostics: list[Diagnostic]
) -> tuple[dict[str, Any], str]:
    try:
        post = frontmatter.loads(text)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        diagnostics.append(
            Diagnostic.error(
                DiagnosticKind.METADATA,
                COMPONENT,
                node_path,
                f"Malformed frontmatter: {_first_line(str(exc))}",
            )
        )
        return {}, _FRONT_BLOCK_RE.sub("", text, count=1)
    return dict(post.metadata), post.content


def _parse_last_updated(value: Any, node_path: str, diagnostics: list[Diagnostic]) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    diagnostics.append(
        Diagnostic.warning(
            DiagnosticKind.METADATA,
            COMPONENT,
            node_path,
            f"Ignoring invalid {LAST_UPDATED_KEY} value: {value!r}",
        )
    )
    return None


def _scan_headings(body: str) -> tuple[str | None, str, int]:
    """Return (first H1 text, description, number of H1 headings)."""
    lines = body.splitlines()
    fence: str | None = None
    title: str | None = None
    h1_index: int | None = None
    h2_index: int | None = None
    h1_count = 0

    for index, line in enumerate(lines):
        fence, in_code = _track_fence(line, fence)
        if in_code:
            continue
        match = _H1_RE.match(line)
        if match:
            h1_count += 1
            if h1_index is None:
                h1_index = index
                title = (match.group("text") or "").strip()
            continue
        if h1_index is not None and h2_index is None and _H2_RE.match(line):
            h2_index = index

    if h1_index is None:
        return None, "", 0

    end = h2_index if h2_index is not None else len(lines)
    description = "\n".join(lines[h1_index + 1 : end]).strip()
    return title, description, h1_count


def _track_fence(line: str, fence: str | None) -> tuple[str | None, bool]:
    """Advance fenced-code state; the second value is True for lines inside code."""
    if fence is None:
        match = _FENCE_OPEN_RE.match(line)
        if match:
            return match.group("fence"), True
        return None, False

    stripped = line.strip()
    indent = len(line) - len(line.lstrip(" "))
    if (
        indent <= 3
        and len(stripped) >= len(fence)
        and set(stripped) == {fence[0]}
    ):
        return None, True
    return fence, True


def _first_line(message: str) -> str:
    return message.strip().splitlines()[0] if message.strip() else message
