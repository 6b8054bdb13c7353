"""Discover category, topic and article directories under the content root."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from contentnav.config import README_FILENAME
from contentnav.exceptions import ContentRootError
from contentnav.fs_utils import list_subdirs, relative_to
from contentnav.schemas import MAX_CONTENT_DEPTH, Diagnostic, DiagnosticKind, NodeKind

logger = logging.getLogger(__name__)

COMPONENT = "scanner"


@dataclass(frozen=True)
class ScannedNode:
    """A README.md found at a valid content depth.

    Attributes:
        kind: Node kind implied by the depth.
        slug: Directory name.
        slug_path: Slash-joined directory names from the content root.
        readme_path: Filesystem path of the README.md.
        display_path: README path as shown in diagnostics.
        depth: Directory depth below the content root (1-3).
    """

    kind: NodeKind
    slug: str
    slug_path: str
    readme_path: Path
    display_path: str
    depth: int

    @property
    def parent_path(self) -> str:
        """Slug path of the parent node, ``""`` for categories."""
        parent, _, _ = self.slug_path.rpartition("/")
        return parent


def scan_content_tree(
    root: Path, *, display_base: Path | None = None
) -> tuple[list[ScannedNode], list[Diagnostic]]:
    """Walk ``root`` and collect every README.md at category/topic/article depth.

    Structural problems are returned as diagnostics and never stop the walk, so
    siblings of a bad directory are still scanned.

    Args:
        root: The articles directory.
        display_base: Base used to render paths in diagnostics. Defaults to the
            parent of ``root``.

    Returns:
        Tuple of (nodes, diagnostics), nodes in sorted depth-first order.

    Raises:
        ContentRootError: If ``root`` does not exist or is not a directory.
    """
    if not root.is_dir():
        raise ContentRootError(f"Content directory not found: {root}")

    base = display_base if display_base is not None else root.parent
    nodes: list[ScannedNode] = []
    diagnostics: list[Diagnostic] = []
    _walk(root, root=root, base=base, depth=0, nodes=nodes, diagnostics=diagnostics)
    logger.debug("Scanned %s: %d nodes, %d issues", root, len(nodes), len(diagnostics))
    return nodes, diagnostics


def _walk(
    directory: Path,
    *,
    root: Path,
    base: Path,
    depth: int,
    nodes: list[ScannedNode],
    diagnostics: list[Diagnostic],
) -> None:
    try:
        subdirs = list_subdirs(directory)
    except OSError as exc:
        diagnostics.append(
            Diagnostic.error(
                DiagnosticKind.STRUCTURAL,
                COMPONENT,
                relative_to(directory, base),
                f"Cannot read directory: {exc}",
            )
        )
        return

    for subdir in subdirs:
        child_depth = depth + 1
        readme = subdir / README_FILENAME
        display_readme = relative_to(readme, base)

        if child_depth > MAX_CONTENT_DEPTH:
            if readme.is_file():
                diagnostics.append(
                    Diagnostic.error(
                        DiagnosticKind.STRUCTURAL,
                        COMPONENT,
                        display_readme,
                        f"README.md is {child_depth} levels deep; content nodes must sit "
                        f"at most {MAX_CONTENT_DEPTH} levels below the content root",
                    )
                )
        elif readme.is_file():
            nodes.append(
                ScannedNode(
                    kind=NodeKind.from_depth(child_depth),
                    slug=subdir.name,
                    slug_path=relative_to(subdir, root),
                    readme_path=readme,
                    display_path=display_readme,
                    depth=child_depth,
                )
            )
        elif child_depth < MAX_CONTENT_DEPTH or _looks_like_node(subdir):
            diagnostics.append(
                Diagnostic.error(
                    DiagnosticKind.STRUCTURAL,
                    COMPONENT,
                    relative_to(subdir, base),
                    f"Missing {README_FILENAME} in "
                    f"{NodeKind.from_depth(child_depth).value} directory",
                )
            )
        else:
            logger.debug("Skipping asset directory %s", relative_to(subdir, base))

        _walk(
            subdir, root=root, base=base, depth=child_depth, nodes=nodes, diagnostics=diagnostics
        )


def _looks_like_node(directory: Path) -> bool:
    """An article-depth directory holding markdown is meant to be an article."""
    try:
        return any(
            child.is_file() and child.suffix.lower() == ".md" for child in directory.iterdir()
        )
    except OSError:
        return False
