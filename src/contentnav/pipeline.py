"""Full build pass: content tree + JSON5 files -> NavigationModel + report."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from contentnav.assembler import assemble_navigation, assemble_tree
from contentnav.config import (
    CONTENTNAV_ARTICLES_DIRNAME,
    CONTENTNAV_CONTENT_DIR,
    CONTENTNAV_MAX_CONCURRENCY,
    CONTENTNAV_REQUIRE_COMPLETE_ORDERING,
    CONTENTNAV_URL_PREFIX,
    HOME_FILENAME,
    ORDERING_FILENAME,
    SITE_FILENAME,
    VANITY_FILENAME,
)
from contentnav.config_loader import (
    load_home_config,
    load_ordering_config,
    load_redirects,
    load_site_config,
)
from contentnav.exceptions import ContentRootError
from contentnav.fs_utils import relative_to
from contentnav.home import check_home_profile, resolve_featured
from contentnav.metadata import extract_tree_metadata
from contentnav.ordering import check_unique_slugs, resolve_tree_order
from contentnav.redirects import resolve_redirects
from contentnav.reporter import ValidationReporter
from contentnav.scanner import COMPONENT as SCANNER_COMPONENT
from contentnav.scanner import scan_content_tree
from contentnav.schemas import Diagnostic, DiagnosticKind, NavigationModel

logger = logging.getLogger(__name__)


@dataclass
class BuildOptions:
    """Options for a build pass.

    Attributes:
        content_dir: Directory holding ``articles/`` and the JSON5 files.
        articles_dirname: Name of the articles directory inside content_dir.
        url_prefix: Site path prefix for article URLs.
        max_concurrency: Upper bound on concurrent file reads.
        require_complete_ordering: Warn about nodes missing from ordering.json5.
    """

    content_dir: Path = field(default_factory=lambda: CONTENTNAV_CONTENT_DIR)
    articles_dirname: str = CONTENTNAV_ARTICLES_DIRNAME
    url_prefix: str = CONTENTNAV_URL_PREFIX
    max_concurrency: int = CONTENTNAV_MAX_CONCURRENCY
    require_complete_ordering: bool = CONTENTNAV_REQUIRE_COMPLETE_ORDERING

    @property
    def articles_dir(self) -> Path:
        return self.content_dir / self.articles_dirname


@dataclass
class BuildResult:
    """Outcome of a build; ``model`` is None when the build halted."""

    model: NavigationModel | None
    reporter: ValidationReporter

    @property
    def halted(self) -> bool:
        return self.model is None

    @property
    def exit_code(self) -> int:
        return 1 if self.halted or self.reporter.has_errors else 0


async def build_navigation(options: BuildOptions | None = None) -> BuildResult:
    """Scan, extract, order, resolve and assemble the content tree.

    Every stage reports into one ValidationReporter. Only a missing content
    root halts the build; all other problems exclude or flag the offending
    node or entry and the build carries on.

    Args:
        options: Build options. Uses defaults if None.

    Returns:
        BuildResult holding the NavigationModel (None if halted) and the report.
    """
    opts = options or BuildOptions()
    reporter = ValidationReporter()
    content_dir = Path(opts.content_dir)
    display_base = content_dir.parent
    articles_dir = content_dir / opts.articles_dirname

    def display(path: Path) -> str:
        return relative_to(path, display_base)

    try:
        nodes, scan_diagnostics = scan_content_tree(articles_dir, display_base=display_base)
    except ContentRootError as exc:
        logger.error("Build halted: %s", exc)
        reporter.add(
            Diagnostic.error(
                DiagnosticKind.STRUCTURAL, SCANNER_COMPONENT, display(articles_dir), str(exc)
            )
        )
        return BuildResult(model=None, reporter=reporter)
    reporter.extend(scan_diagnostics)
    reporter.extend(check_unique_slugs(nodes))
    logger.info("Scanned %d content nodes under %s", len(nodes), display(articles_dir))

    ordering_path = content_dir / ORDERING_FILENAME
    vanity_path = content_dir / VANITY_FILENAME
    home_path = content_dir / HOME_FILENAME
    site_path = content_dir / SITE_FILENAME

    ordering_config, diagnostics = load_ordering_config(
        ordering_path, display=display(ordering_path)
    )
    reporter.extend(diagnostics)
    redirect_entries, diagnostics = load_redirects(vanity_path, display=display(vanity_path))
    reporter.extend(diagnostics)
    home_config, diagnostics = load_home_config(home_path, display=display(home_path))
    reporter.extend(diagnostics)
    site_config, diagnostics = load_site_config(site_path, display=display(site_path))
    reporter.extend(diagnostics)

    metadata, diagnostics = await extract_tree_metadata(nodes, max_concurrency=opts.max_concurrency)
    reporter.extend(diagnostics)

    # Ordering sees every scanned node, including ones excluded below.
    order, diagnostics = resolve_tree_order(
        nodes,
        ordering_config,
        display=display(ordering_path),
        require_complete=opts.require_complete_ordering,
    )
    reporter.extend(diagnostics)

    categories = assemble_tree(nodes, metadata, order, url_prefix=opts.url_prefix)
    tree = NavigationModel(categories=categories)

    redirects, diagnostics = resolve_redirects(
        redirect_entries,
        tree.url_paths(),
        display=display(vanity_path),
        url_prefix=opts.url_prefix,
    )
    reporter.extend(diagnostics)

    featured_articles, featured_topics, diagnostics = resolve_featured(
        home_config, tree.iter_nodes(), display=display(home_path)
    )
    reporter.extend(diagnostics)
    if home_config is not None:
        reporter.extend(check_home_profile(home_config, display=display(home_path)))

    model = assemble_navigation(
        categories,
        redirects=redirects,
        featured_articles=featured_articles,
        featured_topics=featured_topics,
        site=site_config,
        home=home_config,
    )
    logger.info(
        "Build finished: %d errors, %d warnings",
        len(reporter.errors),
        len(reporter.warnings),
    )
    return BuildResult(model=model, reporter=reporter)


def build_navigation_sync(options: BuildOptions | None = None) -> BuildResult:
    """Run :func:`build_navigation` on a fresh event loop."""
    return asyncio.run(build_navigation(options))
