"""End-to-end tests for a full build pass."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from contentnav.pipeline import BuildOptions, build_navigation, build_navigation_sync
from contentnav.schemas import DiagnosticKind, NodeKind, Severity


@pytest.fixture
def site_tree(
    content_dir: Path,
    write_readme: Callable[..., Path],
    write_config: Callable[[str, str], Path],
) -> Path:
    """A small but complete content directory."""
    write_readme("programming", "Programming", "Code and craft.\n\n## Topics\n")
    write_readme("programming/js", "JavaScript", "Runtime notes.")
    write_readme("programming/js/retry", "Exponential Backoff", "Retry with jitter.\n\n## Basics\n")
    write_readme("programming/js/queue", "Draft: Async Queue", "Bounded concurrency.")
    write_readme("programming/js/abort", "Abortable Tasks")
    write_readme("testing", "Testing")
    write_readme("testing/k6", "Performance Testing with k6")
    write_readme("testing/k6/ramp-up", "Ramping Users")

    write_config(
        "ordering.json5",
        """{
          "": ["testing", "programming"],
          "programming/js": ["queue", "retry"],
        }""",
    )
    write_config(
        "vanity.json5",
        """[
          { from: "/retry", to: "programming/js/retry" },
          { id: "github", target: "https://github.com/example" },
        ]""",
    )
    write_config(
        "home.json5",
        """{
          profile: { name: "Author", title: "Engineer" },
          profileActions: { allArticles: "/articles" },
          featuredArticles: ["retry"],
          featuredTopics: ["testing/k6"],
        }""",
    )
    write_config("site.json5", "{ name: 'Notes', baseUrl: 'https://example.com' }")
    return content_dir


class TestBuildNavigation:
    """Tests for build_navigation."""

    @pytest.mark.asyncio
    async def test_clean_build(self, site_tree: Path) -> None:
        """A consistent tree builds with no diagnostics."""
        result = await build_navigation(BuildOptions(content_dir=site_tree))

        assert result.reporter.diagnostics == ()
        assert result.exit_code == 0
        model = result.model
        assert model is not None
        assert [c.slug for c in model.categories] == ["testing", "programming"]
        js = model.find("programming/js")
        assert js is not None
        assert [a.slug for a in js.children] == ["queue", "retry", "abort"]
        assert [a.order for a in js.children] == [0, 1, 2]
        assert js.children[0].is_draft
        assert js.children[1].description == "Retry with jitter."
        assert model.redirects == {
            "/retry": "/articles/programming/js/retry",
            "/github": "https://github.com/example",
        }
        assert [n.slug_path for n in model.featured_articles] == ["programming/js/retry"]
        assert [n.kind for n in model.featured_topics] == [NodeKind.TOPIC]
        assert model.site == {"name": "Notes", "baseUrl": "https://example.com"}
        assert model.home["profile"]["name"] == "Author"

    @pytest.mark.asyncio
    async def test_orders_are_contiguous(self, site_tree: Path) -> None:
        """Sibling ranks are unique and start at 0 at every level."""
        result = await build_navigation(BuildOptions(content_dir=site_tree))
        model = result.model
        assert model is not None

        groups = [model.categories] + [node.children for node in model.iter_nodes()]
        for siblings in groups:
            assert [node.order for node in siblings] == list(range(len(siblings)))

    @pytest.mark.asyncio
    async def test_missing_h1_excludes_node(
        self, site_tree: Path, write_readme: Callable[..., Path]
    ) -> None:
        """A README.md without an H1 is reported and kept out of navigation."""
        write_readme("programming/js/abort", raw="No heading here.\n")

        result = await build_navigation(BuildOptions(content_dir=site_tree))

        model = result.model
        assert model is not None
        assert model.find("programming/js/abort") is None
        metadata_errors = result.reporter.by_kind(DiagnosticKind.METADATA)
        assert len(metadata_errors) == 1
        assert metadata_errors[0].node_path == "content/articles/programming/js/abort/README.md"
        assert result.exit_code == 1

    @pytest.mark.asyncio
    async def test_dangling_ordering_reference(
        self, site_tree: Path, write_config: Callable[[str, str], Path]
    ) -> None:
        """An ordering entry for a missing slug is one OrderingError; the rest still orders."""
        write_config("ordering.json5", '{ "programming/js": ["foo", "retry"] }')

        result = await build_navigation(BuildOptions(content_dir=site_tree))

        ordering_errors = result.reporter.by_kind(DiagnosticKind.ORDERING)
        assert len(ordering_errors) == 1
        assert "'foo'" in ordering_errors[0].message
        js = result.model.find("programming/js")
        assert [a.slug for a in js.children] == ["retry", "abort", "queue"]

    @pytest.mark.asyncio
    async def test_redirect_to_excluded_node_is_reported(
        self, site_tree: Path, write_readme: Callable[..., Path]
    ) -> None:
        """Targets are validated against the assembled tree, not the raw scan."""
        write_readme("programming/js/retry", raw="no title\n")

        result = await build_navigation(BuildOptions(content_dir=site_tree))

        assert "/retry" not in result.model.redirects
        assert len(result.reporter.by_kind(DiagnosticKind.REDIRECT)) == 1
        assert len(result.reporter.by_kind(DiagnosticKind.HOME)) == 1

    @pytest.mark.asyncio
    async def test_structural_problem_does_not_stop_build(
        self, site_tree: Path, write_readme: Callable[..., Path]
    ) -> None:
        """A too-deep README.md is reported while the rest of the tree is built."""
        write_readme("testing/k6/ramp-up/extra", "Too Deep")

        result = await build_navigation(BuildOptions(content_dir=site_tree))

        structural = result.reporter.by_kind(DiagnosticKind.STRUCTURAL)
        assert len(structural) == 1
        assert result.model.find("testing/k6/ramp-up") is not None

    @pytest.mark.asyncio
    async def test_strict_ordering_warns(self, site_tree: Path) -> None:
        options = BuildOptions(content_dir=site_tree, require_complete_ordering=True)
        result = await build_navigation(options)

        warnings = result.reporter.warnings
        assert warnings
        assert all(d.kind is DiagnosticKind.ORDERING for d in warnings)
        assert result.exit_code == 0

    @pytest.mark.asyncio
    async def test_missing_configuration_files(
        self, content_dir: Path, write_readme: Callable[..., Path]
    ) -> None:
        """Without sidecar files the build succeeds with warnings only."""
        write_readme("b")
        write_readme("a")

        result = await build_navigation(BuildOptions(content_dir=content_dir))

        assert result.exit_code == 0
        assert [c.slug for c in result.model.categories] == ["a", "b"]
        assert {d.severity for d in result.reporter.diagnostics} == {Severity.WARNING}
        assert result.model.redirects == {}

    @pytest.mark.asyncio
    async def test_slug_shared_across_topics_is_reported(
        self, content_dir: Path, write_readme: Callable[..., Path]
    ) -> None:
        """Article slugs must be unique site-wide; both nodes still build."""
        for slug_path in ("alpha", "alpha/t1", "alpha/t1/intro"):
            write_readme(slug_path)
        for slug_path in ("beta", "beta/t2", "beta/t2/intro"):
            write_readme(slug_path)

        result = await build_navigation(BuildOptions(content_dir=content_dir))

        conflicts = [d for d in result.reporter.errors if "intro" in d.message]
        assert len(conflicts) == 1
        assert conflicts[0].kind is DiagnosticKind.ORDERING
        assert conflicts[0].node_path == "content/articles/beta/t2/intro/README.md"
        assert result.exit_code == 1
        assert result.model.find("alpha/t1/intro") is not None
        assert result.model.find("beta/t2/intro") is not None

    @pytest.mark.asyncio
    async def test_missing_root_halts(self, tmp_path: Path) -> None:
        """A missing articles directory halts without a model."""
        result = await build_navigation(BuildOptions(content_dir=tmp_path / "content"))

        assert result.halted
        assert result.model is None
        assert result.exit_code == 1
        assert [d.kind for d in result.reporter.diagnostics] == [DiagnosticKind.STRUCTURAL]

    def test_sync_wrapper(self, site_tree: Path) -> None:
        result = build_navigation_sync(BuildOptions(content_dir=site_tree, max_concurrency=1))

        assert result.exit_code == 0
        assert result.model is not None
