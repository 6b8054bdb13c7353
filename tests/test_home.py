"""Tests for homepage reference resolution."""

from __future__ import annotations

from contentnav.home import check_home_profile, resolve_featured
from contentnav.schemas import ContentNode, DiagnosticKind, HomeConfig, NodeKind, Severity


def _node(slug_path: str, kind: NodeKind) -> ContentNode:
    return ContentNode(
        kind=kind,
        slug=slug_path.rsplit("/", 1)[-1],
        slug_path=slug_path,
        url_path=f"/articles/{slug_path}",
        path=f"content/articles/{slug_path}/README.md",
        title=slug_path,
        order=0,
    )


NODES = [
    _node("web", NodeKind.CATEGORY),
    _node("web/js", NodeKind.TOPIC),
    _node("web/js/retry", NodeKind.ARTICLE),
    _node("web/js/intro", NodeKind.ARTICLE),
    _node("web/css", NodeKind.TOPIC),
    _node("web/css/intro", NodeKind.ARTICLE),
]


class TestResolveFeatured:
    """Tests for resolve_featured."""

    def test_bare_slugs_and_paths(self) -> None:
        """Unique bare slugs and full slug paths both resolve."""
        config = HomeConfig(featuredArticles=["retry", "web/css/intro"], featuredTopics=["js"])

        articles, topics, diagnostics = resolve_featured(config, NODES)

        assert diagnostics == []
        assert [n.slug_path for n in articles] == ["web/js/retry", "web/css/intro"]
        assert [n.slug_path for n in topics] == ["web/js"]

    def test_ambiguous_bare_slug(self) -> None:
        """A bare slug shared by two articles is an error."""
        config = HomeConfig(featuredArticles=["intro"])

        articles, _, diagnostics = resolve_featured(config, NODES)

        assert articles == ()
        assert diagnostics[0].kind is DiagnosticKind.HOME
        assert "ambiguous" in diagnostics[0].message

    def test_unknown_and_wrong_kind(self) -> None:
        """Missing references and references of another kind are errors."""
        config = HomeConfig(featuredArticles=["missing", "web/js"], featuredTopics=["retry"])

        articles, topics, diagnostics = resolve_featured(config, NODES)

        assert articles == ()
        assert topics == ()
        assert len(diagnostics) == 3
        assert all(d.severity is Severity.ERROR for d in diagnostics)

    def test_repeated_reference_warns(self) -> None:
        config = HomeConfig(featuredArticles=["retry", "web/js/retry"])

        articles, _, diagnostics = resolve_featured(config, NODES)

        assert len(articles) == 1
        assert [d.severity for d in diagnostics] == [Severity.WARNING]

    def test_no_config(self) -> None:
        assert resolve_featured(None, NODES) == ((), (), [])


class TestCheckHomeProfile:
    """Tests for check_home_profile."""

    def test_complete_profile(self) -> None:
        config = HomeConfig(profile={"name": "A", "title": "B"}, profileActions={})

        assert check_home_profile(config) == []

    def test_missing_pieces_warn(self) -> None:
        config = HomeConfig(profile={"name": "A"})

        messages = [d.message for d in check_home_profile(config)]

        assert messages == ["Missing profile.title", "Missing profileActions object"]
