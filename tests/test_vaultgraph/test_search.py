"""Unit tests for vaultgraph.search."""

import textwrap
from datetime import date, datetime, timezone

import pytest

from vaultgraph.note import Note
from vaultgraph.parser import build_note
from vaultgraph.search import (
    SCORE_WEIGHTS,
    frontmatter_str,
    list_tags,
    search_by_tag,
    search_content,
    search_frontmatter,
)

_NOW = datetime(2024, 1, 15, tzinfo=timezone.utc)


def _note(path: str, content: str = "") -> Note:
    return build_note(textwrap.dedent(content), path, _NOW, _NOW)


@pytest.fixture()
def notes() -> list[Note]:
    return [
        _note("kubernetes.md", "All about clusters. #project/alpha"),
        _note("Kubernetes Notes.md", "Scratch. #project"),
        _note("deploy.md", """\
            ---
            title: Deploying Kubernetes
            status: draft
            priority: 2
            ---
            Steps. #project/beta
        """),
        _note("log.md", "x" * 200 + " kubernetes mentioned late. #alpha"),
        _note("early.md", "kubernetes mentioned early" + " y" * 200),
        _note("misc.md", """\
            ---
            status: [draft, review]
            published: true
            ---
            Nothing relevant.
        """),
    ]


# ---------------------------------------------------------------------------
# search_content
# ---------------------------------------------------------------------------


class TestSearchContent:
    def test_ranking(self, notes: list[Note]):
        results = search_content("kubernetes", notes)
        assert [(r.path, r.score) for r in results] == [
            ("kubernetes.md", SCORE_WEIGHTS["TITLE_EXACT"]),
            ("Kubernetes Notes.md", SCORE_WEIGHTS["TITLE_PARTIAL"]),
            ("deploy.md", SCORE_WEIGHTS["TITLE_PARTIAL"]),
            ("early.md", SCORE_WEIGHTS["CONTENT_EARLY"]),
            ("log.md", SCORE_WEIGHTS["CONTENT_LATE"]),
        ]

    def test_match_types_and_snippets(self, notes: list[Note]):
        by_path = {r.path: r for r in search_content("kubernetes", notes)}
        assert by_path["deploy.md"].match_type == "title"
        assert by_path["deploy.md"].snippet is None
        assert by_path["log.md"].match_type == "content"
        assert "kubernetes" in by_path["log.md"].snippet
        assert by_path["log.md"].snippet.startswith("...")

    def test_case_sensitive(self, notes: list[Note]):
        paths = [r.path for r in search_content("Kubernetes", notes, case_sensitive=True)]
        assert paths == ["Kubernetes Notes.md", "deploy.md"]

    def test_tag_filter(self, notes: list[Note]):
        paths = [r.path for r in search_content("kubernetes", notes, tag="alpha")]
        assert paths == ["log.md"]

    def test_limit(self, notes: list[Note]):
        assert len(search_content("kubernetes", notes, limit=2)) == 2

    def test_snippet_offset_with_expanding_lowercase(self):
        content = "\u0130" * 60 + " target word"
        (result,) = search_content("TARGET", [_note("wide.md", content)])
        assert result.snippet == "..." + content[11:]

    def test_empty_query(self, notes: list[Note]):
        assert search_content("", notes) == []

    def test_no_match(self, notes: list[Note]):
        assert search_content("terraform", notes) == []


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestSearchByTag:
    def test_hierarchical_match(self, notes: list[Note]):
        paths = [n.path for n in search_by_tag("project", notes)]
        assert paths == ["kubernetes.md", "Kubernetes Notes.md", "deploy.md"]

    def test_exact_nested_tag(self, notes: list[Note]):
        assert [n.path for n in search_by_tag("project/alpha", notes)] == ["kubernetes.md"]

    def test_no_prefix_false_positive(self, notes: list[Note]):
        # "alpha" must not match "project/alpha"
        assert [n.path for n in search_by_tag("#alpha", notes)] == ["log.md"]

    def test_partial_word_is_not_a_match(self, notes: list[Note]):
        assert search_by_tag("proj", notes) == []


class TestListTags:
    def test_counts(self, notes: list[Note]):
        counts = {t.tag: t.count for t in list_tags(notes)}
        assert counts == {"project/alpha": 1, "project": 1, "project/beta": 1, "alpha": 1}

    def test_sorted_by_count(self):
        notes = [_note("a.md", "#one #two"), _note("b.md", "#two")]
        assert [t.tag for t in list_tags(notes)] == ["two", "one"]

    def test_sorted_by_name(self):
        notes = [_note("a.md", "#beta #Alpha #gamma")]
        assert [t.tag for t in list_tags(notes, sort_by="name")] == ["Alpha", "beta", "gamma"]


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------


class TestSearchFrontmatter:
    def test_field_presence(self, notes: list[Note]):
        assert [n.path for n in search_frontmatter("status", notes)] == ["deploy.md", "misc.md"]

    def test_scalar_value(self, notes: list[Note]):
        assert [n.path for n in search_frontmatter("priority", notes, "2")] == ["deploy.md"]

    def test_list_value_any_element(self, notes: list[Note]):
        assert [n.path for n in search_frontmatter("status", notes, "review")] == ["misc.md"]
        assert [n.path for n in search_frontmatter("status", notes, "draft")] == [
            "deploy.md",
            "misc.md",
        ]

    def test_boolean_value(self, notes: list[Note]):
        assert [n.path for n in search_frontmatter("published", notes, "true")] == ["misc.md"]

    def test_missing_field(self, notes: list[Note]):
        assert search_frontmatter("nope", notes) == []

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (False, "false"),
            (3.0, "3"),
            (2.5, "2.5"),
            (date(2024, 1, 15), "2024-01-15"),
            ("text", "text"),
        ],
    )
    def test_frontmatter_str(self, value, expected):
        assert frontmatter_str(value) == expected
