"""Full-text, tag and frontmatter search over a vault scan."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any, Literal

from vaultgraph.backlinks import make_snippet
from vaultgraph.note import Note, SearchResult, TagInfo

# Relevance weights shared by every search producing SearchResult scores
SCORE_WEIGHTS: dict[str, int] = {
    "TITLE_EXACT": 100,
    "TITLE_PARTIAL": 50,
    "HEADING": 30,
    "CONTENT_EARLY": 20,
    "CONTENT_LATE": 5,
    "TAG": 40,
    "FRONTMATTER": 35,
}
# Matches in the first fifth of the body count as "early"
EARLY_MATCH_RATIO = 0.2

TagSort = Literal["count", "name"]


def search_content(
    query: str,
    notes: Sequence[Note],
    *,
    tag: str | None = None,
    case_sensitive: bool = False,
    limit: int | None = None,
) -> list[SearchResult]:
    """Rank notes whose name, frontmatter title or body contain *query*.

    Each note yields at most one result: a name hit short-circuits the title
    and body checks. Results are sorted by score, ties in scan order.
    """
    if not query:
        return []
    fold = (lambda s: s) if case_sensitive else str.lower
    needle = fold(query)
    # Offsets must index into note.content itself
    pattern = re.compile(re.escape(query), 0 if case_sensitive else re.IGNORECASE)

    results: list[SearchResult] = []
    for note in notes:
        if tag and tag not in note.tags:
            continue

        name = fold(note.name)
        if needle in name:
            score = SCORE_WEIGHTS["TITLE_EXACT"] if name == needle else SCORE_WEIGHTS["TITLE_PARTIAL"]
            results.append(SearchResult(note.path, note.name, score, "title"))
            continue

        fm_title = note.frontmatter.get("title")
        if fm_title and needle in fold(str(fm_title)):
            results.append(SearchResult(note.path, note.name, SCORE_WEIGHTS["TITLE_PARTIAL"], "title"))
            continue

        match = pattern.search(note.content)
        if match:
            index = match.start()
            early = index / len(note.content) < EARLY_MATCH_RATIO
            score = SCORE_WEIGHTS["CONTENT_EARLY"] if early else SCORE_WEIGHTS["CONTENT_LATE"]
            results.append(
                SearchResult(
                    note.path,
                    note.name,
                    score,
                    "content",
                    snippet=make_snippet(note.content, index),
                )
            )

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit] if limit else results


def normalize_tag(tag: str) -> str:
    return tag[1:] if tag.startswith("#") else tag


def search_by_tag(tag: str, notes: Sequence[Note]) -> list[Note]:
    """Notes tagged *tag* or any nested ``tag/...`` below it."""
    wanted = normalize_tag(tag)
    prefix = f"{wanted}/"
    return [n for n in notes if any(t == wanted or t.startswith(prefix) for t in n.tags)]


def list_tags(notes: Sequence[Note], sort_by: TagSort = "count") -> list[TagInfo]:
    """Tag usage counts, most used first or alphabetical with ``sort_by="name"``."""
    counts: Counter[str] = Counter()
    for note in notes:
        counts.update(note.tags)
    tags = [TagInfo(tag=t, count=c) for t, c in counts.items()]
    if sort_by == "name":
        tags.sort(key=lambda t: (t.tag.lower(), t.tag))
    else:
        tags.sort(key=lambda t: t.count, reverse=True)
    return tags


def frontmatter_str(value: Any) -> str:
    """String form of a frontmatter value for equality checks."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def search_frontmatter(
    field: str, notes: Sequence[Note], value: str | None = None
) -> list[Note]:
    """Notes whose frontmatter has *field*, or whose *field* equals *value*.

    A list-valued field matches when any element equals *value*.
    """
    matched: list[Note] = []
    for note in notes:
        if field not in note.frontmatter:
            continue
        if value is None:
            matched.append(note)
            continue
        current = note.frontmatter[field]
        if isinstance(current, list):
            if any(frontmatter_str(v) == value for v in current):
                matched.append(note)
        elif frontmatter_str(current) == value:
            matched.append(note)
    return matched
