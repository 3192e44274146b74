"""Backlinks, outlinks, orphans and unlinked references.

All functions take a fresh scan of the vault and recompute from scratch.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from vaultgraph.note import Note, SearchResult
from vaultgraph.resolver import link_matches, resolve_link

SNIPPET_BEFORE = 50
SNIPPET_LENGTH = 150


def make_snippet(content: str, index: int) -> str:
    """Cut a window around *index*, marking truncated ends with ``...``."""
    start = max(0, index - SNIPPET_BEFORE)
    end = min(len(content), index + SNIPPET_LENGTH)
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(content) else ""
    return f"{prefix}{content[start:end]}{suffix}"


def links_to(source: Note, target: Note) -> bool:
    return any(link_matches(link, target) for link in source.links)


def backlinks_of(target: Note, notes: Sequence[Note]) -> list[str]:
    """Paths of every other note that links to *target*, in scan order."""
    return [n.path for n in notes if n.path != target.path and links_to(n, target)]


def outlinks_of(note: Note) -> list[str]:
    return list(note.links)


def orphans(notes: Sequence[Note]) -> list[str]:
    """Paths of notes no link in the vault resolves to.

    Dangling links are ignored rather than reported.
    """
    linked: set[str] = set()
    for note in notes:
        for link in note.links:
            resolved = resolve_link(link, notes)
            if resolved is not None:
                linked.add(resolved.path)
    return [n.path for n in notes if n.path not in linked]


def unlinked_references(
    target: Note, notes: Sequence[Note], limit: int = 50
) -> list[SearchResult]:
    """Find plain-text mentions of *target*'s name or aliases in notes that don't link to it.

    Results are ranked by mention count (ties keep scan order) and capped at
    *limit*.
    """
    terms = [t for t in [target.name, *target.aliases] if t.strip()]
    patterns = [re.compile(rf"\b{re.escape(t)}\b", re.IGNORECASE) for t in terms]

    results: list[SearchResult] = []
    for note in notes:
        if note.path == target.path or links_to(note, target):
            continue
        for pattern in patterns:
            matches = list(pattern.finditer(note.content))
            if not matches:
                continue
            results.append(
                SearchResult(
                    path=note.path,
                    name=note.name,
                    score=len(matches),
                    match_type="content",
                    snippet=make_snippet(note.content, matches[0].start()),
                )
            )
            break

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]
