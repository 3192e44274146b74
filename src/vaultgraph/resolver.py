"""Link-target resolution against the note collection.

A note can be reached by its filename, its vault-relative path or any of its
frontmatter aliases; all three count as the same identity.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from vaultgraph.note import Note
from vaultgraph.repository import MARKDOWN_EXTENSIONS


def strip_markdown_extension(target: str) -> str:
    lowered = target.lower()
    for ext in MARKDOWN_EXTENSIONS:
        if lowered.endswith(ext):
            return target[: -len(ext)]
    return target


def link_matches(target: str, note: Note) -> bool:
    """Return ``True`` when the link *target* points at *note*."""
    link = strip_markdown_extension(target).lower()
    if link == note.name.lower():
        return True
    if link == strip_markdown_extension(note.path).lower():
        return True
    return any(alias.lower() == link for alias in note.aliases)


def find_by_title(title: str, notes: Sequence[Note]) -> Note | None:
    """Find a note by loose title, most specific match first.

    Tries exact filename, frontmatter ``title``, alias, then a filename
    substring; the first note in scan order wins within a tier.
    """
    wanted = title.lower()
    tiers = (
        lambda n: n.name.lower() == wanted,
        lambda n: n.frontmatter.get("title") is not None
        and str(n.frontmatter["title"]).lower() == wanted,
        lambda n: any(alias.lower() == wanted for alias in n.aliases),
        lambda n: wanted in n.name.lower(),
    )
    for matches in tiers:
        for note in notes:
            if matches(note):
                return note
    return None


def suggest_titles(partial: str, notes: Iterable[Note], limit: int = 5) -> list[str]:
    """Names containing *partial* (case-insensitive), for "did you mean" hints."""
    wanted = partial.lower()
    result: list[str] = []
    for note in notes:
        if len(result) >= limit:
            break
        if wanted in note.name.lower():
            result.append(note.name)
    return result


def resolve_link(target: str, notes: Sequence[Note]) -> Note | None:
    """Resolve a raw link to the note it most likely refers to.

    Exact filename/path/alias identity wins; otherwise falls back to
    :func:`find_by_title` on the extension-less target.
    """
    for note in notes:
        if link_matches(target, note):
            return note
    cleaned = strip_markdown_extension(target)
    if not cleaned:
        return None
    return find_by_title(cleaned, notes)
