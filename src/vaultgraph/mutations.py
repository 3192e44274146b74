"""Create, update and delete notes on disk.

Every write is followed by a fresh :meth:`NoteRepository.read` so callers
get exactly what landed on disk.
"""

from __future__ import annotations

import logging

from vaultgraph.errors import InvalidInputError, NoteNotFoundError
from vaultgraph.note import FrontmatterValue, Note
from vaultgraph.parser import dump_frontmatter, unparsed_frontmatter
from vaultgraph.repository import NoteRepository

logger = logging.getLogger(__name__)


def create_note(
    repo: NoteRepository,
    path: str,
    content: str,
    frontmatter: dict[str, FrontmatterValue] | None = None,
    create_folders: bool = True,
) -> Note:
    """Write a new note at *path* and return it as re-read from disk.

    An existing file at *path* is overwritten.
    """
    target = repo.resolve_path(path)
    if create_folders:
        target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dump_frontmatter(frontmatter, content), encoding="utf-8")
    logger.info("Created note %s", path)
    return repo.read(path)


def update_note(
    repo: NoteRepository,
    path: str,
    content: str | None = None,
    frontmatter: dict[str, FrontmatterValue] | None = None,
    append: bool = False,
) -> Note:
    """Replace or append body text and shallow-merge frontmatter of an existing note.

    A front-matter block that is not a valid YAML mapping is kept verbatim;
    merging new frontmatter into it raises :class:`InvalidInputError`.
    """
    existing = repo.read(path)
    target = repo.resolve_path(path)
    raw_block = unparsed_frontmatter(target.read_text(encoding="utf-8"))
    if raw_block is not None and frontmatter:
        raise InvalidInputError(
            "Existing frontmatter is not a valid YAML mapping and cannot be merged",
            field="frontmatter",
            value=path,
        )

    if content is None or (append and not content):
        new_content = existing.content
    elif append:
        new_content = f"{existing.content}\n\n{content}"
    else:
        new_content = content

    if raw_block is not None:
        text = f"{raw_block}{new_content}"
    else:
        merged = {**existing.frontmatter, **frontmatter} if frontmatter else existing.frontmatter
        text = dump_frontmatter(merged, new_content)

    target.write_text(text, encoding="utf-8")
    logger.info("Updated note %s (append=%s)", path, append)
    return repo.read(path)


def delete_note(repo: NoteRepository, path: str) -> None:
    target = repo.resolve_path(path)
    if not target.is_file():
        raise NoteNotFoundError(path)
    target.unlink()
    logger.info("Deleted note %s", path)
