"""VaultService: the operations exposed to the tool-dispatch layer.

Every method starts from a fresh repository scan and returns plain entities
(:class:`Note`, :class:`SearchResult`, ...) or raises a
:class:`~vaultgraph.errors.VaultError`; rendering is the caller's job.

Usage::

    service = VaultService("/path/to/vault")

    service.get_note(title="Project Ideas")
    service.search_content("kubernetes", folder="work", limit=10)
    service.get_backlinks("work/Project Ideas.md")
    service.get_graph_view(central_note="index.md", max_depth=1)
"""

from __future__ import annotations

import logging
from pathlib import Path

from vaultgraph import backlinks, daily, graph, mutations, resolver, search
from vaultgraph.config import DEFAULT_DAILY_NOTES_FOLDER, VaultConfig
from vaultgraph.errors import InvalidInputError, NoteNotFoundError
from vaultgraph.note import (
    FolderInfo,
    FrontmatterValue,
    GraphData,
    Note,
    NoteListing,
    SearchResult,
    TagInfo,
    VaultStats,
)
from vaultgraph.repository import NoteRepository, is_markdown_file

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
SUGGESTION_LIMIT = 5


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise InvalidInputError(f"{name} must be a positive integer", field=name, value=value)


class VaultService:
    """Query and mutation operations over one vault directory."""

    def __init__(
        self,
        vault_dir: Path | str,
        daily_notes_folder: str = DEFAULT_DAILY_NOTES_FOLDER,
    ) -> None:
        self.repository = NoteRepository(vault_dir)
        self.daily_notes_folder = daily_notes_folder

    @classmethod
    def from_config(cls, config: VaultConfig) -> "VaultService":
        return cls(config.vault_path, daily_notes_folder=config.daily_notes_folder)

    @property
    def vault_dir(self) -> Path:
        return self.repository.vault_dir

    def _target(self, path: str) -> Note:
        """Read the note at *path*, after checking the vault itself is reachable."""
        self.repository.validate()
        return self.repository.read(path)

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    def get_note(self, path: str | None = None, title: str | None = None) -> Note:
        """Fetch a note by exact path, or by loose title when no path is given."""
        if path:
            return self._target(path)
        if not title:
            raise InvalidInputError("Either path or title must be provided", field="path")

        notes = self.repository.scan()
        note = resolver.find_by_title(title, notes)
        if note is None:
            raise NoteNotFoundError(
                title,
                message=f"Note not found: '{title}'.",
                suggestions=resolver.suggest_titles(title, notes, SUGGESTION_LIMIT),
            )
        return note

    def create_note(
        self,
        path: str,
        content: str,
        frontmatter: dict[str, FrontmatterValue] | None = None,
        create_folders: bool = True,
    ) -> Note:
        self.repository.validate()
        if not is_markdown_file(path):
            path = f"{path}.md"
        return mutations.create_note(self.repository, path, content, frontmatter, create_folders)

    def update_note(
        self,
        path: str,
        content: str | None = None,
        frontmatter: dict[str, FrontmatterValue] | None = None,
        append: bool = False,
    ) -> Note:
        self.repository.validate()
        return mutations.update_note(self.repository, path, content, frontmatter, append)

    def delete_note(self, path: str, confirm: bool = False) -> None:
        if not confirm:
            raise InvalidInputError("Deletion must be confirmed with confirm=True", field="confirm")
        self.repository.validate()
        mutations.delete_note(self.repository, path)

    def list_notes(
        self,
        folder: str | None = None,
        tag: str | None = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> NoteListing:
        """Notes newest-modified first, one page at a time."""
        _require_positive("limit", limit)
        if offset < 0:
            raise InvalidInputError("offset must not be negative", field="offset", value=offset)

        notes = self.repository.scan(folder)
        if tag:
            notes = [n for n in notes if tag in n.tags]
        notes.sort(key=lambda n: n.modified, reverse=True)
        return NoteListing(
            notes=notes[offset : offset + limit],
            total=len(notes),
            limit=limit,
            offset=offset,
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_content(
        self,
        query: str,
        folder: str | None = None,
        tag: str | None = None,
        case_sensitive: bool = False,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[SearchResult]:
        _require_positive("limit", limit)
        return search.search_content(
            query,
            self.repository.scan(folder),
            tag=tag,
            case_sensitive=case_sensitive,
            limit=limit,
        )

    def search_tags(self, tag: str) -> list[Note]:
        return search.search_by_tag(tag, self.repository.scan())

    def list_tags(self, sort_by: str = "count") -> list[TagInfo]:
        if sort_by not in ("count", "name"):
            raise InvalidInputError("sort_by must be 'count' or 'name'", field="sort_by", value=sort_by)
        return search.list_tags(self.repository.scan(), sort_by=sort_by)

    def search_frontmatter(
        self,
        field: str,
        value: str | None = None,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[Note]:
        _require_positive("limit", limit)
        return search.search_frontmatter(field, self.repository.scan(), value)[:limit]

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def get_backlinks(self, path: str) -> list[str]:
        target = self._target(path)
        return backlinks.backlinks_of(target, self.repository.scan())

    def get_outlinks(self, path: str) -> list[str]:
        return backlinks.outlinks_of(self._target(path))

    def get_orphans(self) -> list[str]:
        return backlinks.orphans(self.repository.scan())

    def get_unlinked_references(self, path: str, limit: int = 50) -> list[SearchResult]:
        _require_positive("limit", limit)
        target = self._target(path)
        return backlinks.unlinked_references(target, self.repository.scan(), limit)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def list_folders(self, path: str | None = None, recursive: bool = False) -> list[FolderInfo]:
        return self.repository.folders(path, recursive)

    def get_daily_note(self, date: str | None = None, create: bool = True) -> Note:
        """Return the daily note for *date* (default today), creating it if allowed."""
        day = daily.parse_day(date)
        path = daily.daily_note_path(day, self.daily_notes_folder)
        self.repository.validate()

        if self.repository.exists(path):
            return self.repository.read(path)
        if not create:
            raise NoteNotFoundError(
                path,
                message=f"Daily note for {day.isoformat()} does not exist. "
                "Set create=True to create it.",
            )

        body, frontmatter = daily.daily_note_template(day)
        logger.info("Creating daily note %s", path)
        return mutations.create_note(self.repository, path, body, frontmatter, create_folders=True)

    def get_vault_stats(self) -> VaultStats:
        notes = self.repository.scan()
        total_length = sum(len(n.content) for n in notes)
        return VaultStats(
            total_notes=len(notes),
            total_tags=len(search.list_tags(notes)),
            total_links=sum(len(n.links) for n in notes),
            total_folders=len(self.repository.folders(recursive=True)),
            average_note_length=int(total_length / len(notes) + 0.5) if notes else 0,
            orphan_notes=len(backlinks.orphans(notes)),
        )

    def get_graph_view(
        self,
        folder: str | None = None,
        central_note: str | None = None,
        max_depth: int = 2,
        max_notes: int = 50,
    ) -> GraphData:
        """Graph nodes and edges around *central_note*, or of the best-connected notes."""
        _require_positive("max_depth", max_depth)
        _require_positive("max_notes", max_notes)

        notes = self.repository.scan(folder)
        if central_note:
            included = graph.connected_subgraph(central_note, notes, max_depth, max_notes)
            if not included:
                raise NoteNotFoundError(central_note)
        else:
            included = graph.most_connected(notes, max_notes)
        return graph.graph_data(included)
