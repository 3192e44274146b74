"""Core dataclasses for notes and the views derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Literal, Union

#: Scalar or list values allowed in a note's frontmatter block.
FrontmatterValue = Union[str, int, float, bool, date, datetime, None, list[Any], dict[str, Any]]

MatchType = Literal["title", "heading", "content", "tag", "frontmatter"]


def _jsonable(value: Any) -> Any:
    """Frontmatter value with dates turned into ISO strings, at any depth."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return value


@dataclass
class Heading:
    text: str
    level: int
    #: 1-based line number within the note body
    line: int

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "level": self.level, "line": self.line}


@dataclass
class ParsedLink:
    """One link occurrence as written in a note body."""

    raw: str
    target: str
    display_text: str | None = None
    heading: str | None = None
    block_ref: str | None = None
    is_embed: bool = False

    @property
    def original(self) -> str:
        return self.raw


@dataclass
class Note:
    """A single markdown note in the vault."""

    #: Vault-relative, forward-slash path including the extension
    path: str
    #: Filename without extension
    name: str
    content: str
    created: datetime
    modified: datetime
    frontmatter: dict[str, FrontmatterValue] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    #: Raw link targets in extraction order (not resolved)
    links: list[str] = field(default_factory=list)
    headings: list[Heading] = field(default_factory=list)
    blocks: dict[str, int] = field(default_factory=dict)

    @property
    def title(self) -> str:
        """Frontmatter ``title`` when present, else the filename."""
        value = self.frontmatter.get("title")
        return str(value) if value else self.name

    @property
    def aliases(self) -> list[str]:
        value = self.frontmatter.get("aliases")
        if not value:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(a) for a in value if a is not None]
        return [str(value)]

    @property
    def folder(self) -> str:
        head, _, _ = self.path.rpartition("/")
        return head

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "content": self.content,
            "frontmatter": _jsonable(self.frontmatter) if self.frontmatter else None,
            "tags": self.tags,
            "links": self.links,
            "headings": [h.to_dict() for h in self.headings],
            "blocks": self.blocks,
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
        }


@dataclass
class TagInfo:
    tag: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"tag": self.tag, "count": self.count}


@dataclass
class FolderInfo:
    path: str
    name: str
    note_count: int
    subfolders: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "noteCount": self.note_count,
            "subfolders": self.subfolders,
        }


@dataclass
class SearchResult:
    path: str
    name: str
    score: float
    match_type: MatchType
    snippet: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "path": self.path,
            "name": self.name,
            "score": self.score,
            "matchType": self.match_type,
        }
        if self.snippet is not None:
            result["snippet"] = self.snippet
        return result


@dataclass
class NoteListing:
    """One page of notes plus the size of the unpaginated result."""

    notes: list[Note]
    total: int
    limit: int
    offset: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "notes": [n.to_dict() for n in self.notes],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
        }


@dataclass
class VaultStats:
    total_notes: int
    total_tags: int
    total_links: int
    total_folders: int
    average_note_length: int
    orphan_notes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalNotes": self.total_notes,
            "totalTags": self.total_tags,
            "totalLinks": self.total_links,
            "totalFolders": self.total_folders,
            "averageNoteLength": self.average_note_length,
            "orphanNotes": self.orphan_notes,
        }


@dataclass
class GraphNode:
    id: str
    label: str
    tags: list[str] = field(default_factory=list)
    link_count: int = 0
    backlink_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "tags": self.tags,
            "linkCount": self.link_count,
            "backlinkCount": self.backlink_count,
        }


@dataclass
class GraphEdge:
    source: str
    target: str

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target}


@dataclass
class GraphData:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
