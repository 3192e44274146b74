"""vaultgraph: link graph, search and navigation over a markdown vault."""

from vaultgraph.config import VaultConfig
from vaultgraph.errors import (
    InvalidInputError,
    NoteNotFoundError,
    VaultError,
    VaultUnavailableError,
)
from vaultgraph.note import (
    FolderInfo,
    GraphData,
    Heading,
    Note,
    NoteListing,
    ParsedLink,
    SearchResult,
    TagInfo,
    VaultStats,
)
from vaultgraph.parser import parse_frontmatter, parse_links, parse_note, parse_tags
from vaultgraph.repository import NoteRepository
from vaultgraph.service import VaultService

__version__ = "0.1.0"

__all__ = [
    "FolderInfo",
    "GraphData",
    "Heading",
    "InvalidInputError",
    "Note",
    "NoteListing",
    "NoteNotFoundError",
    "NoteRepository",
    "ParsedLink",
    "SearchResult",
    "TagInfo",
    "VaultConfig",
    "VaultError",
    "VaultService",
    "VaultStats",
    "VaultUnavailableError",
    "parse_frontmatter",
    "parse_links",
    "parse_note",
    "parse_tags",
]
