"""NoteRepository: walks the vault tree and materializes :class:`Note` objects.

There is no cache; every :meth:`NoteRepository.scan` re-reads the subtree.
"""

from __future__ import annotations

import logging
import os
import posixpath
from pathlib import Path

from vaultgraph.errors import ErrorCode, InvalidInputError, NoteNotFoundError, VaultUnavailableError
from vaultgraph.note import FolderInfo, Note
from vaultgraph.parser import parse_note

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (".md", ".markdown")


def is_markdown_file(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in MARKDOWN_EXTENSIONS


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


class NoteRepository:
    """Reads notes from a single vault directory."""

    def __init__(self, vault_dir: Path | str) -> None:
        self.vault_dir = Path(vault_dir)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Raise :class:`VaultUnavailableError` unless the root is a directory."""
        if not self.vault_dir.is_dir():
            raise VaultUnavailableError(str(self.vault_dir))

    def resolve_path(self, rel_path: str) -> Path:
        """Map a vault-relative path to an absolute one inside the vault."""
        clean = posixpath.normpath(rel_path.replace("\\", "/").lstrip("/"))
        candidate = self.vault_dir / clean
        root = self.vault_dir.resolve()
        resolved = candidate.resolve()
        if resolved != root and root not in resolved.parents:
            raise InvalidInputError(
                "Invalid path: paths must be relative to vault root",
                field="path",
                value=rel_path,
                code=ErrorCode.INVALID_PATH,
            )
        return candidate

    def relative_path(self, path: Path) -> str:
        return path.relative_to(self.vault_dir).as_posix()

    def exists(self, rel_path: str) -> bool:
        return self.resolve_path(rel_path).is_file()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read(self, rel_path: str) -> Note:
        """Read and parse exactly one note."""
        path = self.resolve_path(rel_path)
        try:
            return parse_note(path, self.vault_dir)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot read %s: %s", path, exc)
            raise NoteNotFoundError(rel_path) from exc

    def scan(self, folder: str | None = None) -> list[Note]:
        """(Re-)walk the vault (or *folder* inside it) and parse every note."""
        self.validate()
        start = self.resolve_path(folder) if folder else self.vault_dir
        notes: list[Note] = []
        self._scan_directory(start, notes)
        logger.debug("Scanned %d notes under %s", len(notes), start)
        return notes

    def _scan_directory(self, directory: Path, notes: list[Note]) -> None:
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except FileNotFoundError:
            logger.debug("Nothing to scan, %s does not exist", directory)
            return
        except OSError as exc:
            logger.warning("Skipping unreadable directory %s: %s", directory, exc)
            return

        for entry in entries:
            if _is_hidden(entry.name):
                continue
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
            except OSError as exc:
                logger.warning("Skipping %s: %s", path, exc)
                continue
            if is_dir:
                self._scan_directory(path, notes)
            elif is_file and is_markdown_file(entry.name):
                try:
                    notes.append(parse_note(path, self.vault_dir))
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning("Skipping unreadable note %s: %s", path, exc)

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def folders(self, parent: str | None = None, recursive: bool = False) -> list[FolderInfo]:
        """List the non-hidden folders under *parent* (default: the vault root)."""
        self.validate()
        start = self.resolve_path(parent) if parent else self.vault_dir
        result: list[FolderInfo] = []
        self._scan_folders(start, result, recursive)
        return result

    def _child_dirs(self, directory: Path) -> list[Path]:
        return sorted(
            (p for p in directory.iterdir() if p.is_dir() and not _is_hidden(p.name)),
            key=lambda p: p.name,
        )

    def _scan_folders(self, directory: Path, result: list[FolderInfo], recursive: bool) -> None:
        try:
            children = self._child_dirs(directory)
        except OSError as exc:
            logger.debug("Skipping folder listing for %s: %s", directory, exc)
            return

        for child in children:
            try:
                note_count = sum(
                    1
                    for p in child.iterdir()
                    if p.is_file() and not _is_hidden(p.name) and is_markdown_file(p.name)
                )
                subfolders = [self.relative_path(p) for p in self._child_dirs(child)]
            except OSError as exc:
                logger.warning("Skipping unreadable folder %s: %s", child, exc)
                continue
            result.append(
                FolderInfo(
                    path=self.relative_path(child),
                    name=child.name,
                    note_count=note_count,
                    subfolders=subfolders,
                )
            )
            if recursive:
                self._scan_folders(child, result, recursive)
