"""Unit tests for vaultgraph.mutations."""

from pathlib import Path

import pytest

from vaultgraph.errors import InvalidInputError, NoteNotFoundError
from vaultgraph.mutations import create_note, delete_note, update_note
from vaultgraph.repository import NoteRepository


@pytest.fixture()
def repo(vault_dir: Path) -> NoteRepository:
    return NoteRepository(vault_dir)


class TestCreateNote:
    def test_round_trip(self, repo: NoteRepository):
        note = create_note(repo, "ideas/new.md", "Body [[Other]] #idea\n", {"status": "draft"})
        assert note.path == "ideas/new.md"
        assert note.content == "Body [[Other]] #idea\n"
        assert note.frontmatter == {"status": "draft"}
        assert note.links == ["Other"]
        assert note.tags == ["idea"]
        assert repo.read("ideas/new.md") == note

    def test_without_frontmatter_writes_body_only(self, repo: NoteRepository, vault_dir: Path):
        create_note(repo, "plain.md", "Just text")
        assert (vault_dir / "plain.md").read_text(encoding="utf-8") == "Just text"

    def test_missing_folder_without_create_folders(self, repo: NoteRepository):
        with pytest.raises(FileNotFoundError):
            create_note(repo, "nested/dir/x.md", "x", create_folders=False)

    def test_overwrites_existing(self, repo: NoteRepository):
        create_note(repo, "x.md", "first")
        assert create_note(repo, "x.md", "second").content == "second"

    def test_path_outside_vault(self, repo: NoteRepository):
        with pytest.raises(InvalidInputError):
            create_note(repo, "../escape.md", "x")


class TestUpdateNote:
    def test_replace_body_and_merge_frontmatter(self, repo: NoteRepository):
        create_note(repo, "n.md", "old", {"title": "N", "status": "draft"})
        note = update_note(repo, "n.md", "new", {"status": "done"})
        assert note.content == "new"
        assert note.frontmatter == {"title": "N", "status": "done"}

    def test_append(self, repo: NoteRepository):
        create_note(repo, "n.md", "first")
        assert update_note(repo, "n.md", "second", append=True).content == "first\n\nsecond"

    def test_append_empty_keeps_body(self, repo: NoteRepository):
        create_note(repo, "n.md", "first")
        assert update_note(repo, "n.md", "", append=True).content == "first"

    def test_frontmatter_only(self, repo: NoteRepository):
        create_note(repo, "n.md", "body", {"a": 1})
        note = update_note(repo, "n.md", frontmatter={"b": 2})
        assert note.content == "body"
        assert note.frontmatter == {"a": 1, "b": 2}

    def test_missing_note(self, repo: NoteRepository):
        with pytest.raises(NoteNotFoundError):
            update_note(repo, "ghost.md", "x")

    def test_unparsable_frontmatter_is_kept(self, repo: NoteRepository, vault_dir: Path):
        raw = "---\ntitle: [unclosed\nstatus: draft\n---\nBody"
        (vault_dir / "broken.md").write_text(raw, encoding="utf-8")
        note = update_note(repo, "broken.md", "More", append=True)
        assert note.content == "Body\n\nMore"
        assert (vault_dir / "broken.md").read_text(encoding="utf-8") == (
            "---\ntitle: [unclosed\nstatus: draft\n---\nBody\n\nMore"
        )

    def test_merge_into_unparsable_frontmatter_rejected(
        self, repo: NoteRepository, vault_dir: Path
    ):
        raw = "---\n- not\n- a mapping\n---\nBody"
        (vault_dir / "list.md").write_text(raw, encoding="utf-8")
        with pytest.raises(InvalidInputError):
            update_note(repo, "list.md", frontmatter={"status": "done"})
        assert (vault_dir / "list.md").read_text(encoding="utf-8") == raw


class TestDeleteNote:
    def test_delete(self, repo: NoteRepository):
        create_note(repo, "gone.md", "bye")
        delete_note(repo, "gone.md")
        assert not repo.exists("gone.md")

    def test_delete_missing(self, repo: NoteRepository):
        with pytest.raises(NoteNotFoundError):
            delete_note(repo, "ghost.md")
