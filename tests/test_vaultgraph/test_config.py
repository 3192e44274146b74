"""Unit tests for vaultgraph.config and vaultgraph.errors."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from vaultgraph.config import DAILY_NOTES_FOLDER_ENV, VAULT_PATH_ENV, VaultConfig
from vaultgraph.errors import ErrorCode, InvalidInputError, NoteNotFoundError, VaultUnavailableError


# ---------------------------------------------------------------------------
# VaultConfig
# ---------------------------------------------------------------------------


class TestVaultConfig:
    def test_explicit_values(self, tmp_path: Path):
        config = VaultConfig(vault_path=tmp_path, daily_notes_folder="/Journal/")
        assert config.vault_path == tmp_path
        assert config.daily_notes_folder == "Journal"

    def test_from_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(VAULT_PATH_ENV, str(tmp_path))
        monkeypatch.setenv(DAILY_NOTES_FOLDER_ENV, "Days")
        config = VaultConfig()
        assert config.vault_path == tmp_path
        assert config.daily_notes_folder == "Days"

    def test_default_daily_folder(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv(DAILY_NOTES_FOLDER_ENV, raising=False)
        assert VaultConfig(vault_path=tmp_path).daily_notes_folder == "Daily Notes"

    def test_missing_vault_path(self, monkeypatch):
        monkeypatch.delenv(VAULT_PATH_ENV, raising=False)
        with pytest.raises(ValidationError):
            VaultConfig()

    def test_empty_daily_folder(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            VaultConfig(vault_path=tmp_path, daily_notes_folder=" / ")

    def test_from_env_file(self, tmp_path: Path, monkeypatch):
        # Registered first so teardown drops what load_dotenv sets
        monkeypatch.setenv(VAULT_PATH_ENV, "unset")
        monkeypatch.delenv(VAULT_PATH_ENV)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{VAULT_PATH_ENV}={tmp_path}\n", encoding="utf-8")
        config = VaultConfig.from_env(env_file)
        assert config.vault_path == tmp_path


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_not_found_with_suggestions(self):
        err = NoteNotFoundError("Projct", suggestions=["Project A", "Project B"])
        assert str(err) == "Note not found: Projct Did you mean: Project A, Project B?"
        payload = err.to_dict()
        assert payload["code"] == ErrorCode.NOTE_NOT_FOUND.value
        assert payload["details"]["suggestions"] == ["Project A", "Project B"]

    def test_invalid_input_details(self):
        err = InvalidInputError("bad limit", field="limit", value=0)
        assert err.to_dict()["details"] == {"field": "limit", "value": "0"}

    def test_vault_unavailable(self):
        err = VaultUnavailableError("/missing")
        assert err.code is ErrorCode.VAULT_UNAVAILABLE
        assert "/missing" in err.message
