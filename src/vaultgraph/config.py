"""Configuration for a vault session.

The vault root is an explicit value handed to :class:`~vaultgraph.service.VaultService`;
nothing here is process-global beyond loading a ``.env`` file on request.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

VAULT_PATH_ENV = "OBSIDIAN_VAULT_PATH"
DAILY_NOTES_FOLDER_ENV = "OBSIDIAN_DAILY_NOTES_FOLDER"
DEFAULT_DAILY_NOTES_FOLDER = "Daily Notes"


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


class VaultConfig(BaseModel):
    """Settings for one vault."""

    model_config = ConfigDict(validate_default=True)

    vault_path: Path | None = Field(default_factory=lambda: _env_path(VAULT_PATH_ENV))
    daily_notes_folder: str = Field(
        default_factory=lambda: os.getenv(DAILY_NOTES_FOLDER_ENV, DEFAULT_DAILY_NOTES_FOLDER)
    )

    @field_validator("vault_path")
    @classmethod
    def _require_vault_path(cls, value: Path | None) -> Path:
        if value is None:
            raise ValueError(
                f"Vault path not configured. Set the {VAULT_PATH_ENV} environment "
                "variable or pass vault_path explicitly"
            )
        return value.expanduser()

    @field_validator("daily_notes_folder")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        folder = value.strip().strip("/")
        if not folder:
            raise ValueError("daily_notes_folder must not be empty")
        return folder

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "VaultConfig":
        """Build a config from the environment, loading *env_file* (or ``./.env``) first."""
        loaded = load_dotenv(env_file) if env_file else load_dotenv()
        if loaded:
            logger.debug("Loaded environment overrides from %s", env_file or ".env")
        return cls()
