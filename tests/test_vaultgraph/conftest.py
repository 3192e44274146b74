"""Shared fixtures for vaultgraph tests: throwaway vaults under ``tmp_path``."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

WriteNote = Callable[[str, str], Path]


@pytest.fixture()
def vault_dir(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture()
def write_note(vault_dir: Path) -> WriteNote:
    """Write a note at a vault-relative path, dedenting the body."""

    def _write(rel_path: str, content: str) -> Path:
        path = vault_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
