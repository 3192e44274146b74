"""Exception hierarchy for vault operations.

Every error carries a machine-readable :class:`ErrorCode` and a ``details``
mapping so the dispatch layer can serialize failures without parsing
messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    NOTE_NOT_FOUND = 1001
    INVALID_INPUT = 2001
    INVALID_PATH = 2002
    VAULT_UNAVAILABLE = 3001


class VaultError(Exception):
    """Base class for all vaultgraph errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_INPUT,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "code_name": self.code.name,
            "message": self.message,
            "details": self.details,
        }


class NoteNotFoundError(VaultError):
    """Raised when a note is absent at a path or cannot be resolved by title.

    ``suggestions`` holds near-miss note names for "did you mean" hints.
    """

    def __init__(
        self,
        reference: str,
        message: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.reference = reference
        self.suggestions = list(suggestions or [])
        text = message or f"Note not found: {reference}"
        if self.suggestions:
            text = f"{text} Did you mean: {', '.join(self.suggestions)}?"
        details: dict[str, Any] = {"reference": reference}
        if self.suggestions:
            details["suggestions"] = self.suggestions
        super().__init__(text, code=ErrorCode.NOTE_NOT_FOUND, details=details)


class InvalidInputError(VaultError):
    """Raised for malformed or contradictory operation arguments."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        code: ErrorCode = ErrorCode.INVALID_INPUT,
    ) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)[:100]
        super().__init__(message, code=code, details=details)
        self.field = field
        self.value = value


class VaultUnavailableError(VaultError):
    """Raised when the vault root is missing or is not a directory."""

    def __init__(self, vault_dir: str) -> None:
        super().__init__(
            f"Vault path not found or not accessible: {vault_dir}",
            code=ErrorCode.VAULT_UNAVAILABLE,
            details={"vault_dir": vault_dir},
        )
        self.vault_dir = vault_dir
