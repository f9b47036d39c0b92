"""Exception hierarchy for the chat cipher."""

from __future__ import annotations

from typing import Any


class CipherError(RuntimeError):
    """Base exception for all chat cipher errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured error reporting."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class PlatformUnsupported(CipherError):
    """Raised when the runtime lacks the required cryptographic primitives.

    Raised eagerly; the library never degrades to a weaker key or cipher.
    """


class EncryptionFailure(CipherError):
    """Raised when the write path fails.

    Callers must not persist anything for the message that triggered it.
    """


class MalformedPayload(CipherError, ValueError):
    """Raised when a stored payload cannot be decoded into nonce and body."""
