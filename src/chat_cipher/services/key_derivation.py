# src/chat_cipher/services/key_derivation.py
"""Deterministic pairwise key derivation for two chat participants."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Any, NoReturn

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from chat_cipher.core.settings import Settings, settings
from chat_cipher.services import capability

KEY_LENGTH_BYTES = 32


def _check_identifiers(*identifiers: object) -> None:
    for value in identifiers:
        if not isinstance(value, str) or not value:
            raise ValueError("Participant identifiers must be non-empty strings")


@dataclass(frozen=True)
class ParticipantPair:
    """Unordered pair of participant identifiers, stored in sorted order."""

    low: str
    high: str

    def __post_init__(self) -> None:
        _check_identifiers(self.low, self.high)
        if self.low > self.high:
            raise ValueError("ParticipantPair must be built with from_ids()")

    @classmethod
    def from_ids(cls, id_a: str, id_b: str) -> ParticipantPair:
        """Canonicalize two identifiers by lexicographic sort."""
        # checked before sorting so mixed types raise ValueError, not TypeError
        _check_identifiers(id_a, id_b)
        low, high = sorted((id_a, id_b))
        return cls(low=low, high=high)

    def salt(self, separator: str = "|") -> str:
        """Return the derivation salt ``low + separator + high``."""
        return f"{self.low}{separator}{self.high}"


class DerivedKey:
    """AES-256-GCM key that can encrypt and decrypt but never reveal itself.

    The raw bytes live in a private ``bytearray`` that :meth:`wipe` zeroes.
    Use the key as a context manager to wipe it when the call ends.
    """

    __slots__ = ("_material", "_aead")

    def __init__(self, material: bytes | bytearray) -> None:
        if len(material) != KEY_LENGTH_BYTES:
            raise ValueError(f"Derived keys must be {KEY_LENGTH_BYTES} bytes")
        self._material = bytearray(material)
        self._aead: AESGCM | None = AESGCM(bytes(self._material))

    def encrypt(self, nonce: bytes, data: bytes) -> bytes:
        """Return ``ciphertext || tag`` for ``data`` under ``nonce``."""
        return self._cipher().encrypt(nonce, data, None)

    def decrypt(self, nonce: bytes, data: bytes) -> bytes:
        """Verify and decrypt ``ciphertext || tag``.

        Raises:
            cryptography.exceptions.InvalidTag: If authentication fails.
        """
        return self._cipher().decrypt(nonce, data, None)

    def wipe(self) -> None:
        """Zero the backing buffer and drop the cipher handle."""
        for index in range(len(self._material)):
            self._material[index] = 0
        self._aead = None

    @property
    def wiped(self) -> bool:
        return self._aead is None

    def _cipher(self) -> AESGCM:
        if self._aead is None:
            raise ValueError("Derived key has been wiped")
        return self._aead

    def __enter__(self) -> DerivedKey:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.wipe()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DerivedKey):
            return NotImplemented
        return hmac.compare_digest(bytes(self._material), bytes(other._material))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "wiped" if self.wiped else "active"
        return f"DerivedKey(<redacted>, {state})"

    __str__ = __repr__

    def __reduce__(self) -> NoReturn:
        raise TypeError("DerivedKey cannot be serialized")

    def __copy__(self) -> NoReturn:
        raise TypeError("DerivedKey cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise TypeError("DerivedKey cannot be copied")


class KeyDerivationService:
    """Turn an unordered pair of identifiers into one deterministic key.

    Nothing is cached: every call reruns PBKDF2 so no key material outlives
    the operation that needed it.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self._settings = config or settings

    @property
    def iterations(self) -> int:
        return self._settings.kdf_iterations

    def shared_key(self, id_a: str, id_b: str) -> DerivedKey:
        """Derive the key shared by ``id_a`` and ``id_b``.

        Args:
            id_a: One participant identifier.
            id_b: The other participant identifier; order is irrelevant.

        Returns:
            A :class:`DerivedKey` identical for (id_a, id_b) and (id_b, id_a).

        Raises:
            PlatformUnsupported: If PBKDF2 or AES-GCM is unavailable.
            ValueError: If either identifier is empty.
        """
        pair = ParticipantPair.from_ids(id_a, id_b)
        capability.require_support()

        salt = pair.salt(self._settings.salt_separator)
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=KEY_LENGTH_BYTES,
            salt=salt.encode("utf-8"),
            iterations=self._settings.kdf_iterations,
        )
        material = bytearray(kdf.derive((pair.low + salt).encode("utf-8")))
        try:
            return DerivedKey(material)
        finally:
            for index in range(len(material)):
                material[index] = 0
