# src/chat_cipher/services/cipher.py
"""Authenticated encryption of chat text and image attachments.

Both ciphers share one scheme: derive the pairwise key, draw a fresh 96-bit
nonce from the OS CSPRNG, run AES-256-GCM over the UTF-8 bytes and frame
``nonce || ciphertext || tag`` as base64. Writes fail hard with
:class:`EncryptionFailure`; reads fail soft and return a placeholder so one
corrupted historical message cannot break a message list.
"""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod

from cryptography.exceptions import InvalidTag

from chat_cipher.core.exceptions import EncryptionFailure, MalformedPayload, PlatformUnsupported
from chat_cipher.core.settings import Settings, settings
from chat_cipher.services.codec import NONCE_LENGTH_BYTES, PayloadCodec
from chat_cipher.services.key_derivation import KeyDerivationService

logger = logging.getLogger(__name__)


class PairwiseCipher(ABC):
    """Shared encrypt/decrypt logic for a single conversation pair."""

    kind = "payload"

    def __init__(
        self,
        config: Settings | None = None,
        key_service: KeyDerivationService | None = None,
    ) -> None:
        self._settings = config or settings
        self._key_service = key_service or KeyDerivationService(self._settings)

    @property
    @abstractmethod
    def placeholder(self) -> str:
        """Value returned by :meth:`decrypt` when a payload cannot be read."""

    def encrypt(self, plaintext: str, id_self: str, id_other: str) -> str:
        """Encrypt ``plaintext`` for the pair (``id_self``, ``id_other``).

        Returns:
            The storable base64 payload.

        Raises:
            PlatformUnsupported: If the primitives are unavailable.
            EncryptionFailure: If derivation or encryption fails.
        """
        try:
            with self._key_service.shared_key(id_self, id_other) as key:
                nonce = os.urandom(NONCE_LENGTH_BYTES)
                body = key.encrypt(nonce, plaintext.encode("utf-8"))
            return PayloadCodec.encode(nonce, body)
        except PlatformUnsupported:
            raise
        except Exception as err:
            logger.error("%s encryption failed: %s", self.kind, err.__class__.__name__)
            raise EncryptionFailure(
                f"Failed to encrypt {self.kind}",
                {"cause": err.__class__.__name__},
            ) from err

    def decrypt(self, payload: str, id_self: str, id_other: str) -> str:
        """Decrypt a stored payload, returning the placeholder on any failure.

        Either participant can decrypt regardless of who sent the payload.

        Raises:
            PlatformUnsupported: If the primitives are unavailable.
        """
        try:
            nonce, body = PayloadCodec.decode(payload)
            with self._key_service.shared_key(id_self, id_other) as key:
                plaintext = key.decrypt(nonce, body)
            return plaintext.decode("utf-8")
        except PlatformUnsupported:
            raise
        except (MalformedPayload, InvalidTag, UnicodeDecodeError, ValueError) as err:
            logger.warning(
                "%s decryption failed: %s (payload length %d)",
                self.kind,
                err.__class__.__name__,
                len(payload) if isinstance(payload, str) else 0,
            )
            return self.placeholder

    async def encrypt_async(self, plaintext: str, id_self: str, id_other: str) -> str:
        """Run :meth:`encrypt` in a worker thread."""
        return await asyncio.to_thread(self.encrypt, plaintext, id_self, id_other)

    async def decrypt_async(self, payload: str, id_self: str, id_other: str) -> str:
        """Run :meth:`decrypt` in a worker thread."""
        return await asyncio.to_thread(self.decrypt, payload, id_self, id_other)


class MessageCipher(PairwiseCipher):
    """Cipher for chat message text."""

    kind = "message"

    @property
    def placeholder(self) -> str:
        return self._settings.message_placeholder


class AttachmentCipher(PairwiseCipher):
    """Cipher for image attachments carried as base64 or data-URL text."""

    kind = "attachment"

    @property
    def placeholder(self) -> str:
        return self._settings.attachment_placeholder


def encrypt_message(text: str, sender_id: str, recipient_id: str) -> str:
    """Encrypt message text with the default settings."""
    return MessageCipher().encrypt(text, sender_id, recipient_id)


def decrypt_message(payload: str, sender_id: str, recipient_id: str) -> str:
    """Decrypt message text with the default settings."""
    return MessageCipher().decrypt(payload, sender_id, recipient_id)


def encrypt_image(image_data: str, sender_id: str, recipient_id: str) -> str:
    """Encrypt an image attachment with the default settings."""
    return AttachmentCipher().encrypt(image_data, sender_id, recipient_id)


def decrypt_image(payload: str, sender_id: str, recipient_id: str) -> str:
    """Decrypt an image attachment with the default settings."""
    return AttachmentCipher().decrypt(payload, sender_id, recipient_id)
