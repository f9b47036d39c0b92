# src/chat_cipher/services/conversation.py
"""Seal and open whole chat records for a two-person conversation."""

from __future__ import annotations

import logging

from chat_cipher.core.exceptions import PlatformUnsupported
from chat_cipher.core.settings import Settings, settings
from chat_cipher.schemas.chat import Chat, ChatMessage, OpenedMessage
from chat_cipher.services import capability
from chat_cipher.services.cipher import AttachmentCipher, MessageCipher
from chat_cipher.services.key_derivation import KeyDerivationService
from chat_cipher.services.participants import get_other_participant

logger = logging.getLogger(__name__)


class ConversationCipher:
    """Apply the message and attachment ciphers to chat documents.

    The acting user's counterpart is resolved from the chat's participant
    list, so callers only pass the chat and their own identifier.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self._settings = config or settings
        key_service = KeyDerivationService(self._settings)
        self.messages = MessageCipher(self._settings, key_service)
        self.attachments = AttachmentCipher(self._settings, key_service)

    def _counterpart(self, chat: Chat, user_id: str) -> str | None:
        if user_id not in chat.participants:
            return None
        return get_other_participant(chat.participants, user_id)

    def _can_seal(self) -> bool:
        """Return False when sealing should fall back to plaintext storage."""
        if capability.is_supported():
            return True
        if self._settings.allow_plaintext_fallback:
            logger.warning("Cipher primitives unavailable; storing chat content unencrypted")
            return False
        raise PlatformUnsupported(
            "AES-GCM and PBKDF2-HMAC-SHA256 are not available in this runtime",
        )

    def seal_message(self, message: ChatMessage, chat: Chat, sender_id: str) -> ChatMessage:
        """Return a copy of ``message`` with its text and image encrypted.

        Raises:
            ValueError: If ``sender_id`` has no counterpart in ``chat``.
            PlatformUnsupported: If primitives are missing and plaintext
                fallback is disabled.
            EncryptionFailure: If encryption fails.
        """
        recipient_id = self._counterpart(chat, sender_id)
        if recipient_id is None:
            raise ValueError(f"Sender has no counterpart in chat {chat.id}")
        if message.encrypted:
            return message
        if not self._can_seal():
            return message.model_copy(update={"encrypted": False})

        encrypted_text = None
        if message.text is not None:
            encrypted_text = self.messages.encrypt(message.text, sender_id, recipient_id)
        encrypted_image = None
        if message.image is not None:
            encrypted_image = self.attachments.encrypt(message.image, sender_id, recipient_id)

        return message.model_copy(
            update={
                "text": None,
                "image": None,
                "encrypted": True,
                "encrypted_text": encrypted_text,
                "encrypted_image": encrypted_image,
            }
        )

    def open_message(self, message: ChatMessage, chat: Chat, viewer_id: str) -> OpenedMessage:
        """Return the readable form of ``message`` for ``viewer_id``.

        Never raises for bad ciphertext; unreadable fields become the
        configured placeholders. Unencrypted messages pass through.
        """
        if not message.encrypted:
            return OpenedMessage(
                id=message.id,
                sender_id=message.sender_id,
                text=message.text,
                image=message.image,
                was_encrypted=False,
            )

        other_id = self._counterpart(chat, viewer_id)
        text = None
        image = None
        if message.encrypted_text is not None:
            if other_id is None:
                text = self.messages.placeholder
            else:
                text = self.messages.decrypt(message.encrypted_text, viewer_id, other_id)
        if message.encrypted_image is not None:
            if other_id is None:
                image = self.attachments.placeholder
            else:
                image = self.attachments.decrypt(message.encrypted_image, viewer_id, other_id)

        return OpenedMessage(
            id=message.id,
            sender_id=message.sender_id,
            text=text,
            image=image,
            was_encrypted=True,
        )

    def seal_last_message(self, chat: Chat, text: str, sender_id: str) -> Chat:
        """Return a copy of ``chat`` carrying an encrypted last-message preview."""
        recipient_id = self._counterpart(chat, sender_id)
        if recipient_id is None:
            raise ValueError(f"Sender has no counterpart in chat {chat.id}")
        if not self._can_seal():
            return chat.model_copy(update={"last_message": text, "encrypted_last_message": None})
        return chat.model_copy(
            update={
                "last_message": None,
                "encrypted_last_message": self.messages.encrypt(text, sender_id, recipient_id),
            }
        )

    def open_last_message(self, chat: Chat, viewer_id: str) -> str | None:
        """Return the chat-list preview text for ``viewer_id``."""
        if chat.encrypted_last_message is None:
            return chat.last_message
        other_id = self._counterpart(chat, viewer_id)
        if other_id is None:
            return self.messages.placeholder
        return self.messages.decrypt(chat.encrypted_last_message, viewer_id, other_id)
