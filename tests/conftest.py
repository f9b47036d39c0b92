# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator

import pytest

from chat_cipher.core.settings import Settings
from chat_cipher.schemas.chat import Chat, ChatMessage
from chat_cipher.services.cipher import AttachmentCipher, MessageCipher
from chat_cipher.services.conversation import ConversationCipher
from chat_cipher.services.key_derivation import KeyDerivationService

ALICE = "u1"
BOB = "u2"
MALLORY = "u3"

_TEST_SETTINGS_INSTANCE = Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance with the wire-compatible defaults."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture()
def key_service(test_settings: Settings) -> KeyDerivationService:
    return KeyDerivationService(test_settings)


@pytest.fixture()
def message_cipher(test_settings: Settings) -> MessageCipher:
    return MessageCipher(test_settings)


@pytest.fixture()
def attachment_cipher(test_settings: Settings) -> AttachmentCipher:
    return AttachmentCipher(test_settings)


@pytest.fixture()
def conversation(test_settings: Settings) -> ConversationCipher:
    return ConversationCipher(test_settings)


@pytest.fixture()
def chat() -> Chat:
    """Return a two-person chat between ALICE and BOB."""
    return Chat(id="chat-1", participants=[ALICE, BOB], listing_id="listing-9")


@pytest.fixture()
def draft_message() -> ChatMessage:
    """Return an unsealed message from ALICE with text and an image."""
    return ChatMessage(
        id="msg-1",
        sender_id=ALICE,
        text="Is the calculus textbook still available?",
        image="data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk",
        listing_id="listing-9",
    )


@pytest.fixture()
def unsupported_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Make the capability probe report missing primitives."""
    from chat_cipher.services import capability

    monkeypatch.setattr(capability, "is_supported", lambda: False)
    yield
