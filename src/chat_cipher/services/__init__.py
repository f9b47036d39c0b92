# src/chat_cipher/services/__init__.py
"""Cipher services for chat content."""

from .capability import is_supported, require_support
from .cipher import AttachmentCipher, MessageCipher, PairwiseCipher
from .codec import NONCE_LENGTH_BYTES, PayloadCodec
from .conversation import ConversationCipher
from .key_derivation import DerivedKey, KeyDerivationService, ParticipantPair
from .participants import get_other_participant

__all__ = [
    "AttachmentCipher",
    "ConversationCipher",
    "DerivedKey",
    "KeyDerivationService",
    "MessageCipher",
    "NONCE_LENGTH_BYTES",
    "PairwiseCipher",
    "ParticipantPair",
    "PayloadCodec",
    "get_other_participant",
    "is_supported",
    "require_support",
]
