"""Pairwise encryption for marketplace chat messages and attachments.

Two stable participant identifiers deterministically yield one AES-256-GCM
key (PBKDF2-HMAC-SHA256 over the sorted pair). Message text and image data
are sealed into a single base64 string of ``nonce || ciphertext || tag``.

Security note: the key depends only on identifiers that are not secret.
Anyone who can see both identifiers, including the operator of the shared
message store, can rebuild the key. The scheme guards against parties who
do not know both identifiers and provides no forward secrecy or rotation.
"""

from chat_cipher.core.exceptions import (
    CipherError,
    EncryptionFailure,
    MalformedPayload,
    PlatformUnsupported,
)
from chat_cipher.core.settings import Settings, configure_logging, settings
from chat_cipher.services import (
    AttachmentCipher,
    ConversationCipher,
    DerivedKey,
    KeyDerivationService,
    MessageCipher,
    ParticipantPair,
    PayloadCodec,
    get_other_participant,
    is_supported,
)
from chat_cipher.services.cipher import (
    decrypt_image,
    decrypt_message,
    encrypt_image,
    encrypt_message,
)

__all__ = [
    "AttachmentCipher",
    "CipherError",
    "ConversationCipher",
    "DerivedKey",
    "EncryptionFailure",
    "KeyDerivationService",
    "MalformedPayload",
    "MessageCipher",
    "ParticipantPair",
    "PayloadCodec",
    "PlatformUnsupported",
    "Settings",
    "configure_logging",
    "decrypt_image",
    "decrypt_message",
    "encrypt_image",
    "encrypt_message",
    "get_other_participant",
    "is_supported",
    "settings",
]
