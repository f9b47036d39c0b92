# src/chat_cipher/services/capability.py
"""Runtime probe for the primitives the chat cipher depends on."""

from __future__ import annotations

import logging
import os

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM as _AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC as _PBKDF2HMAC

from chat_cipher.core.exceptions import PlatformUnsupported

logger = logging.getLogger(__name__)

_PROBE_KEY = bytes(32)
_PROBE_NONCE = bytes(12)


def is_supported() -> bool:
    """Return True when AES-256-GCM, PBKDF2-HMAC-SHA256 and a CSPRNG are usable.

    The probe runs a throwaway single-iteration derivation and an empty
    encryption under an all-zero key; nothing is stored.
    """
    if _AESGCM is None or _PBKDF2HMAC is None:
        return False
    if not callable(getattr(os, "urandom", None)):
        return False
    try:
        _PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=b"probe",
            iterations=1,
        ).derive(b"probe")
        _AESGCM(_PROBE_KEY).encrypt(_PROBE_NONCE, b"", None)
    except (UnsupportedAlgorithm, ValueError, TypeError) as err:
        logger.debug("Cipher primitives unavailable: %s", err.__class__.__name__)
        return False
    return True


def require_support() -> None:
    """Raise PlatformUnsupported unless :func:`is_supported` holds."""
    if not is_supported():
        raise PlatformUnsupported(
            "AES-GCM and PBKDF2-HMAC-SHA256 are not available in this runtime",
        )
