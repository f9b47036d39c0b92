# mypy: ignore-errors
"""Tests for the runtime capability probe."""

from __future__ import annotations

import pytest

from chat_cipher.core.exceptions import PlatformUnsupported
from chat_cipher.services import capability


def test_is_supported_with_cryptography_installed() -> None:
    assert capability.is_supported() is True
    capability.require_support()


def test_missing_aead_primitive(monkeypatch) -> None:
    """A runtime without AES-GCM reports unsupported."""
    monkeypatch.setattr(capability, "_AESGCM", None)
    assert capability.is_supported() is False
    with pytest.raises(PlatformUnsupported):
        capability.require_support()


def test_missing_kdf_primitive(monkeypatch) -> None:
    monkeypatch.setattr(capability, "_PBKDF2HMAC", None)
    assert capability.is_supported() is False


def test_missing_random_source(monkeypatch) -> None:
    monkeypatch.delattr(capability.os, "urandom")
    assert capability.is_supported() is False


def test_backend_rejects_algorithm(monkeypatch) -> None:
    """Backends that refuse the algorithm are treated as unsupported."""
    from cryptography.exceptions import UnsupportedAlgorithm

    class _RefusingAESGCM:
        def __init__(self, key):
            raise UnsupportedAlgorithm("AES-GCM disabled")

    monkeypatch.setattr(capability, "_AESGCM", _RefusingAESGCM)
    assert capability.is_supported() is False


def test_platform_unsupported_serializes() -> None:
    with pytest.raises(PlatformUnsupported) as excinfo:
        raise PlatformUnsupported("no primitives")
    assert excinfo.value.to_dict() == {
        "error": "PlatformUnsupported",
        "message": "no primitives",
        "details": {},
    }


def test_primitives_are_module_attributes() -> None:
    """The probe uses the real cryptography classes imported at module level."""
    from cryptography.hazmat.primitives.ciphers.aead import AESGCM
    from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

    assert capability._AESGCM is AESGCM
    assert capability._PBKDF2HMAC is PBKDF2HMAC
