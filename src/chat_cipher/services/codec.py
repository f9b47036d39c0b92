# src/chat_cipher/services/codec.py
"""Wire framing for encrypted payloads."""

from __future__ import annotations

import base64
import binascii

from chat_cipher.core.exceptions import MalformedPayload

NONCE_LENGTH_BYTES = 12


class PayloadCodec:
    """Frame a nonce and AEAD body into one storable base64 string.

    The codec knows nothing about encryption; it only concatenates
    ``nonce || body`` and base64-encodes the result.
    """

    @staticmethod
    def encode(nonce: bytes, body: bytes) -> str:
        """Encode a nonce and ciphertext body.

        Args:
            nonce: Exactly 12 bytes.
            body: Ciphertext with its authentication tag appended.

        Returns:
            Standard (padded) base64 of ``nonce + body``.

        Raises:
            ValueError: If the nonce is not 12 bytes long.
        """
        if len(nonce) != NONCE_LENGTH_BYTES:
            raise ValueError(f"Nonce must be {NONCE_LENGTH_BYTES} bytes, got {len(nonce)}")
        return base64.b64encode(bytes(nonce) + bytes(body)).decode("ascii")

    @staticmethod
    def decode(payload: str) -> tuple[bytes, bytes]:
        """Split a stored payload back into ``(nonce, body)``.

        Raises:
            MalformedPayload: If the payload is not valid base64 or decodes
                to fewer than 12 bytes.
        """
        if not isinstance(payload, str):
            raise MalformedPayload(
                "Payload must be a string",
                {"type": type(payload).__name__},
            )
        try:
            combined = base64.b64decode(payload.strip(), validate=True)
        except (binascii.Error, ValueError) as err:
            raise MalformedPayload(f"Invalid base64 encoding: {err}") from err

        if len(combined) < NONCE_LENGTH_BYTES:
            raise MalformedPayload(
                "Payload shorter than nonce",
                {"length": len(combined)},
            )
        return combined[:NONCE_LENGTH_BYTES], combined[NONCE_LENGTH_BYTES:]
