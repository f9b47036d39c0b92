"""Pydantic schemas for chat records."""

from .chat import Chat, ChatMessage, OpenedMessage, PaymentStatus

__all__ = [
    "Chat",
    "ChatMessage",
    "OpenedMessage",
    "PaymentStatus",
]
