# src/chat_cipher/services/participants.py
"""Participant helpers for two-person conversations."""

from __future__ import annotations

from collections.abc import Sequence


def get_other_participant(participants: Sequence[str], self_id: str) -> str | None:
    """Return the first participant that is not ``self_id``.

    Args:
        participants: Ordered participant identifiers of a conversation.
        self_id: Identifier of the acting user.

    Returns:
        The counterpart identifier, or None when there is none.
    """
    for participant in participants:
        if participant and participant != self_id:
            return participant
    return None
