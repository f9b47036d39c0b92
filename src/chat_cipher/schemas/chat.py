"""Chat record Pydantic schemas.

Field aliases follow the camelCase names used by the chat document store.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentStatus = Literal["pending", "completed", "failed"]


class ChatMessage(BaseModel):
    """A single message document, in plaintext or sealed form."""

    id: str = Field(..., description="Message document identifier")
    sender_id: str = Field(..., alias="senderId", description="Identifier of the sender")
    text: str | None = Field(None, description="Plaintext body; cleared once sealed")
    image: str | None = Field(None, description="Base64 or data-URL image; cleared once sealed")
    listing_id: str | None = Field(None, alias="listingId")
    order_id: str | None = Field(None, alias="orderId")
    cart_id: str | None = Field(None, alias="cartId")
    payment_status: PaymentStatus | None = Field(None, alias="paymentStatus")
    created_at: datetime | None = Field(None, alias="createdAt")

    encrypted: bool = Field(False, description="True when the body fields are sealed")
    encrypted_text: str | None = Field(None, alias="encryptedText")
    encrypted_image: str | None = Field(None, alias="encryptedImage")

    model_config = ConfigDict(populate_by_name=True)


class Chat(BaseModel):
    """A two-person conversation document."""

    id: str
    participants: list[str] = Field(default_factory=list)
    last_message: str | None = Field(None, alias="lastMessage")
    encrypted_last_message: str | None = Field(None, alias="encryptedLastMessage")
    listing_id: str | None = Field(None, alias="listingId")
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class OpenedMessage(BaseModel):
    """Readable view of a message after the read path has run."""

    id: str
    sender_id: str
    text: str | None = None
    image: str | None = None
    was_encrypted: bool = False
