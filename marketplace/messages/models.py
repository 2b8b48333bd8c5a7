from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MessageBox(str, Enum):
    inbox = "inbox"
    outbox = "outbox"
    all = "all"


class Message(BaseModel):
    id: str
    listing_id: str
    listing_title: str
    sender_email: str
    receiver_email: str
    text: str
    created_at: str


class MessageCreateRequest(BaseModel):
    listing_id: str = Field(..., min_length=1)
    text: str = Field(..., max_length=2000)


class MessageListResponse(BaseModel):
    messages: list[Message]
