from __future__ import annotations

import datetime as dt
import logging
import uuid

from ..catalog.models import Listing
from ..rentals.models import Rental
from .models import Message, MessageBox

logger = logging.getLogger(__name__)

MIN_MESSAGE_LENGTH = 2
MAX_MESSAGE_LENGTH = 1000

_messages: list[Message] = []


def send_message(listing: Listing, sender_email: str, text: str) -> Message:
    """Store a message to the listing owner. Raises ``ValueError`` if it cannot be sent."""
    text = text.strip()
    if len(text) < MIN_MESSAGE_LENGTH:
        raise ValueError(f"Message must be at least {MIN_MESSAGE_LENGTH} characters")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise ValueError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters")

    sender = sender_email.strip().lower()
    if not listing.owner_email:
        raise ValueError("Listing has no owner to message")
    if listing.owner_email == sender:
        raise ValueError("Cannot message yourself")

    message = Message(
        id=str(uuid.uuid4()),
        listing_id=listing.id,
        listing_title=listing.title,
        sender_email=sender,
        receiver_email=listing.owner_email,
        text=text,
        created_at=dt.datetime.now(dt.timezone.utc).isoformat(),
    )
    _messages.append(message)
    return message


def notify_rental_request(rental: Rental) -> Message | None:
    """Tell the owner about a new rental request, if there is someone to tell."""
    owner = rental.owner_email
    if not owner or owner == rental.user_email:
        return None

    text = f"Yeni kiralama talebi: {rental.listing_title} ({rental.start_date} - {rental.end_date})"
    message = Message(
        id=str(uuid.uuid4()),
        listing_id=rental.listing_id,
        listing_title=rental.listing_title,
        sender_email=rental.user_email,
        receiver_email=owner,
        text=text,
        created_at=rental.created_at,
    )
    _messages.append(message)
    logger.info("Notified %s about rental %s", owner, rental.id)
    return message


def get_messages(email: str, box: MessageBox = MessageBox.inbox) -> list[Message]:
    email = email.strip().lower()
    if box is MessageBox.inbox:
        found = [m for m in _messages if m.receiver_email == email]
    elif box is MessageBox.outbox:
        found = [m for m in _messages if m.sender_email == email]
    else:
        found = [m for m in _messages if email in (m.receiver_email, m.sender_email)]
    # Later records win ties on created_at.
    return sorted(reversed(found), key=lambda m: m.created_at, reverse=True)


def clear_messages() -> None:
    _messages.clear()
