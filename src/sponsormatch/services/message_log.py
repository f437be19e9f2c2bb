"""Message Log: append-only, ordered chat per match with live snapshots.

Live updates are delivered through `MessageSubscription`, an async iterator
of full ordered snapshots. Appends only flag subscribers as stale; the next
iteration step reloads the whole log, so several quick appends collapse into
one snapshot and a consumer never sees a partial or reordered sequence.
"""
from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable, Sequence
from types import TracebackType

from sqlalchemy import select
from sqlalchemy.orm import Session

from sponsormatch.core.errors import NotFoundError, ValidationError
from sponsormatch.models import Match, Message

__all__ = [
    "MessageHub",
    "MessageSubscription",
    "append_message",
    "get_message_hub",
    "list_messages",
    "subscribe",
]

logger = logging.getLogger(__name__)

SnapshotLoader = Callable[[str], Sequence[Message]]


class MessageSubscription:
    """Cancelable stream of message snapshots for one match."""

    def __init__(self, hub: MessageHub, match_id: str, loader: SnapshotLoader) -> None:
        self.match_id = match_id
        self._hub = hub
        self._loader = loader
        self._stale = asyncio.Event()
        # The current state is delivered as soon as iteration starts.
        self._stale.set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def mark_stale(self) -> None:
        self._stale.set()

    def close(self) -> None:
        """Stop the stream and detach from the hub. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._hub.discard(self)
        # Wake a pending `__anext__` so it can finish.
        self._stale.set()

    def __aiter__(self) -> MessageSubscription:
        return self

    async def __anext__(self) -> list[Message]:
        if self._closed:
            raise StopAsyncIteration
        await self._stale.wait()
        if self._closed:
            raise StopAsyncIteration
        self._stale.clear()
        return list(self._loader(self.match_id))

    async def __aenter__(self) -> MessageSubscription:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class MessageHub:
    """In-process registry of live subscriptions keyed by match id."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, set[MessageSubscription]] = defaultdict(set)

    def subscribe(self, match_id: str, loader: SnapshotLoader) -> MessageSubscription:
        subscription = MessageSubscription(self, match_id, loader)
        self._subscriptions[match_id].add(subscription)
        logger.debug("Subscribed to match %s (%d listeners)", match_id, self.listener_count(match_id))
        return subscription

    def discard(self, subscription: MessageSubscription) -> None:
        listeners = self._subscriptions.get(subscription.match_id)
        if listeners is None:
            return
        listeners.discard(subscription)
        if not listeners:
            del self._subscriptions[subscription.match_id]

    def notify(self, match_id: str) -> None:
        for subscription in self._subscriptions.get(match_id, ()):
            subscription.mark_stale()

    def listener_count(self, match_id: str) -> int:
        return len(self._subscriptions.get(match_id, ()))


_hub = MessageHub()


def get_message_hub() -> MessageHub:
    """Return the shared subscription hub."""
    return _hub


def append_message(
    db: Session,
    match_id: str,
    sender_id: str,
    sender_name: str,
    text: str,
    *,
    hub: MessageHub | None = None,
) -> Message:
    """Append one immutable message to a match and notify live subscribers.

    Raises:
        ValidationError: If `text` is blank or the sender is not a participant.
        NotFoundError: If the match does not exist.
    """
    body = text.strip()
    if not body:
        raise ValidationError("Message text cannot be empty")

    match = db.get(Match, match_id)
    if match is None:
        raise NotFoundError(f"Match not found with ID: {match_id}")
    if sender_id not in match.participants:
        raise ValidationError("Sender is not a participant of this match")

    message = Message(match_id=match_id, sender_id=sender_id, sender_name=sender_name, text=body)
    db.add(message)
    db.commit()
    db.refresh(message)

    (hub or _hub).notify(match_id)
    return message


def list_messages(db: Session, match_id: str) -> list[Message]:
    """Return the messages of a match, oldest first."""
    return list(
        db.scalars(
            select(Message)
            .where(Message.match_id == match_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
    )


def subscribe(
    match_id: str,
    loader: SnapshotLoader,
    *,
    hub: MessageHub | None = None,
) -> MessageSubscription:
    """Open a live feed of full ordered snapshots for `match_id`.

    The caller must `close()` the subscription (or use it with ``async with``)
    when the conversation view goes away, otherwise the listener stays
    registered.
    """
    return (hub or _hub).subscribe(match_id, loader)
