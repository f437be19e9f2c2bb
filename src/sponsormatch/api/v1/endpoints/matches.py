# src/sponsormatch/api/v1/endpoints/matches.py
"""Match and chat endpoints for the SponsorMatch API."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from sponsormatch.api.v1.dependencies import (
    CurrentUserDep,
    MessageHubDep,
    SessionDep,
    http_error,
)
from sponsormatch.core.errors import SponsorMatchError
from sponsormatch.db.session import SessionLocal
from sponsormatch.models import Match, Message, Profile
from sponsormatch.schemas.match import (
    ConversationResponse,
    CounterpartResponse,
    LastMessageResponse,
)
from sponsormatch.schemas.message import MessageCreate, MessageResponse
from sponsormatch.services.conversations import ConversationView, list_conversations
from sponsormatch.services.message_log import (
    SnapshotLoader,
    append_message,
    list_messages,
    subscribe,
)

router = APIRouter(prefix="/matches", tags=["matches", "messages"])


def get_snapshot_loader() -> SnapshotLoader:
    """Return a loader that reads a match's log in its own session.

    Streams outlive the request-scoped session, so each snapshot opens one.
    """

    def _load(match_id: str) -> list[Message]:
        with SessionLocal() as db:
            return list_messages(db, match_id)

    return _load


SnapshotLoaderDep = Annotated[SnapshotLoader, Depends(get_snapshot_loader)]


def get_participant_match(match_id: str, current_user: CurrentUserDep, db: SessionDep) -> Match:
    """Load a match the caller participates in."""
    match = db.get(Match, match_id)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    if current_user.user_id not in match.participants:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a participant of this match",
        )
    return match


ParticipantMatchDep = Annotated[Match, Depends(get_participant_match)]


def _serialize_conversation(view: ConversationView) -> ConversationResponse:
    last = view.last_message
    return ConversationResponse(
        match_id=view.match_id,
        other_user=CounterpartResponse(
            id=view.other_user.id,
            name=view.other_user.name,
            image_url=view.other_user.image_url,
        ),
        last_message=(
            LastMessageResponse(text=last.text, sender_id=last.sender_id, created_at=last.created_at)
            if last
            else None
        ),
        created_at=view.created_at,
    )


def _snapshot_payload(messages: list[Message]) -> str:
    return json.dumps(
        [MessageResponse.model_validate(message).model_dump(mode="json") for message in messages]
    )


@router.get("", response_model=list[ConversationResponse])
async def get_conversations(current_user: CurrentUserDep, db: SessionDep) -> list[ConversationResponse]:
    """List the caller's matches with counterpart and last message, newest first."""
    return [_serialize_conversation(view) for view in list_conversations(db, current_user.user_id)]


@router.get("/{match_id}/messages", response_model=list[MessageResponse])
async def get_messages(match: ParticipantMatchDep, db: SessionDep) -> list[Message]:
    """Return the full message log of a match, oldest first."""
    return list_messages(db, match.id)


@router.post(
    "/{match_id}/messages",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
)
async def send_message(
    payload: MessageCreate,
    match: ParticipantMatchDep,
    current_user: CurrentUserDep,
    db: SessionDep,
    hub: MessageHubDep,
) -> Message:
    """Append a message to the match on behalf of the caller."""
    sender = db.get(Profile, current_user.user_id)
    sender_name = sender.display_name if sender else match.fallback_name_for(
        match.other_participant(current_user.user_id)
    )
    try:
        return append_message(
            db,
            match.id,
            current_user.user_id,
            sender_name,
            payload.text,
            hub=hub,
        )
    except SponsorMatchError as exc:
        raise http_error(exc) from exc


@router.get("/{match_id}/messages/stream")
async def stream_messages(
    request: Request,
    match: ParticipantMatchDep,
    hub: MessageHubDep,
    loader: SnapshotLoaderDep,
) -> StreamingResponse:
    """Stream full message snapshots as Server-Sent Events.

    One event is sent immediately and another after every change; the
    subscription is released when the client disconnects.
    """
    match_id = match.id

    async def event_stream() -> AsyncIterator[str]:
        async with subscribe(match_id, loader, hub=hub) as subscription:
            async for snapshot in subscription:
                if await request.is_disconnected():
                    break
                yield f"data: {_snapshot_payload(snapshot)}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
