"""Tests for the per-match message log and its live subscriptions."""

import asyncio

import pytest

from sponsormatch.core.errors import NotFoundError, ValidationError
from sponsormatch.services.message_log import (
    MessageHub,
    append_message,
    list_messages,
    subscribe,
)


def test_messages_are_listed_in_send_order(db_session, match, sponsor, athlete) -> None:
    append_message(db_session, match.id, sponsor.user_id, "Acme Sports", "hello")
    append_message(db_session, match.id, athlete.user_id, "Jordan Miles", "hi")

    messages = list_messages(db_session, match.id)

    assert [m.text for m in messages] == ["hello", "hi"]
    assert [m.sender_id for m in messages] == [sponsor.user_id, athlete.user_id]
    stamps = [m.created_at for m in messages]
    assert stamps == sorted(stamps)


def test_text_is_trimmed(db_session, match, sponsor) -> None:
    message = append_message(db_session, match.id, sponsor.user_id, "Acme Sports", "  hey there \n")
    assert message.text == "hey there"
    assert message.sender_name == "Acme Sports"


def test_blank_text_is_rejected(db_session, match, sponsor) -> None:
    with pytest.raises(ValidationError):
        append_message(db_session, match.id, sponsor.user_id, "Acme Sports", "   ")
    assert list_messages(db_session, match.id) == []


def test_unknown_match(db_session, sponsor) -> None:
    with pytest.raises(NotFoundError):
        append_message(db_session, "missing", sponsor.user_id, "Acme Sports", "hello")


def test_sender_must_participate(db_session, match, make_athlete) -> None:
    outsider = make_athlete("Avery Cole")
    with pytest.raises(ValidationError):
        append_message(db_session, match.id, outsider.user_id, "Avery Cole", "hello")


def test_long_text_is_stored_as_sent(db_session, match, sponsor) -> None:
    """Length limits belong to the request schema, not the log."""
    text = "x" * 800
    assert append_message(db_session, match.id, sponsor.user_id, "Acme Sports", text).text == text


def test_append_notifies_hub(db_session, mocker, match, sponsor) -> None:
    hub = MessageHub()
    notify = mocker.spy(hub, "notify")

    append_message(db_session, match.id, sponsor.user_id, "Acme Sports", "hello", hub=hub)

    notify.assert_called_once_with(match.id)


@pytest.mark.asyncio
async def test_subscription_delivers_current_state_first(db_session, match, sponsor) -> None:
    hub = MessageHub()
    append_message(db_session, match.id, sponsor.user_id, "Acme Sports", "hello", hub=hub)

    async with subscribe(match.id, lambda mid: list_messages(db_session, mid), hub=hub) as feed:
        snapshot = await asyncio.wait_for(anext(feed), timeout=1)

    assert [m.text for m in snapshot] == ["hello"]


@pytest.mark.asyncio
async def test_rapid_appends_collapse_into_one_snapshot(db_session, match, sponsor, athlete) -> None:
    hub = MessageHub()

    async with subscribe(match.id, lambda mid: list_messages(db_session, mid), hub=hub) as feed:
        assert await asyncio.wait_for(anext(feed), timeout=1) == []

        append_message(db_session, match.id, sponsor.user_id, "Acme Sports", "hello", hub=hub)
        append_message(db_session, match.id, athlete.user_id, "Jordan Miles", "hi", hub=hub)

        snapshot = await asyncio.wait_for(anext(feed), timeout=1)
        assert [m.text for m in snapshot] == ["hello", "hi"]

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(anext(feed), timeout=0.05)


@pytest.mark.asyncio
async def test_updates_only_reach_subscribers_of_that_match(
    db_session, make_match, sponsor, athlete, make_athlete
) -> None:
    hub = MessageHub()
    first = make_match(sponsor, athlete)
    second = make_match(sponsor, make_athlete("Avery Cole"))

    async with subscribe(first.id, lambda mid: list_messages(db_session, mid), hub=hub) as feed:
        await anext(feed)
        append_message(db_session, second.id, sponsor.user_id, "Acme Sports", "elsewhere", hub=hub)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(anext(feed), timeout=0.05)


@pytest.mark.asyncio
async def test_close_releases_listener_and_ends_iteration(db_session, match) -> None:
    hub = MessageHub()
    feed = subscribe(match.id, lambda mid: list_messages(db_session, mid), hub=hub)
    await anext(feed)
    assert hub.listener_count(match.id) == 1

    pending = asyncio.create_task(anext(feed))
    await asyncio.sleep(0)
    feed.close()
    feed.close()

    with pytest.raises(StopAsyncIteration):
        await asyncio.wait_for(pending, timeout=1)
    assert feed.closed
    assert hub.listener_count(match.id) == 0


@pytest.mark.asyncio
async def test_leaving_context_unsubscribes(db_session, match) -> None:
    hub = MessageHub()

    async with subscribe(match.id, lambda mid: list_messages(db_session, mid), hub=hub):
        assert hub.listener_count(match.id) == 1

    assert hub.listener_count(match.id) == 0
    hub.notify(match.id)
