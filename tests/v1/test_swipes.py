# mypy: ignore-errors
"""Tests for swiping, match creation and the discovery feed."""

from fastapi import status


def _swipe(client, headers, target_id, action="like"):
    return client.post(
        "/api/v1/swipes",
        json={"target_user_id": target_id, "action": action},
        headers=headers,
    )


def test_like_without_reciprocation(client, sponsor, athlete, sponsor_headers) -> None:
    response = _swipe(client, sponsor_headers, athlete.user_id)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {
        "action": "like",
        "outcome": "not_mutual",
        "is_match": False,
        "match": None,
    }


def test_reciprocal_likes_create_match(
    client, sponsor, athlete, sponsor_headers, athlete_headers
) -> None:
    """Sponsor likes athlete, athlete likes back: one active match."""
    _swipe(client, sponsor_headers, athlete.user_id)

    response = _swipe(client, athlete_headers, sponsor.user_id)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["outcome"] == "created"
    assert data["is_match"] is True
    assert data["match"]["sponsor_id"] == sponsor.user_id
    assert data["match"]["athlete_id"] == athlete.user_id
    assert data["match"]["status"] == "active"

    again = _swipe(client, sponsor_headers, athlete.user_id)
    assert again.json()["outcome"] == "already_matched"
    assert again.json()["match"]["id"] == data["match"]["id"]

    conversations = client.get("/api/v1/matches", headers=sponsor_headers).json()
    assert len(conversations) == 1


def test_pass_is_recorded_without_match_check(client, sponsor, athlete, sponsor_headers) -> None:
    response = _swipe(client, sponsor_headers, athlete.user_id, action="pass")

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["outcome"] == "recorded"
    assert response.json()["is_match"] is False


def test_like_between_athletes_is_incompatible(client, athlete, athlete_headers, make_athlete) -> None:
    other = make_athlete("Avery Cole")
    response = _swipe(client, athlete_headers, other.user_id)
    assert response.json()["outcome"] == "incompatible"


def test_swipe_on_self(client, athlete, athlete_headers) -> None:
    response = _swipe(client, athlete_headers, athlete.user_id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_swipe_on_unknown_profile(client, athlete_headers) -> None:
    response = _swipe(client, athlete_headers, "nobody")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_swipe_invalid_action(client, athlete, sponsor, athlete_headers) -> None:
    response = _swipe(client, athlete_headers, sponsor.user_id, action="superlike")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_feed_shows_opposite_variant(client, athlete, athlete_headers, make_sponsor, make_athlete) -> None:
    first = make_sponsor("Peak Nutrition")
    second = make_sponsor("Orbit Energy")
    make_athlete("Avery Cole")

    response = client.get("/api/v1/feed", headers=athlete_headers)

    assert response.status_code == status.HTTP_200_OK
    ids = {p["user_id"] for p in response.json()}
    assert ids == {first.user_id, second.user_id}
    assert all(p["variant"] == "sponsor" for p in response.json())


def test_feed_excludes_swiped_and_matched(
    client, sponsor, sponsor_headers, make_athlete, make_match
) -> None:
    liked = make_athlete("Avery Cole")
    passed = make_athlete("Sam Reyes")
    matched = make_athlete("Riley Chen")
    fresh = make_athlete("Jamie Fox")
    make_match(sponsor, matched)
    _swipe(client, sponsor_headers, liked.user_id)
    _swipe(client, sponsor_headers, passed.user_id, action="pass")

    response = client.get("/api/v1/feed", headers=sponsor_headers)

    assert [p["user_id"] for p in response.json()] == [fresh.user_id]


def test_feed_for_account_without_profile(client, make_account, make_athlete, auth_headers) -> None:
    account = make_account("sponsor")
    athlete = make_athlete()

    response = client.get("/api/v1/feed", headers=auth_headers(account.user_id))

    assert [p["user_id"] for p in response.json()] == [athlete.user_id]
