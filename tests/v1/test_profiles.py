# mypy: ignore-errors
"""Tests for profile completion and lookup endpoints."""

import asyncio
import base64
import time

import httpx
import pytest
from fastapi import status

from sponsormatch.api.v1.dependencies import get_storage_dep
from sponsormatch.core.errors import TransientIOError
from sponsormatch.services.storage import HttpObjectStorage

IMAGE_B64 = base64.b64encode(b"\x89PNG\r\n\x1a\nfake-image").decode()


@pytest.fixture()
def new_athlete_headers(make_account, auth_headers):
    account = make_account("athlete")
    return account, auth_headers(account.user_id)


def _athlete_payload(**overrides):
    payload = {
        "variant": "athlete",
        "display_name": "Riley Chen",
        "category": "Soccer",
        "description": "Two-way midfielder",
        "college": "Coastal College",
        "graduation_year": 2027,
        "amount_requested": 2500,
        "image_base64": IMAGE_B64,
        "image_content_type": "image/png",
    }
    payload.update(overrides)
    return payload


def test_complete_athlete_profile(client, new_athlete_headers, storage) -> None:
    account, headers = new_athlete_headers

    response = client.put("/api/v1/profiles/me", json=_athlete_payload(), headers=headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user_id"] == account.user_id
    assert data["variant"] == "athlete"
    assert data["display_name"] == "Riley Chen"
    assert data["image_url"] == f"http://test/media/athletes/{account.user_id}"
    assert data["likes"] == []
    assert data["passes"] == []
    assert (storage.root / "athletes" / account.user_id).is_file()


def test_profile_requires_image(client, new_athlete_headers) -> None:
    _, headers = new_athlete_headers

    response = client.put(
        "/api/v1/profiles/me",
        json=_athlete_payload(image_base64=None),
        headers=headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "image" in response.json()["detail"]


def test_profile_rejects_invalid_base64(client, new_athlete_headers) -> None:
    _, headers = new_athlete_headers

    response = client.put(
        "/api/v1/profiles/me",
        json=_athlete_payload(image_base64="***not base64***"),
        headers=headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Image must be valid base64"


def test_profile_variant_must_match_account(client, new_athlete_headers) -> None:
    _, headers = new_athlete_headers

    response = client.put(
        "/api/v1/profiles/me",
        json=_athlete_payload(variant="sponsor"),
        headers=headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_profile_missing_required_field(client, new_athlete_headers) -> None:
    _, headers = new_athlete_headers

    response = client.put(
        "/api/v1/profiles/me",
        json=_athlete_payload(description=""),
        headers=headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "description" in response.json()["detail"]


def test_storage_outage_maps_to_service_unavailable(client, app, new_athlete_headers, mocker) -> None:
    _, headers = new_athlete_headers
    failing = mocker.Mock()
    failing.upload.side_effect = TransientIOError("bucket unreachable")
    app.dependency_overrides[get_storage_dep] = lambda: failing

    response = client.put("/api/v1/profiles/me", json=_athlete_payload(), headers=headers)

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


@pytest.mark.asyncio
async def test_upload_retries_do_not_stall_other_requests(app, new_athlete_headers) -> None:
    """Health stays responsive while a profile upload backs off between retries."""
    _, headers = new_athlete_headers
    storage = HttpObjectStorage(
        "https://bucket.test",
        max_retries=2,
        backoff_seconds=0.3,
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    app.dependency_overrides[get_storage_dep] = lambda: storage

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        upload = asyncio.create_task(
            http.put("/api/v1/profiles/me", json=_athlete_payload(), headers=headers)
        )
        await asyncio.sleep(0.1)

        started = time.perf_counter()
        health = await http.get("/health")
        elapsed = time.perf_counter() - started

        response = await upload

    storage.close()
    assert health.status_code == status.HTTP_200_OK
    assert elapsed < 0.3
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


def test_get_own_profile_includes_decisions(client, athlete, athlete_headers, make_sponsor) -> None:
    liked = make_sponsor("Peak Nutrition")
    passed = make_sponsor("Orbit Energy")
    client.post("/api/v1/swipes", json={"target_user_id": liked.user_id, "action": "like"}, headers=athlete_headers)
    client.post("/api/v1/swipes", json={"target_user_id": passed.user_id, "action": "pass"}, headers=athlete_headers)

    response = client.get("/api/v1/profiles/me", headers=athlete_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["likes"] == [liked.user_id]
    assert data["passes"] == [passed.user_id]


def test_get_own_profile_before_completion(client, new_athlete_headers) -> None:
    _, headers = new_athlete_headers
    response = client.get("/api/v1/profiles/me", headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_other_profile(client, sponsor, athlete_headers) -> None:
    response = client.get(f"/api/v1/profiles/{sponsor.user_id}", headers=athlete_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["variant"] == "sponsor"
    assert data["display_name"] == "Acme Sports"
    assert data["min_budget"] == 1000
    assert "likes" not in data


def test_get_unknown_profile(client, athlete_headers) -> None:
    response = client.get("/api/v1/profiles/nobody", headers=athlete_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_profiles_by_variant(client, athlete_headers, make_sponsor) -> None:
    make_sponsor("Peak Nutrition")
    make_sponsor("Orbit Energy")

    response = client.get("/api/v1/profiles", params={"variant": "sponsor"}, headers=athlete_headers)

    assert response.status_code == status.HTTP_200_OK
    assert {p["display_name"] for p in response.json()} == {"Peak Nutrition", "Orbit Energy"}


def test_list_profiles_requires_valid_variant(client, athlete_headers) -> None:
    response = client.get("/api/v1/profiles", params={"variant": "coach"}, headers=athlete_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
