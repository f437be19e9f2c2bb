"""Profile Store: create, replace and list athlete and sponsor profiles."""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from sponsormatch.core.context import UserContext
from sponsormatch.core.errors import NotFoundError, ValidationError
from sponsormatch.models import Athlete, Profile, Sponsor, UserAccount
from sponsormatch.services.storage import ObjectStorage

__all__ = [
    "PROFILE_CLASSES",
    "create_or_replace_profile",
    "get_profile",
    "find_profile",
    "list_profiles",
]

logger = logging.getLogger(__name__)

PROFILE_CLASSES: dict[str, type[Profile]] = {"athlete": Athlete, "sponsor": Sponsor}

_COMMON_FIELDS = ("display_name", "category", "description", "preferred_colleges")
_VARIANT_FIELDS: dict[str, tuple[str, ...]] = {
    "athlete": (
        "college",
        "position",
        "graduation_year",
        "height",
        "weight",
        "gpa",
        "achievements",
        "amount_requested",
    ),
    "sponsor": ("website", "min_budget", "max_budget", "preferred_sports"),
}
_REQUIRED_LABELS = {
    "athlete": {"display_name": "full name", "category": "sport", "description": "description"},
    "sponsor": {
        "display_name": "company name",
        "category": "industry",
        "description": "description",
    },
}
_IMAGE_FOLDERS = {"athlete": "athletes", "sponsor": "sponsors"}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _validate(variant: str, fields: Mapping[str, Any], image: bytes | None) -> dict[str, Any]:
    """Return the cleaned column values for `variant` or raise ValidationError."""
    missing = [
        label for name, label in _REQUIRED_LABELS[variant].items() if _blank(fields.get(name))
    ]
    if not image:
        missing.append("image" if variant == "athlete" else "logo")
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    other = "sponsor" if variant == "athlete" else "athlete"
    stray = [name for name in _VARIANT_FIELDS[other] if fields.get(name) is not None]
    if stray:
        raise ValidationError(f"Fields not valid for {variant} profiles: {', '.join(stray)}")

    cleaned: dict[str, Any] = {name: fields.get(name) for name in _VARIANT_FIELDS[variant]}
    for name in _COMMON_FIELDS:
        value = fields.get(name)
        cleaned[name] = value.strip() if isinstance(value, str) else value
    cleaned["preferred_colleges"] = list(cleaned["preferred_colleges"] or [])

    for amount in ("amount_requested", "min_budget", "max_budget"):
        value = cleaned.get(amount)
        if value is not None and value < 0:
            raise ValidationError(f"{amount} cannot be negative")
    if variant == "sponsor":
        min_budget, max_budget = cleaned["min_budget"], cleaned["max_budget"]
        if min_budget is not None and max_budget is not None and min_budget > max_budget:
            raise ValidationError("Minimum budget cannot be greater than maximum budget")
        cleaned["preferred_sports"] = list(cleaned["preferred_sports"] or [])
    return cleaned


def create_or_replace_profile(
    db: Session,
    storage: ObjectStorage,
    context: UserContext,
    variant: str,
    fields: Mapping[str, Any],
    image: bytes | None,
    *,
    content_type: str = "image/jpeg",
) -> Profile:
    """Upsert the caller's profile, uploading the image first.

    The stored row is fully replaced: optional fields missing from `fields`
    are cleared. Swipe decisions already recorded on the profile are kept.

    Args:
        db: Database session.
        storage: Object storage used for the image upload.
        context: The authenticated caller; the profile is keyed by its user id.
        variant: ``"athlete"`` or ``"sponsor"``; must equal the account's user type.
        fields: Descriptive profile values.
        image: Raw image bytes.
        content_type: MIME type forwarded to the storage backend.

    Returns:
        The persisted `Athlete` or `Sponsor`.

    Raises:
        ValidationError: If a required field is missing or a value is invalid.
        NotFoundError: If the caller has no account.
        StorageError: If the image upload fails.
    """
    if variant not in PROFILE_CLASSES:
        raise ValidationError(f"Unknown profile variant: {variant!r}")
    if variant != context.user_type:
        raise ValidationError(f"A {context.user_type} account cannot own a {variant} profile")

    cleaned = _validate(variant, fields, image)

    profile = db.get(Profile, context.user_id)
    if profile is None and db.get(UserAccount, context.user_id) is None:
        raise NotFoundError(f"Account not found with ID: {context.user_id}")

    handle = storage.upload(image or b"", f"{_IMAGE_FOLDERS[variant]}/{context.user_id}", content_type)
    cleaned["image_url"] = storage.get_public_url(handle)

    if profile is None:
        profile = PROFILE_CLASSES[variant](user_id=context.user_id, **cleaned)
        db.add(profile)
        logger.info("Created %s profile %s", variant, context.user_id)
    else:
        for name, value in cleaned.items():
            setattr(profile, name, value)
        logger.info("Replaced %s profile %s", variant, context.user_id)

    db.commit()
    db.refresh(profile)
    return profile


def find_profile(db: Session, user_id: str) -> Profile | None:
    """Return the profile of `user_id` as its concrete variant, if any."""
    return db.get(Profile, user_id)


def get_profile(db: Session, user_id: str) -> Profile:
    """Return the profile of `user_id` or raise NotFoundError."""
    profile = find_profile(db, user_id)
    if profile is None:
        raise NotFoundError(f"Profile not found with ID: {user_id}")
    return profile


def list_profiles(db: Session, variant: str) -> Sequence[Profile]:
    """Return every profile of one variant, oldest first, without filtering."""
    if variant not in PROFILE_CLASSES:
        raise ValidationError(f"Unknown profile variant: {variant!r}")
    model = PROFILE_CLASSES[variant]
    return db.scalars(select(model).order_by(model.created_at, model.user_id)).all()
