# src/sponsormatch/api/v1/endpoints/auth.py
"""Authentication endpoints for the SponsorMatch API."""

from __future__ import annotations

from fastapi import APIRouter, status

from sponsormatch.api.v1.dependencies import CurrentUserDep, SessionDep, http_error
from sponsormatch.core.errors import SponsorMatchError
from sponsormatch.core.security import create_access_token
from sponsormatch.models import Profile, UserAccount
from sponsormatch.schemas.user import LoginRequest, SignupRequest, TokenResponse, UserResponse
from sponsormatch.services import accounts

router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_for(account: UserAccount) -> TokenResponse:
    token = create_access_token(account.user_id, {"user_type": account.user_type})
    return TokenResponse(
        access_token=token,
        user_id=account.user_id,
        user_type=account.user_type,  # type: ignore[arg-type]
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
async def signup(payload: SignupRequest, db: SessionDep) -> TokenResponse:
    """Create an account and return an access token for it."""
    try:
        account = accounts.create_account(db, payload.email, payload.password, payload.user_type)
    except SponsorMatchError as exc:
        raise http_error(exc) from exc
    return _token_for(account)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange email and password for an access token."""
    try:
        account = accounts.authenticate(db, payload.email, payload.password)
    except SponsorMatchError as exc:
        raise http_error(exc) from exc
    return _token_for(account)


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUserDep, db: SessionDep) -> UserResponse:
    """Return the caller's account, including whether a profile exists."""
    account = accounts.get_account(db, current_user.user_id)
    assert account is not None  # resolved by get_current_user
    return UserResponse(
        user_id=account.user_id,
        email=account.email,
        user_type=account.user_type,  # type: ignore[arg-type]
        has_profile=db.get(Profile, account.user_id) is not None,
    )
