"""Authentication API endpoints.

POST /api/signup - Create account and issue token
POST /api/login - Verify credentials and issue token
POST /api/logout - Revoke the presented token
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from nolu.accounts import auth
from nolu.aggregation.summary import summary_from_account
from nolu.api.app import get_bearer_token, get_current_account, get_db_session
from nolu.core.errors import AccountExistsError, InvalidCredentialsError
from nolu.db.repo import DbSession
from nolu.models.domain import AccountEntity
from nolu.models.types import AccountProfile, AuthResponse, LoginRequest, SignupRequest

router = APIRouter()


def _account_to_profile(account: AccountEntity) -> AccountProfile:
    """Convert AccountEntity to the owner-facing profile."""
    return AccountProfile(
        user_id=account.user_id,
        username=account.username,
        is_public=account.is_public,
        stats=summary_from_account(account),
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
def signup(
    request: SignupRequest,
    session: DbSession = Depends(get_db_session),
) -> AuthResponse:
    """Create an account.

    Raises:
        HTTPException: 409 if the user ID is taken.
    """
    try:
        result = auth.register_account(
            session,
            user_id=request.user_id,
            username=request.username,
            password=request.password,
        )
    except AccountExistsError as e:
        raise HTTPException(status_code=409, detail="User ID already exists") from e

    return AuthResponse(
        message="Account created successfully!",
        token=result.token,
        account=_account_to_profile(result.account),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    session: DbSession = Depends(get_db_session),
) -> AuthResponse:
    """Log in with user ID and password.

    Raises:
        HTTPException: 401 on unknown user or wrong password.
    """
    try:
        result = auth.login(session, user_id=request.user_id, password=request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    return AuthResponse(
        message="Login successful!",
        token=result.token,
        account=_account_to_profile(result.account),
    )


@router.post("/logout", status_code=204, dependencies=[Depends(get_current_account)])
def logout(
    token: str = Depends(get_bearer_token),
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Revoke the current token."""
    auth.logout(session, token)
    return Response(status_code=204)
