"""Account dashboard API endpoints (authenticated).

GET /api/user/me/stats - Own stats, settings and identity
DELETE /api/user/me/stats - Delete all own matches and rebuild stats
GET /api/user/me/privacy - Profile visibility
PUT /api/user/me/privacy - Change profile visibility
DELETE /api/user/me - Delete account with all its data
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from nolu.accounts.profile import delete_account, set_privacy
from nolu.aggregation.summary import summary_from_account
from nolu.api.app import get_current_account, get_db_session
from nolu.core.errors import AccountNotFoundError
from nolu.db.repo import DbSession
from nolu.models.domain import AccountEntity
from nolu.models.types import (
    AccountIdentity,
    DashboardStats,
    MessageResponse,
    PrivacySettings,
    PrivacyUpdate,
    PrivacyUpdatedResponse,
    StatsResetResponse,
)
from nolu.records.matches import reset_stats

router = APIRouter()


@router.get("/user/me/stats", response_model=DashboardStats)
def get_my_stats(
    account: AccountEntity = Depends(get_current_account),
) -> DashboardStats:
    """Get the caller's stored stats, visibility and identity."""
    return DashboardStats(
        stats=summary_from_account(account),
        settings=PrivacySettings(is_public=account.is_public),
        user=AccountIdentity(user_id=account.user_id, username=account.username),
    )


@router.delete("/user/me/stats", response_model=StatsResetResponse)
def reset_my_stats(
    account: AccountEntity = Depends(get_current_account),
    session: DbSession = Depends(get_db_session),
) -> StatsResetResponse:
    """Delete all of the caller's matches; stats rebuild to zero."""
    try:
        result = reset_stats(session, account.account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail="User not found") from e

    return StatsResetResponse(message="All stats reset successfully!", stats=result.summary)


@router.get("/user/me/privacy", response_model=PrivacySettings)
def get_my_privacy(
    account: AccountEntity = Depends(get_current_account),
) -> PrivacySettings:
    """Get profile visibility."""
    return PrivacySettings(is_public=account.is_public)


@router.put("/user/me/privacy", response_model=PrivacyUpdatedResponse)
def update_my_privacy(
    update: PrivacyUpdate,
    account: AccountEntity = Depends(get_current_account),
    session: DbSession = Depends(get_db_session),
) -> PrivacyUpdatedResponse:
    """Make the profile public or private."""
    try:
        updated = set_privacy(session, account.account_id, update.is_public)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail="User not found") from e

    visibility = "public" if updated.is_public else "private"
    return PrivacyUpdatedResponse(
        message=f"Profile is now {visibility}",
        is_public=updated.is_public,
    )


@router.delete("/user/me", response_model=MessageResponse)
def delete_my_account(
    account: AccountEntity = Depends(get_current_account),
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    """Delete the caller's account, matches and tokens."""
    try:
        delete_account(session, account.account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail="User not found") from e

    return MessageResponse(message="Account deleted successfully!")
