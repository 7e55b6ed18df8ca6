"""Match history API endpoints (authenticated).

GET /api/user/me/matches - Own match history (newest first)
POST /api/user/me/matches - Add a match and rebuild stats
DELETE /api/user/me/matches/{match_id} - Delete a match and rebuild stats
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from nolu.api.app import get_current_account, get_db_session
from nolu.core.errors import AccountNotFoundError, MatchNotFoundError
from nolu.db.repo import DbSession
from nolu.models.domain import AccountEntity, MatchEntity
from nolu.models.types import (
    MatchCreatedResponse,
    MatchDeletedResponse,
    MatchDetail,
    MatchListResponse,
    MatchSubmission,
)
from nolu.records.matches import MatchInput, add_match, delete_match, list_matches

router = APIRouter()


def match_to_detail(match: MatchEntity) -> MatchDetail:
    """Convert MatchEntity to MatchDetail."""
    return MatchDetail(
        match_id=match.match_id,
        played_on=match.played_on,
        played_at=match.played_at,
        match_type=match.match_type,
        outcome=match.outcome,
        map_name=match.map_name,
        rounds_won=match.rounds_won,
        rounds_lost=match.rounds_lost,
        rounds=match.rounds,
        damage=match.damage,
        kills=match.kills,
        deaths=match.deaths,
        assists=match.assists,
        created_at=match.created_at,
    )


@router.get("/user/me/matches", response_model=MatchListResponse)
def get_my_matches(
    account: AccountEntity = Depends(get_current_account),
    session: DbSession = Depends(get_db_session),
) -> MatchListResponse:
    """Get up to 100 of the caller's matches, newest first."""
    matches = list_matches(session, account.account_id)
    return MatchListResponse(matches=[match_to_detail(m) for m in matches])


@router.post("/user/me/matches", response_model=MatchCreatedResponse, status_code=201)
def create_match(
    submission: MatchSubmission,
    account: AccountEntity = Depends(get_current_account),
    session: DbSession = Depends(get_db_session),
) -> MatchCreatedResponse:
    """Add a match and return the rebuilt stats.

    Args:
        submission: Validated match data.
        account: Calling account (injected).
        session: Database session (injected).

    Returns:
        MatchCreatedResponse with the stored match and updated stats.

    Raises:
        HTTPException: 404 if the account vanished mid-request.
    """
    # Build typed input for domain layer
    match_input = MatchInput(
        played_on=submission.played_on,
        played_at=submission.played_at,
        match_type=submission.match_type,
        outcome=submission.outcome,
        map_name=submission.map_name,
        rounds_won=submission.rounds_won,
        rounds_lost=submission.rounds_lost,
        damage=submission.damage,
        kills=submission.kills,
        deaths=submission.deaths,
        assists=submission.assists,
    )

    try:
        result = add_match(session, account.account_id, match_input)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail="User not found") from e

    return MatchCreatedResponse(
        message="Match added successfully!",
        match=match_to_detail(result.match),
        updated_stats=result.summary,
    )


@router.delete("/user/me/matches/{match_id}", response_model=MatchDeletedResponse)
def remove_match(
    match_id: str,
    account: AccountEntity = Depends(get_current_account),
    session: DbSession = Depends(get_db_session),
) -> MatchDeletedResponse:
    """Delete one of the caller's matches and return the rebuilt stats.

    Raises:
        HTTPException: 404 if the match does not exist or is not owned.
    """
    try:
        result = delete_match(session, account.account_id, match_id)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail="Match not found") from e

    return MatchDeletedResponse(
        message="Match deleted successfully!",
        updated_stats=result.summary,
    )
