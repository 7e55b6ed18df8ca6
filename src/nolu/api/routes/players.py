"""Public player lookup API endpoints.

GET /api/search/players?query=... - Search public profiles
GET /api/user/{user_id} - Public profile with recent matches
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from nolu.accounts.profile import (
    DEFAULT_SEARCH_LIMIT,
    MAX_SEARCH_LIMIT,
    get_public_profile,
    search_players,
)
from nolu.aggregation.summary import summary_from_account
from nolu.api.app import get_db_session
from nolu.api.routes.matches import match_to_detail
from nolu.core.errors import AccountNotFoundError, ProfilePrivateError
from nolu.db.repo import DbSession
from nolu.models.domain import AccountEntity
from nolu.models.types import (
    PlayerProfile,
    PlayerSearchHit,
    PlayerSearchResponse,
    PlayerSearchStats,
)

router = APIRouter()


def _account_to_search_hit(account: AccountEntity) -> PlayerSearchHit:
    """Convert AccountEntity to a search result row."""
    return PlayerSearchHit(
        user_id=account.user_id,
        username=account.username,
        stats=PlayerSearchStats(
            kd_ratio=account.kd_ratio,
            win_percentage=account.win_percentage,
            total_games=account.total_games,
            wins=account.wins,
            kills=account.kills,
            deaths=account.deaths,
        ),
    )


@router.get("/search/players", response_model=PlayerSearchResponse)
def search(
    query: str = Query(""),
    limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1, le=MAX_SEARCH_LIMIT),
    session: DbSession = Depends(get_db_session),
) -> PlayerSearchResponse:
    """Search public profiles by user ID or username.

    Raises:
        HTTPException: 400 if the query is shorter than two characters.
    """
    try:
        accounts = search_players(session, query, limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    players = [_account_to_search_hit(a) for a in accounts]
    return PlayerSearchResponse(count=len(players), players=players)


@router.get("/user/{user_id}", response_model=PlayerProfile)
def get_player(
    user_id: str,
    session: DbSession = Depends(get_db_session),
) -> PlayerProfile:
    """Get a public profile and its five most recent matches.

    Raises:
        HTTPException: 404 if unknown, 403 if the profile is private.
    """
    try:
        profile = get_public_profile(session, user_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ProfilePrivateError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e

    return PlayerProfile(
        user_id=profile.account.user_id,
        username=profile.account.username,
        stats=summary_from_account(profile.account),
        recent_matches=[match_to_detail(m) for m in profile.recent_matches],
    )
