"""Account statistics aggregation.

Computes an account's summary from its complete match set. The summary is
always rebuilt from scratch; stored summaries are never adjusted by deltas.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from nolu.db import repo
from nolu.db.repo import DbSession
from nolu.models.domain import AccountEntity, MatchEntity
from nolu.models.types import AccountSummary

# Rounding policy: decimal places per derived field
KD_RATIO_PLACES = 2
KILLS_PER_ROUND_PLACES = 2
DAMAGE_PER_ROUND_PLACES = 0
WIN_PERCENTAGE_PLACES = 1


def round_half_up(value: float, places: int) -> float:
    """Round to a fixed number of decimal places, ties away from zero.

    Operates on the exact binary value of the float, so 2.5 -> 3 and
    0.125 -> 0.13, while 1.005 (stored as 1.00499...) -> 1.0.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def empty_summary() -> AccountSummary:
    """Summary of an account with no matches: every count and ratio 0."""
    return AccountSummary(
        kd_ratio=0,
        damage_per_round=0,
        win_percentage=0,
        kills_per_round=0,
        wins=0,
        kills=0,
        deaths=0,
        assists=0,
        total_games=0,
        total_rounds=0,
        total_damage=0,
    )


def aggregate_matches(matches: Iterable[MatchEntity]) -> AccountSummary:
    """Compute the summary for a complete match set.

    Pure function - no database access. The result depends only on the
    multiset of matches, not on their order.

    Args:
        matches: Every match owned by one account.

    Returns:
        AccountSummary with rounding applied once per field.
    """
    total_kills = 0
    total_deaths = 0
    total_assists = 0
    total_damage = 0
    total_rounds = 0
    wins = 0
    total_games = 0

    for match in matches:
        total_games += 1
        total_kills += match.kills
        total_deaths += match.deaths
        total_assists += match.assists
        total_damage += match.damage
        total_rounds += match.rounds_won + match.rounds_lost
        if match.outcome == "Win":
            wins += 1

    if total_games == 0:
        return empty_summary()

    # Zero deaths reports the raw kill count, unrounded
    if total_deaths > 0:
        kd_ratio = round_half_up(total_kills / total_deaths, KD_RATIO_PLACES)
    else:
        kd_ratio = total_kills

    if total_rounds > 0:
        damage_per_round = round_half_up(total_damage / total_rounds, DAMAGE_PER_ROUND_PLACES)
        kills_per_round = round_half_up(total_kills / total_rounds, KILLS_PER_ROUND_PLACES)
    else:
        damage_per_round = 0
        kills_per_round = 0

    win_percentage = round_half_up((wins / total_games) * 100, WIN_PERCENTAGE_PLACES)

    return AccountSummary(
        kd_ratio=kd_ratio,
        damage_per_round=damage_per_round,
        win_percentage=win_percentage,
        kills_per_round=kills_per_round,
        wins=wins,
        kills=total_kills,
        deaths=total_deaths,
        assists=total_assists,
        total_games=total_games,
        total_rounds=total_rounds,
        total_damage=total_damage,
    )


def summarize_account(session: DbSession, account_id: str) -> AccountSummary:
    """Compute the summary of an account from its stored matches.

    Args:
        session: Database session.
        account_id: Account to summarize.

    Returns:
        Freshly computed AccountSummary (not persisted).
    """
    matches = repo.get_matches_for_account(session, account_id)
    return aggregate_matches(matches)


def rebuild_account_summary(session: DbSession, account_id: str) -> AccountSummary:
    """Recompute an account's summary and overwrite the stored one.

    Does not commit; the caller owns the transaction so that the match
    mutation and the new summary land together or not at all.
    """
    summary = summarize_account(session, account_id)
    repo.replace_account_summary(session, account_id, summary)
    return summary


def summary_from_account(account: AccountEntity) -> AccountSummary:
    """Read the stored summary columns of an AccountEntity."""
    return AccountSummary(
        **{column: getattr(account, column) for column in repo.SUMMARY_COLUMNS}
    )
