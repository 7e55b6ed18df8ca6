#!/usr/bin/env python3
"""Seed a demo account with a handful of matches.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Creates a public demo account (skipped if it exists)
3. Adds demo matches through the normal add-match path, so the stored
   summary is rebuilt exactly as it would be for API submissions
"""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from nolu.accounts.auth import register_account  # noqa: E402
from nolu.db import repo  # noqa: E402
from nolu.db.session import get_session, init_db  # noqa: E402
from nolu.records.matches import MatchInput, add_match  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"

DEMO_USER_ID = "demo_player"
DEMO_USERNAME = "Demo Player"
DEMO_PASSWORD = "demo-password"

DEMO_MATCHES = [
    MatchInput(date(2024, 5, 1), "19:30", "Ranked", "Win", "Ascent", 13, 9, 3400, 21, 14, 6),
    MatchInput(date(2024, 5, 1), "20:15", "Ranked", "Loss", "Bind", 8, 13, 2500, 14, 17, 4),
    MatchInput(date(2024, 5, 2), "18:05", "Casual", "Win", "Mirage", 16, 12, 4100, 25, 19, 7),
    MatchInput(date(2024, 5, 3), "21:40", "Tournament", "Draw", "Inferno", 15, 15, 4400, 27, 22, 9),
    MatchInput(date(2024, 5, 4), "17:00", "Practice", "Win", "Haven", 13, 4, 2900, 19, 6, 3),
]


def seed_database() -> None:
    """Create the demo account and its matches."""
    init_db(DEMO_DB_PATH)
    session = get_session(DEMO_DB_PATH)

    try:
        if repo.get_account_by_user_id(session, DEMO_USER_ID) is not None:
            print(f"Demo account already exists: {DEMO_USER_ID}")
            return

        print("Creating demo account...")
        result = register_account(session, DEMO_USER_ID, DEMO_USERNAME, DEMO_PASSWORD)
        account_id = result.account.account_id

        print("Adding matches...")
        for match_input in DEMO_MATCHES:
            outcome = add_match(session, account_id, match_input)
            print(
                f"  {match_input.played_on} {match_input.map_name:<8} {match_input.outcome:<4}"
                f" -> K/D {outcome.summary.kd_ratio}, win% {outcome.summary.win_percentage}"
            )

        print("Database seeded successfully!")

    finally:
        session.close()


def main() -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Nolu Demo Seeding Script")
    print("=" * 60)

    seed_database()

    print("\n" + "=" * 60)
    print("Demo seeding complete!")
    print(f"Database: {DEMO_DB_PATH}")
    print(f"Login: {DEMO_USER_ID} / {DEMO_PASSWORD}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
