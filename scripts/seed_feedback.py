"""
Feedback seeding
----------------
Creates 50-100 synthetic feedback rows spread over branch-type locations,
dated within the last three months.
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from branchhub.core.logging import configure_logging
from branchhub.db.session import SessionLocal
from branchhub.services.seeding import rating_distribution, seed_feedback


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample feedback")
    parser.add_argument("--count", type=int, default=None, help="Rows to create (default: random 50-100)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args()

    configure_logging()
    print("Starting to seed feedback data...")

    db = SessionLocal()
    try:
        try:
            created = seed_feedback(db, random.Random(args.seed), count=args.count)
        except LookupError as exc:
            raise SystemExit(str(exc)) from exc
        distribution = rating_distribution(db)
    finally:
        db.close()

    print(f"\nDone! Created {created} feedback entries")
    print("\nFeedback distribution by rating:")
    for rating, count in distribution.items():
        print(f"{'*' * rating} ({rating}): {count} feedback")


if __name__ == "__main__":
    main()
