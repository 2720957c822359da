"""
Service point recategorization
------------------------------
Moves "Branches" rows whose names do not look like bank branches to
"Service Points", then prints the resulting type distribution.
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from branchhub.core.logging import configure_logging
from branchhub.db.session import SessionLocal
from branchhub.services.maintenance import recategorize_service_points


def main() -> None:
    configure_logging()
    print("Recategorizing non-branch locations as Service Points...")

    db = SessionLocal()
    try:
        summary = recategorize_service_points(db)
    finally:
        db.close()

    print(f"\nDone! Recategorized {len(summary.moved)} locations as Service Points")
    print("\nFinal type distribution:")
    for branch_type, count in summary.distribution.items():
        print(f"  {branch_type}: {count}")


if __name__ == "__main__":
    main()
