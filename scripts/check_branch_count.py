"""
Branch type audit
-----------------
Counts rows typed "Branches" and how many of them look like real branches
(name mentions branch / filial / office). Read-only.
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
from branchhub.services.maintenance import audit_branch_types


def main() -> None:
    configure_logging()
    db = SessionLocal()
    try:
        audit = audit_branch_types(db)
    finally:
        db.close()

    print(f'Total with type "Branches": {audit.total}')
    print(f"Actual bank branches: {audit.actual_branches}")
    print(f"\nNot real branches: {audit.service_points}")

    print("\nExamples of non-branch locations:")
    for name in audit.examples:
        print(f"  - {name}")


if __name__ == "__main__":
    main()
