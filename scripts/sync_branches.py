"""
Branch sync from the console
----------------------------
Runs the same feed synchronization as POST /branches/sync.
Use --preview to print what would be written without touching the database.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from branchhub.core.exceptions import MalformedResponseError, UpstreamError
from branchhub.core.logging import configure_logging
from branchhub.db.session import SessionLocal
from branchhub.services.branch_sync import preview_branches, sync_branches
from branchhub.services.feed_client import get_feed_client


def main() -> None:
    parser = argparse.ArgumentParser(description="Bank location feed -> branches table")
    parser.add_argument("--preview", action="store_true", help="Fetch and classify only")
    args = parser.parse_args()

    configure_logging()
    client = get_feed_client()

    try:
        if args.preview:
            preview = asyncio.run(preview_branches(client))
            for branch in preview.branches:
                print(f"  [{branch.type}] {branch.name} ({branch.latitude}, {branch.longitude})")
            print(f"\n{preview.count} locations")
            return

        db = SessionLocal()
        try:
            result = asyncio.run(sync_branches(db, client))
        finally:
            db.close()
    except (UpstreamError, MalformedResponseError) as exc:
        raise SystemExit(f"Sync failed: {exc}") from exc

    print(result.message)
    print(f"  total: {result.stats.total}")


if __name__ == "__main__":
    main()
