"""
Database schema initialization
------------------------------
Creates the branches and feedback tables if they do not exist.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import inspect

from branchhub.db.init_db import init_db
from branchhub.db.session import engine


def init_db_schema() -> None:
    print("Initializing database schema...")
    init_db()

    print("\nTables:")
    for table_name in sorted(inspect(engine).get_table_names()):
        print(f"  - {table_name}")


if __name__ == "__main__":
    init_db_schema()
