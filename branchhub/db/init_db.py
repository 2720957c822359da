"""Database initialization utilities."""

from branchhub import models  # noqa: F401
from branchhub.db.base import Base
from branchhub.db.session import engine


def init_db() -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)
