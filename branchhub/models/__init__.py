"""ORM models; importing this package registers every table on Base.metadata."""

from branchhub.models.branch import Branch  # noqa: F401
from branchhub.models.feedback import Feedback  # noqa: F401
