"""Expose schemas for easier import."""

from branchhub.schemas.branch import (  # noqa: F401
    BranchCreate,
    BranchOut,
    BranchOverview,
    BranchWithStats,
    MapView,
    NearestBranch,
)
from branchhub.schemas.feed import FeedResponse, RawFeedLocation  # noqa: F401
from branchhub.schemas.feedback import FeedbackCreate, FeedbackLink, FeedbackOut  # noqa: F401
from branchhub.schemas.sync import (  # noqa: F401
    PreviewBranch,
    PreviewResponse,
    SyncErrorResponse,
    SyncResponse,
    SyncStats,
)
