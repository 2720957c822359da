"""Root API router."""

from fastapi import APIRouter

from branchhub.api.endpoints import branch_sync, branches, feedback, feedback_links

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


# /branches/sync must be registered ahead of /branches/{branch_id}
router.include_router(branch_sync.router)
router.include_router(branches.router)
router.include_router(feedback.router)
router.include_router(feedback_links.router)
