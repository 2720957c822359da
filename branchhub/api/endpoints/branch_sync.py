"""Endpoints that pull the bank's location feed."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from branchhub.core.exceptions import MalformedResponseError, UpstreamError
from branchhub.db.session import get_db
from branchhub.schemas.sync import PreviewResponse, SyncErrorResponse, SyncResponse
from branchhub.services.branch_sync import preview_branches, sync_branches
from branchhub.services.feed_client import BankFeedClient, get_feed_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/branches/sync", tags=["sync"])

ERROR_RESPONSES = {500: {"model": SyncErrorResponse}}


def _error(message: str, exc: Exception) -> JSONResponse:
    body = SyncErrorResponse(error=message, details=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


@router.get("", response_model=PreviewResponse, responses=ERROR_RESPONSES)
async def preview(client: BankFeedClient = Depends(get_feed_client)):
    """Show what a sync would write, without writing it."""
    try:
        return await preview_branches(client)
    except (UpstreamError, MalformedResponseError) as exc:
        logger.error("Error fetching branches from Bank API: %s", exc)
        return _error("Failed to fetch branches", exc)


@router.post("", response_model=SyncResponse, responses=ERROR_RESPONSES)
async def sync(
    db: Session = Depends(get_db),
    client: BankFeedClient = Depends(get_feed_client),
):
    """Upsert every English-language feed location into the branches table."""
    try:
        return await sync_branches(db, client)
    except (UpstreamError, MalformedResponseError) as exc:
        logger.error("Error syncing branches: %s", exc)
        return _error("Failed to sync branches", exc)
