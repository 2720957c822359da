"""Synchronize the bank's location feed into the branches table."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from branchhub.core.config import settings
from branchhub.core.exceptions import InvalidCoordinateError, PersistenceError
from branchhub.schemas.feed import FeedResponse, RawFeedLocation
from branchhub.schemas.sync import PreviewBranch, PreviewResponse, SyncResponse, SyncStats
from branchhub.services.branches import upsert_branch
from branchhub.services.classifier import classify_location
from branchhub.services.coordinates import parse_coordinates

logger = logging.getLogger(__name__)


class FeedClient(Protocol):
    async def fetch(self) -> FeedResponse: ...


def build_external_id(raw_id: str) -> str:
    """Namespaced sync key for an upstream location id."""
    return f"{settings.external_id_prefix}-{raw_id}"


def select_language(entries: Iterable[Any], language: str | None = None) -> list[dict]:
    """Keep one copy of each location: the feed repeats entries per language."""
    language = language or settings.feed_language
    return [entry for entry in entries if isinstance(entry, dict) and entry.get("language") == language]


def to_branch_fields(location: RawFeedLocation) -> dict:
    """Classify and parse a feed entry. Raises InvalidCoordinateError."""
    latitude, longitude = parse_coordinates(location.location)
    return {
        "name": location.title,
        "address": location.address,
        "type": classify_location(location.title),
        "services": location.service_names,
        "latitude": latitude,
        "longitude": longitude,
    }


async def sync_branches(db: Session, client: FeedClient) -> SyncResponse:
    """Fetch the feed and upsert every location.

    Fetch failures propagate and nothing is written. After that each record
    stands alone: a bad record is counted and skipped, and records already
    committed stay committed.
    """
    feed = await client.fetch()
    entries = select_language(feed.payload.contents)
    stats = SyncStats(total=len(entries))

    for entry in entries:
        try:
            location = RawFeedLocation.model_validate(entry)
        except ValidationError as exc:
            logger.warning("Skipping malformed feed entry %r: %s", entry.get("title"), exc)
            stats.errors += 1
            continue

        try:
            fields = to_branch_fields(location)
        except InvalidCoordinateError:
            logger.warning("Invalid coordinates for %s: %r", location.title, location.location)
            stats.errors += 1
            continue

        try:
            # Blocking ORM work runs off the event loop.
            _, created = await run_in_threadpool(
                upsert_branch, db, build_external_id(location.id), fields
            )
        except PersistenceError:
            logger.exception("Error syncing location %s", location.title)
            stats.errors += 1
            continue

        if created:
            stats.created += 1
        else:
            stats.updated += 1

    message = (
        f"Sync completed: {stats.created} created, {stats.updated} updated, {stats.errors} errors"
    )
    logger.info(message)
    return SyncResponse(success=True, message=message, stats=stats)


async def preview_branches(client: FeedClient) -> PreviewResponse:
    """Same fetch, filter and classification as a sync, without writing anything."""
    feed = await client.fetch()

    branches = []
    for entry in select_language(feed.payload.contents):
        try:
            location = RawFeedLocation.model_validate(entry)
            fields = to_branch_fields(location)
        except (ValidationError, InvalidCoordinateError):
            continue
        branches.append(PreviewBranch(id=location.id, **fields))

    return PreviewResponse(success=True, count=len(branches), branches=branches)
