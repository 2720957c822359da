"""Client for the bank's public service-network feed."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from branchhub.core.config import settings
from branchhub.core.exceptions import MalformedResponseError, UpstreamError
from branchhub.schemas.feed import FeedResponse

logger = logging.getLogger(__name__)


class BankFeedClient:
    """Single-shot GET against the location feed. No retries."""

    def __init__(self, url: str, origin: str, timeout: aiohttp.ClientTimeout | None = None) -> None:
        self.url = url
        self.origin = origin.rstrip("/")
        self.timeout = timeout

    @property
    def headers(self) -> dict[str, str]:
        # The upstream rejects requests without the site's Origin/Referer.
        return {
            "Accept": "application/json",
            "Origin": self.origin,
            "Referer": f"{self.origin}/",
        }

    async def fetch(self) -> FeedResponse:
        """Fetch and validate the feed payload."""
        session_kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            session_kwargs["timeout"] = self.timeout

        try:
            async with aiohttp.ClientSession(**session_kwargs) as session:
                async with session.get(self.url, headers=self.headers) as response:
                    if response.status < 200 or response.status >= 300:
                        raise UpstreamError(
                            f"Bank API returned {response.status}", status=response.status
                        )
                    body = await response.text()
        except aiohttp.ClientError as exc:
            logger.error("Bank feed request failed: %s", exc)
            raise UpstreamError(f"Bank API request failed: {exc}") from exc

        return self.parse(body)

    @staticmethod
    def parse(body: str) -> FeedResponse:
        """Validate a raw response body into a :class:`FeedResponse`."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError("Bank API returned invalid JSON") from exc

        payload = data.get("payload") if isinstance(data, dict) else None
        if not isinstance(payload, dict) or not isinstance(payload.get("contents"), list):
            raise MalformedResponseError("Invalid API response structure")

        try:
            return FeedResponse.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError(f"Invalid API response structure: {exc}") from exc


def get_feed_client() -> BankFeedClient:
    """Build a client from settings (FastAPI dependency)."""
    return BankFeedClient(url=settings.bank_feed_url, origin=settings.bank_site_origin)
