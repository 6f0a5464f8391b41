"""
GeneralStats Replay History Client

Fetches a user's complete match history from the replay API, one page at a
time, and decodes it into ``MatchRecord`` objects. Pages are concatenated in
the order served (newest match first).
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from generalstats.core.config import ApiConfig
from generalstats.core.constants import (
    REPLAYS_API_BASE,
    REPLAYS_ENDPOINT,
    REPLAYS_PAGE_SIZE,
    REPLAYS_TIMEOUT_SECONDS,
)
from generalstats.core.models import MatchRecord

logger = logging.getLogger(__name__)


class ReplayFetchError(RuntimeError):
    """The replay history could not be retrieved or decoded."""


class ReplayClient:
    """
    Client for the replay history API.

    Example:
        >>> from generalstats.integrations.replays import ReplayClient
        >>>
        >>> client = ReplayClient()
        >>> replays = client.get_replays("person2597")
        >>> print(f"{len(replays)} matches, latest {replays[0].id}")
    """

    def __init__(
        self,
        base_url: str = REPLAYS_API_BASE,
        page_size: int = REPLAYS_PAGE_SIZE,
        timeout: float = REPLAYS_TIMEOUT_SECONDS,
        max_pages: int | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the replay client.

        Args:
            base_url: API root, without a trailing slash
            page_size: Replays requested per page
            timeout: Per-request timeout in seconds
            max_pages: Stop after this many pages (None = until an empty page)
            session: Optional pre-configured requests session
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")

        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.timeout = timeout
        self.max_pages = max_pages
        self._session = session

    @classmethod
    def from_config(cls, config: ApiConfig) -> ReplayClient:
        return cls(
            base_url=config.base_url,
            page_size=config.page_size,
            timeout=config.timeout_seconds,
            max_pages=config.max_pages,
        )

    def _get_session(self) -> requests.Session:
        """Get or create the requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
        return self._session

    def _fetch_page(self, username: str, offset: int) -> list[dict[str, Any]]:
        """Fetch one page of raw replay entries."""
        session = self._get_session()
        url = f"{self.base_url}{REPLAYS_ENDPOINT}"
        params = {"u": username, "offset": offset, "count": self.page_size}

        try:
            response = session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            page = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Replay request failed for {username!r} at offset {offset}: {e}")
            raise ReplayFetchError(f"could not fetch replays for {username!r}: {e}") from e

        if not isinstance(page, list):
            raise ReplayFetchError(
                f"unexpected replay page for {username!r}: expected a list, "
                f"got {type(page).__name__}"
            )
        return page

    def get_replays(self, username: str) -> list[MatchRecord]:
        """
        Get a user's full match history.

        Args:
            username: Account to fetch

        Returns:
            Decoded matches, newest first

        Raises:
            ReplayFetchError: On transport, HTTP or decoding failure
        """
        records: list[MatchRecord] = []
        pages = 0
        offset = 0

        while self.max_pages is None or pages < self.max_pages:
            page = self._fetch_page(username, offset)
            pages += 1
            logger.debug(f"Fetched {len(page)} replays for {username!r} at offset {offset}")
            if not page:
                break

            try:
                records.extend(MatchRecord.from_dict(entry) for entry in page)
            except (ValueError, TypeError) as e:
                raise ReplayFetchError(f"malformed replay for {username!r}: {e}") from e

            offset += self.page_size

        logger.info(f"Fetched {len(records)} replays for {username!r} in {pages} page(s)")
        return records
