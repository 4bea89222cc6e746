import asyncio
from typing import Optional
from urllib.parse import quote

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from auction_board.models.enums import SourceKind
from .base_source import BaseSource, FetchError, NotFoundError

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class TransientFetchError(FetchError):
    """Fetch failure that may succeed when tried again."""

    pass


def join_location(base_location: str, team_name: str) -> str:
    """Joins the base URL with the percent-encoded '<team name>.csv' file name."""
    separator = "" if base_location.endswith("/") else "/"
    return f"{base_location}{separator}{quote(team_name, safe='')}.csv"


class HttpCsvSource(BaseSource):
    """Reads team CSV files over HTTP(S), e.g. from a raw GitHub folder."""

    kind = SourceKind.HTTP

    def __init__(
        self,
        base_location: str,
        timeout_seconds: float = 30.0,
        max_attempts: int = 1,
        client: Optional[httpx.AsyncClient] = None,
        retry_wait: Optional[wait_base] = None,
    ):
        super().__init__(base_location)
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.timeout_seconds = timeout_seconds
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=10)
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            headers={"Accept": "text/csv, text/plain;q=0.9, */*;q=0.5"},
        )

    def location_for(self, team_name: str) -> str:
        return join_location(self.base_location, team_name)

    async def fetch_team_csv(self, team_name: str) -> str:
        url = self.location_for(team_name)
        if self.max_attempts == 1:
            return await self._read(url)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(TransientFetchError),
                reraise=False,
            ):
                with attempt:
                    return await self._read(url)
        except RetryError as e:
            # This catches the error after all retries have failed
            last_error = e.last_attempt.exception()
            logger.error(
                f"Max retries ({self.max_attempts}) exceeded for {url}. Last exception: {last_error}"
            )
            raise FetchError(
                f"Failed to load {url} after {self.max_attempts} attempts"
            ) from last_error
        # AsyncRetrying always returns or raises above
        raise FetchError(f"Failed to load {url}")

    async def _read(self, url: str) -> str:
        """Makes a single GET request and returns the body as text."""
        logger.debug(f"Requesting {url}")
        try:
            # Overall deadline; httpx timeouts only bound each connect/read step
            response = await asyncio.wait_for(self.client.get(url), self.timeout_seconds)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(f"Timed out reading {url}: {e}")
            raise TransientFetchError(f"Timed out loading {url}") from e
        except httpx.RequestError as e:
            # Network errors, DNS failures etc.
            logger.warning(f"Request error for {url}: {e}")
            raise TransientFetchError(f"Failed to load {url}: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"Failed to load {url} (404 Not Found)")
        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(f"Transient HTTP {response.status_code} for {url}")
            raise TransientFetchError(
                f"Failed to load {url} (HTTP {response.status_code})"
            )
        if not response.is_success:
            logger.error(f"HTTP error {response.status_code} for {url}")
            raise FetchError(f"Failed to load {url} (HTTP {response.status_code})")

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response.content.decode("utf-8-sig", errors="replace")

    async def close(self) -> None:
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug(f"Closed HTTP client for {self.base_location}")
