"""
Async HTTP client for the RapidAPI-hosted pricing API, with per-host rate
limiting and RapidAPI authentication headers.
"""

import asyncio
import time
from collections import defaultdict
from typing import Dict, List, Optional
import httpx
import logging

from flightchecker.core.exceptions import TransportError


class RateLimiter:
    """Rate limiter to keep within the RapidAPI plan's request quota"""

    def __init__(self, requests_per_minute: int = 30, logger: Optional[logging.Logger] = None):
        self.requests_per_minute = requests_per_minute
        self.request_times: Dict[str, List[float]] = defaultdict(list)
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()

    async def acquire(self, host: str) -> None:
        """Acquire rate limit permission for a host"""
        async with self._lock:
            current_time = time.time()

            # Remove requests older than 1 minute
            cutoff_time = current_time - 60
            self.request_times[host] = [
                req_time for req_time in self.request_times[host]
                if req_time > cutoff_time
            ]

            if len(self.request_times[host]) >= self.requests_per_minute:
                oldest_request = min(self.request_times[host])
                wait_time = 60 - (current_time - oldest_request)

                if wait_time > 0:
                    self.logger.info(f"Rate limit reached for {host}, waiting {wait_time:.2f} seconds")
                    await asyncio.sleep(wait_time)

            self.request_times[host].append(time.time())


class RapidApiClient:
    """
    Async HTTP client for RapidAPI services.

    Sends exactly one request per call; retry policy belongs to the caller.
    Connection failures become TransportError, HTTP statuses are returned
    to the caller untouched.
    """

    def __init__(
        self,
        timeout: int = 30,
        requests_per_minute: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.rate_limiter = RateLimiter(requests_per_minute, logger=self.logger)

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=False,
        )

    @staticmethod
    def get_headers(api_host: str, api_key: str) -> Dict[str, str]:
        """RapidAPI authentication headers"""
        return {
            "x-rapidapi-host": api_host,
            "x-rapidapi-key": api_key,
        }

    async def request(
        self,
        method: str,
        url: str,
        api_host: str,
        api_key: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> httpx.Response:
        """Make a single authenticated request to a RapidAPI host"""
        await self.rate_limiter.acquire(api_host)

        request_headers = self.get_headers(api_host, api_key)
        if headers:
            request_headers.update(headers)

        self.logger.debug(f"Making {method} request to {url}")

        try:
            response = await self.client.request(method, url, headers=request_headers, **kwargs)
        except httpx.RequestError as e:
            self.logger.error(f"Network error for {method} {url}: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e

        self.logger.debug(f"Response {response.status_code} received for {method} {url}")
        return response

    async def get(self, url: str, api_host: str, api_key: str, **kwargs) -> httpx.Response:
        """Make async GET request"""
        return await self.request("GET", url, api_host, api_key, **kwargs)

    async def post(self, url: str, api_host: str, api_key: str, **kwargs) -> httpx.Response:
        """Make async POST request"""
        return await self.request("POST", url, api_host, api_key, **kwargs)

    async def close(self) -> None:
        """Close the HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()


def log_rejected_response(response: httpx.Response, log: logging.Logger) -> None:
    """Log a rejected provider response with its body for diagnostics"""
    log.error(f"Request rejected with {response.status_code} {response.reason_phrase}")
    if response.text:
        log.error(f"Response was: {response.text}")
