"""
Runs a complete quote: start a search, poll until the provider reports the
quotes complete, then normalize the final page of results.

In practice the first polls return partial results with status
"UpdatesPending"; a fully populated "UpdatesComplete" page typically arrives
after 20-30 seconds.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from flightchecker.core.config import Settings
from flightchecker.core.exceptions import QuotesIncompleteError
from flightchecker.models.quotes import Quote
from flightchecker.models.requests import Arguments
from flightchecker.models.skyscanner import SkyScannerResponse
from flightchecker.services.http_client import RapidApiClient
from flightchecker.services.normalizer import AirportLookup, ResponseNormalizer
from flightchecker.services.result_poller import ResultPoller
from flightchecker.services.search_initiator import SearchInitiator

MAX_POLL_ATTEMPTS = 6
POLL_INTERVAL_SECONDS = 10


class PipelineState(str, Enum):
    SEARCHING = "Searching"
    POLLING = "Polling"
    COMPLETE = "Complete"
    EXHAUSTED = "Exhausted"
    ERROR = "Error"


class QuotePipeline:
    """
    Sequences SearchInitiator, ResultPoller and ResponseNormalizer.

    The search is made once and never retried. Polling is bounded by
    max_attempts with a fixed wait between attempts; there is no other
    cancellation, so callers needing one should wrap ``run`` themselves
    (e.g. with ``asyncio.wait_for``). The pipeline keeps no per-run state,
    so independent runs may be awaited concurrently.
    """

    def __init__(
        self,
        initiator: SearchInitiator,
        poller: ResultPoller,
        normalizer: ResponseNormalizer,
        max_attempts: int = MAX_POLL_ATTEMPTS,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.initiator = initiator
        self.poller = poller
        self.normalizer = normalizer
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: RapidApiClient,
        logger: Optional[logging.Logger] = None
    ) -> "QuotePipeline":
        """Wire up a pipeline around a shared client using configured polling limits"""
        return cls(
            initiator=SearchInitiator(client, logger=logger),
            poller=ResultPoller(client, logger=logger),
            normalizer=ResponseNormalizer(logger=logger),
            logger=logger,
            **settings.get_polling_config(),
        )

    async def run(self, arguments: Arguments, airports: AirportLookup) -> Quote:
        """
        Find quotes for the given arguments.

        Raises:
            QuotesIncompleteError: if the provider is still pending after the last poll
            QuoteError: any search, poll or normalization failure, unchanged
        """
        state = PipelineState.SEARCHING
        try:
            session_key = await self.initiator.start_search(arguments)

            state = self._transition(state, PipelineState.POLLING)
            response = await self._poll_until_complete(session_key, arguments)

            state = self._transition(state, PipelineState.COMPLETE)
            return self.normalizer.normalize(response, airports)
        except QuotesIncompleteError:
            self._transition(state, PipelineState.EXHAUSTED)
            raise
        except Exception:
            self._transition(state, PipelineState.ERROR)
            raise

    async def _poll_until_complete(self, session_key: str, arguments: Arguments) -> SkyScannerResponse:
        for attempt in range(1, self.max_attempts + 1):
            self.logger.debug(f"Poll {attempt} of {self.max_attempts}...")
            response = await self.poller.poll_for_quotes(session_key, arguments.api_host, arguments.api_key)

            self.logger.debug(
                f"Polled for quotes, status is {response.status}, found {len(response.itineraries)} itineraries"
            )

            if response.is_complete:
                self.logger.debug("Quotes are complete...")
                return response

            if attempt < self.max_attempts:
                await asyncio.sleep(self.poll_interval)

        raise QuotesIncompleteError(response.status, self.max_attempts)

    def _transition(self, current: PipelineState, target: PipelineState) -> PipelineState:
        self.logger.debug(f"Quote pipeline {current.value} -> {target.value}")
        return target
