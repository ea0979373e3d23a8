"""
Starts a Skyscanner pricing search.

The provider's "Create session" operation answers 201 with a Location header
whose last path segment is the session key used to poll for results. The
URL itself cannot be fetched directly, only the key is kept.
"""

import logging
from datetime import timedelta
from typing import Optional
from urllib.parse import urlencode

from flightchecker.core.exceptions import (
    NoLocationError,
    NoSessionKeyError,
    TransportError,
)
from flightchecker.models.requests import Arguments
from flightchecker.services.http_client import RapidApiClient, log_rejected_response
from flightchecker.services.normalizer import parse_timestamp

DATE_FORMAT = "%Y-%m-%d"

# Fixed search policy
COUNTRY = "GB"
CURRENCY = "GBP"
LOCALE = "en-GB"
CABIN_CLASS = "economy"  # economy, premiumeconomy, business, first
GROUP_PRICING = True  # price for all passengers rather than one adult


class SearchInitiator:
    """Creates pricing sessions with the Skyscanner API."""

    def __init__(self, client: RapidApiClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def search_url(api_host: str) -> str:
        return f"https://{api_host}/apiservices/pricing/v1.0"

    def format_search_payload(self, arguments: Arguments) -> str:
        """
        Build the URL-encoded form body for a search.

        The return date is the outbound date plus the holiday duration in days.

        Raises:
            DateParseError: if the outbound date is not YYYY-MM-DD
        """
        outbound = parse_timestamp(arguments.outbound_date, DATE_FORMAT).date()

        inbound = outbound + timedelta(days=arguments.holiday_duration)

        return urlencode([
            ("inboundDate", inbound.strftime(DATE_FORMAT)),
            ("cabinClass", CABIN_CLASS),
            ("children", arguments.children),
            ("infants", arguments.infants),
            ("country", COUNTRY),
            ("currency", CURRENCY),
            ("locale", LOCALE),
            ("originPlace", f"{arguments.origin}-sky"),
            ("destinationPlace", f"{arguments.destination}-sky"),
            ("outboundDate", outbound.strftime(DATE_FORMAT)),
            ("adults", arguments.adults),
            ("groupPricing", str(GROUP_PRICING).lower()),
        ])

    @staticmethod
    def extract_session_key(location: Optional[str]) -> str:
        """
        Take the session key from the end of a Location header, e.g.
        ``http://partners.api.skyscanner.net/apiservices/pricing/uk2/v1.0/c1b3deed-...``

        Raises:
            NoLocationError: if there is no Location header
            NoSessionKeyError: if the header has no ``/`` separator
        """
        if not location:
            raise NoLocationError()

        _, separator, key = location.rpartition("/")
        if not separator:
            raise NoSessionKeyError(location)
        return key

    async def start_search(self, arguments: Arguments) -> str:
        """
        Call the "Create session" operation and return the session key.

        Makes exactly one request; nothing is sent if the arguments are invalid.
        """
        payload = self.format_search_payload(arguments)

        self.logger.debug("POST flight search to create session...")
        response = await self.client.post(
            self.search_url(arguments.api_host),
            arguments.api_host,
            arguments.api_key,
            headers={"content-type": "application/x-www-form-urlencoded"},
            content=payload,
        )

        if response.status_code != 201:
            log_rejected_response(response, self.logger)
            raise TransportError(
                f"Search request rejected with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        session_key = self.extract_session_key(response.headers.get("Location"))
        self.logger.info(f"The session key is {session_key}")
        return session_key
