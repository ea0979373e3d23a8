"""Fetches result pages for a Skyscanner pricing session."""

import logging
from typing import Optional

from pydantic import ValidationError

from flightchecker.core.exceptions import DecodeError, TransportError
from flightchecker.models.skyscanner import SkyScannerResponse
from flightchecker.services.http_client import RapidApiClient, log_rejected_response

PAGE_INDEX = 0
PAGE_SIZE = 10


class ResultPoller:
    """
    Calls the "Poll session results" operation once per call.

    Looping and waiting between polls is left to QuotePipeline so this stays
    a plain request/response step.
    """

    def __init__(self, client: RapidApiClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def results_url(session_key: str, api_host: str) -> str:
        # The provider expects the session key wrapped in encoded braces
        return (
            f"https://{api_host}/apiservices/pricing/uk2/v1.0/%7B{session_key}%7D"
            f"?pageIndex={PAGE_INDEX}&pageSize={PAGE_SIZE}"
        )

    async def poll_for_quotes(self, session_key: str, api_host: str, api_key: str) -> SkyScannerResponse:
        """
        Get the first page of results for a session.

        Raises:
            TransportError: on connection failure or any status other than 200
            DecodeError: if the body is not a valid results document
        """
        self.logger.debug(f"GET first page of {PAGE_SIZE} quotes...")
        response = await self.client.get(self.results_url(session_key, api_host), api_host, api_key)

        if response.status_code != 200:
            log_rejected_response(response, self.logger)
            raise TransportError(
                f"Poll request rejected with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return SkyScannerResponse.model_validate_json(response.content)
        except ValidationError as e:
            self.logger.error(f"Invalid results document for session {session_key}: {e}")
            raise DecodeError(f"Invalid results document: {e}") from e
