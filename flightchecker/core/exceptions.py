"""
Exceptions raised by the quote acquisition and normalization pipeline.

Every exception carries an ErrorCode so the error handler can map it to a
consistent error response without inspecting message text.
"""

from typing import Optional, Union

from flightchecker.core.error_handler import ErrorCode


class QuoteError(Exception):
    """Base class for all pipeline failures."""

    error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(QuoteError):
    """Connection failure or an unexpected HTTP status from the provider."""

    error_code = ErrorCode.TRANSPORT_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NoLocationError(QuoteError):
    """The search response carried no Location header."""

    error_code = ErrorCode.NO_LOCATION

    def __init__(self):
        super().__init__("No Location returned in response")


class NoSessionKeyError(QuoteError):
    """The Location header had no path separator to take a session key from."""

    error_code = ErrorCode.NO_SESSION_KEY

    def __init__(self, location: str):
        super().__init__(f"No session key found in URL: {location}")
        self.location = location


class DecodeError(QuoteError):
    """The provider returned a body that is not a valid results document."""

    error_code = ErrorCode.DECODE_ERROR


class DateParseError(QuoteError, ValueError):
    """A date or timestamp did not match its expected format."""

    error_code = ErrorCode.DATE_PARSE_ERROR


class UnknownReferenceError(QuoteError, LookupError):
    """An identifier in the provider response does not resolve."""

    error_code = ErrorCode.UNKNOWN_REFERENCE

    def __init__(self, kind: str, identifier: Union[int, str]):
        super().__init__(f"Unknown {kind} {identifier}")
        self.kind = kind
        self.identifier = identifier


class QuotesIncompleteError(QuoteError):
    """Polling ran out of attempts before the provider finished quoting."""

    error_code = ErrorCode.QUOTES_INCOMPLETE

    def __init__(self, last_status: str, attempts: int):
        super().__init__(
            f"Quotes not completed in time after {attempts} polls, status is still {last_status}"
        )
        self.last_status = last_status
        self.attempts = attempts


class UnknownAirportError(QuoteError):
    """A requested origin or destination is not in the airport directory."""

    error_code = ErrorCode.UNKNOWN_AIRPORT

    def __init__(self, role: str, code: str):
        super().__init__(f"{role} airport code {code} unknown")
        self.role = role
        self.code = code
