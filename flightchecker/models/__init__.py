# Pydantic models for requests, provider documents and normalized quotes

from .requests import Arguments, QuoteRequest
from .responses import ErrorResponse
from .quotes import Airport, Direction, Flight, FlightNumber, Itinerary, Journey, Quote
from .skyscanner import QUOTES_COMPLETE_STATUS, SkyScannerResponse

__all__ = [
    "Arguments",
    "QuoteRequest",
    "ErrorResponse",
    "Airport",
    "Direction",
    "Flight",
    "FlightNumber",
    "Itinerary",
    "Journey",
    "Quote",
    "QUOTES_COMPLETE_STATUS",
    "SkyScannerResponse"
]
