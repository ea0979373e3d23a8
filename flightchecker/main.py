"""
Flight Checker API - FastAPI Application
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator
from fastapi import FastAPI, Request, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from flightchecker.core.config import Settings, get_global_settings
from flightchecker.core.error_handler import ErrorCode, error_handler
from flightchecker.core.exceptions import QuoteError, UnknownAirportError
from flightchecker.models.quotes import Airport, Quote
from flightchecker.models.requests import Arguments, QuoteRequest
from flightchecker.models.responses import ErrorResponse
from flightchecker.services.airport_directory import AirportDirectory
from flightchecker.services.http_client import RapidApiClient
from flightchecker.services.quote_pipeline import QuotePipeline

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app_settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: load the static airport data once, shared read-only by all requests
    logger.info(f"Starting with settings {app_settings.mask_sensitive_data()}")
    try:
        app.state.airport_directory = AirportDirectory.from_csv(app_settings.AIRPORTS_DATA_DIR)
        logger.info(f"Loaded {len(app.state.airport_directory)} airports")
    except (OSError, ValueError) as e:
        logger.error(f"Unable to load airports from {app_settings.AIRPORTS_DATA_DIR}: {e}")
        app.state.airport_directory = None

    yield

    app.state.airport_directory = None


# Create FastAPI application instance
app = FastAPI(
    title=app_settings.API_TITLE,
    version=app_settings.API_VERSION,
    description="API for quoting return flights from the Skyscanner pricing service",
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_quote_settings() -> Settings:
    """Dependency to provide validated settings for running quotes."""
    try:
        return get_global_settings()
    except ValueError as e:
        logger.error(f"Quote settings invalid: {e}")
        raise HTTPException(
            status_code=500,
            detail="RapidAPI credentials not configured"
        )


def get_airport_directory(request: Request) -> AirportDirectory:
    """Dependency to provide the airport directory loaded at startup."""
    airports = getattr(request.app.state, "airport_directory", None)
    if airports is None:
        raise HTTPException(
            status_code=500,
            detail="Airport data not available"
        )
    return airports


async def get_quote_pipeline(
    settings: Settings = Depends(get_quote_settings)
) -> AsyncIterator[QuotePipeline]:
    """Dependency to provide a QuotePipeline with its own HTTP client."""
    async with RapidApiClient(**settings.get_client_config()) as client:
        yield QuotePipeline.from_settings(settings, client)


# Global exception handlers
@app.exception_handler(QuoteError)
async def quote_error_handler(request: Request, exc: QuoteError):
    """Map quote pipeline failures to their error codes."""
    error_code, message = error_handler.handle_quote_error(exc, request)
    return error_handler.create_json_response(error_code, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent error response format."""
    logger.error(f"HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    error_response = ErrorResponse(
        error=f"HTTP_{exc.status_code}",
        message=str(exc.detail),
        timestamp=datetime.now(timezone.utc)
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode='json')
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors with consistent error response format."""
    return error_handler.handle_validation_error(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions with consistent error response format."""
    logger.error(f"Unhandled Exception: {type(exc).__name__}: {str(exc)} - URL: {request.url}", exc_info=True)

    return error_handler.create_json_response(ErrorCode.INTERNAL_SERVER_ERROR)


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": app_settings.API_TITLE,
        "version": app_settings.API_VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "flightchecker"}


@app.get("/airports/{code}", response_model=Airport)
async def get_airport(code: str, airports: AirportDirectory = Depends(get_airport_directory)):
    """Look up an airport by IATA code."""
    airport = airports.get(code.upper())
    if airport is None:
        raise HTTPException(status_code=404, detail=f"Airport code {code.upper()} unknown")
    return airport


@app.post("/quotes", response_model=Quote)
async def create_quote(
    request: QuoteRequest,
    settings: Settings = Depends(get_quote_settings),
    airports: AirportDirectory = Depends(get_airport_directory),
    pipeline: QuotePipeline = Depends(get_quote_pipeline)
):
    """
    Search for return flight quotes and return them normalized.

    Args:
        request: Route, passengers and dates to quote for
        settings: Validated settings holding the RapidAPI credentials
        airports: Airport directory used to resolve provider places
        pipeline: Quote pipeline (injected dependency)

    Returns:
        Quote: Every offer found, one itinerary per supplier price

    Raises:
        QuoteError: handled by quote_error_handler
    """
    origin = airports.get(request.origin)
    if origin is None:
        raise UnknownAirportError("Origin", request.origin)

    destination = airports.get(request.destination)
    if destination is None:
        raise UnknownAirportError("Destination", request.destination)

    logger.info(
        f"Looking for flights from {request.outbound_date} staying for {request.holiday_duration} nights "
        f"from {origin.name} ({origin.code}) to {destination.name} ({destination.code}) "
        f"for {request.adults} adults, {request.children} children, {request.infants} infants"
    )

    arguments = Arguments.from_request(request, settings.RAPIDAPI_HOST, settings.RAPIDAPI_KEY)
    quote = await pipeline.run(arguments, airports)

    logger.info(f"Quote completed, found {len(quote.itineraries)} offers")
    return quote
