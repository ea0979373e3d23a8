"""
Command line runner: quote once for the arguments in a JSON file and log the
offers found.
"""

import asyncio
import logging
import sys
from typing import List, Optional

from flightchecker.core.config import Settings, load_arguments
from flightchecker.core.exceptions import QuoteError, UnknownAirportError
from flightchecker.models.quotes import Journey, Quote
from flightchecker.models.requests import Arguments
from flightchecker.services.airport_directory import AirportDirectory
from flightchecker.services.http_client import RapidApiClient
from flightchecker.services.quote_pipeline import QuotePipeline

logger = logging.getLogger("flightchecker")


def check_airports(arguments: Arguments, airports: AirportDirectory) -> None:
    """Log the requested route, failing if either end is not a known airport."""
    origin = airports.get(arguments.origin)
    if origin is None:
        raise UnknownAirportError("Origin", arguments.origin)

    destination = airports.get(arguments.destination)
    if destination is None:
        raise UnknownAirportError("Destination", arguments.destination)

    logger.info(f"Looking for flights from {arguments.outbound_date} staying for {arguments.holiday_duration} nights")
    logger.info(f"from {origin.name} ({origin.code}) in {origin.region}, {origin.country}")
    logger.info(f"to {destination.name} ({destination.code}) in {destination.region}, {destination.country}")
    logger.info(f"for {arguments.adults} adults, {arguments.children} children, {arguments.infants} infants")


def log_journey(journey: Journey) -> None:
    minutes = int(journey.duration.total_seconds() // 60)
    logger.info(f"{journey.direction.value} journey: from {journey.start_time} to {journey.end_time} ({minutes} minutes)")
    for index, flight in enumerate(journey.flights):
        logger.info(
            f"{journey.direction.value} flight {index} is {flight.flight_number.carrier_code}"
            f"{flight.flight_number.flight_number} with {flight.flight_number.carrier_name} "
            f"from {flight.start_airport.code} at {flight.start_time} "
            f"to {flight.destination_airport.code} at {flight.destination_time}"
        )


def log_quote(quote: Quote) -> None:
    logger.info(f"Quote completed, found {len(quote.itineraries)} offers")
    for itinerary in quote.itineraries:
        logger.info(f"Flight with {itinerary.supplier_name} is {itinerary.amount / 100:.2f}")
        log_journey(itinerary.outbound_journey)
        log_journey(itinerary.inbound_journey)


async def run(arguments: Arguments, airports: AirportDirectory, settings: Settings) -> Quote:
    async with RapidApiClient(**settings.get_client_config()) as client:
        pipeline = QuotePipeline.from_settings(settings, client)
        return await pipeline.run(arguments, airports)


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = Settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logger.debug(f"Settings: {settings.mask_sensitive_data()}")

    arguments_file = argv[0] if argv else settings.ARGUMENTS_FILE
    try:
        airports = AirportDirectory.from_csv(settings.AIRPORTS_DATA_DIR)
        arguments = load_arguments(arguments_file)
        check_airports(arguments, airports)
        quote = asyncio.run(run(arguments, airports, settings))
    except (OSError, ValueError, QuoteError) as e:
        logger.error(str(e))
        return 1

    log_quote(quote)
    return 0


if __name__ == "__main__":
    sys.exit(main())
