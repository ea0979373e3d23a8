"""
Normalizes a Skyscanner results document into a Quote.

The provider response is a small foreign-key graph: itineraries name their
legs, legs list segment ids, segments name places and carriers, and pricing
options list agent ids. Lookup tables are built once per response, then every
(itinerary, pricing option, agent) offer is resolved into a self-contained
Itinerary. The first reference that does not resolve aborts the whole
normalization, so a Quote is either fully resolved or not returned at all.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Dict, Iterator, Mapping, Optional, Protocol, Tuple, TypeVar

from flightchecker.core.exceptions import DateParseError, UnknownReferenceError
from flightchecker.models.quotes import (
    Airport,
    Direction,
    Flight,
    FlightNumber,
    Itinerary,
    Journey,
    Quote,
)
from flightchecker.models.skyscanner import (
    SkyScannerAgent,
    SkyScannerCarrier,
    SkyScannerItinerary,
    SkyScannerLeg,
    SkyScannerPlace,
    SkyScannerPricingOption,
    SkyScannerResponse,
    SkyScannerSegment,
)

TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

K = TypeVar("K")
V = TypeVar("V")


class AirportLookup(Protocol):
    """Anything that finds an airport by IATA code, returning None when absent."""

    def get(self, code: str) -> Optional[Airport]: ...


def price_to_minor_units(price: float) -> int:
    """Convert a display price to pence, e.g. 100.99 -> 10099."""
    pence = Decimal(str(price)) * 100
    return int(pence.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))


def parse_timestamp(value: str, fmt: str = TIME_FORMAT) -> datetime:
    """
    Parse value strictly against fmt.

    strptime accepts unpadded fields such as 2019-1-1, so the parsed value
    must format back to the exact input.
    """
    try:
        parsed = datetime.strptime(value, fmt)
    except (TypeError, ValueError) as e:
        raise DateParseError(f"Invalid date {value!r}, expected format {fmt}") from e

    if parsed.strftime(fmt) != value:
        raise DateParseError(f"Invalid date {value!r}, expected format {fmt}")
    return parsed


def resolve(table: Mapping[K, V], kind: str, identifier: K) -> V:
    """Look up an id, raising UnknownReferenceError naming the kind and id."""
    try:
        return table[identifier]
    except KeyError:
        raise UnknownReferenceError(kind, identifier) from None


@dataclass(frozen=True)
class LookupTables:
    """Id-keyed views of one response's record arrays. Later duplicates win."""

    agents: Dict[int, SkyScannerAgent]
    legs: Dict[str, SkyScannerLeg]
    segments: Dict[int, SkyScannerSegment]
    carriers: Dict[int, SkyScannerCarrier]
    places: Dict[int, SkyScannerPlace]

    @classmethod
    def build(cls, response: SkyScannerResponse) -> "LookupTables":
        return cls(
            agents={agent.id: agent for agent in response.agents},
            legs={leg.id: leg for leg in response.legs},
            segments={segment.id: segment for segment in response.segments},
            carriers={carrier.id: carrier for carrier in response.carriers},
            places={place.id: place for place in response.places},
        )


def iter_offers(
    response: SkyScannerResponse,
) -> Iterator[Tuple[SkyScannerItinerary, SkyScannerPricingOption, int]]:
    """Flatten itineraries into (itinerary, pricing option, agent id) triples."""
    for itinerary in response.itineraries:
        for option in itinerary.pricing_options:
            for agent_id in option.agents:
                yield itinerary, option, agent_id


class ResponseNormalizer:
    """Converts raw provider responses into normalized quotes."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def normalize(self, response: SkyScannerResponse, airports: AirportLookup) -> Quote:
        """
        Resolve every offer in a response into an Itinerary.

        Each agent listed on a pricing option becomes its own Itinerary, sharing
        the journeys of the raw itinerary but carrying that agent's name and price.

        Args:
            response: One page of provider results
            airports: Directory used to turn place codes into airports

        Returns:
            Quote: Fully resolved quote

        Raises:
            UnknownReferenceError: if any agent, leg, segment, place, carrier
                or airport code does not resolve
            DateParseError: if any leg or segment timestamp is malformed
        """
        tables = LookupTables.build(response)

        itineraries = []
        for raw_itinerary, option, agent_id in iter_offers(response):
            agent = resolve(tables.agents, "agent id", agent_id)

            outbound = self._convert_leg(tables, airports, raw_itinerary.outbound_leg_id, Direction.OUTBOUND)
            inbound = self._convert_leg(tables, airports, raw_itinerary.inbound_leg_id, Direction.INBOUND)

            itineraries.append(Itinerary(
                supplier_name=agent.name,
                supplier_type=agent.type,
                amount=price_to_minor_units(option.price),
                outbound_journey=outbound,
                inbound_journey=inbound,
            ))

        self.logger.debug(
            f"Normalized {len(response.itineraries)} provider itineraries into {len(itineraries)} offers"
        )
        return Quote(itineraries=itineraries, complete=response.is_complete)

    def _convert_leg(
        self,
        tables: LookupTables,
        airports: AirportLookup,
        leg_id: str,
        direction: Direction
    ) -> Journey:
        leg = resolve(tables.legs, "leg id", leg_id)
        start = parse_timestamp(leg.departure)
        end = parse_timestamp(leg.arrival)

        flights = [
            self._convert_segment(tables, airports, segment_id)
            for segment_id in leg.segment_ids
        ]

        return Journey(
            id=leg_id,
            direction=direction,
            flights=flights,
            duration=timedelta(minutes=leg.duration),
            start_time=start,
            end_time=end,
        )

    def _convert_segment(self, tables: LookupTables, airports: AirportLookup, segment_id: int) -> Flight:
        segment = resolve(tables.segments, "segment id", segment_id)
        start = parse_timestamp(segment.departure_date_time)
        end = parse_timestamp(segment.arrival_date_time)

        start_airport = self._convert_airport(tables, airports, segment.origin_station)
        destination_airport = self._convert_airport(tables, airports, segment.destination_station)
        carrier = resolve(tables.carriers, "carrier id", segment.carrier)

        return Flight(
            id=str(segment.id),
            flight_number=FlightNumber(
                carrier_code=carrier.code,
                carrier_name=carrier.name,
                flight_number=segment.flight_number,
            ),
            start_airport=start_airport,
            start_time=start,
            destination_airport=destination_airport,
            destination_time=end,
            duration=timedelta(minutes=segment.duration),
        )

    @staticmethod
    def _convert_airport(tables: LookupTables, airports: AirportLookup, place_id: int) -> Airport:
        place = resolve(tables.places, "place id", place_id)
        airport = airports.get(place.code)
        if airport is None:
            raise UnknownReferenceError("airport code", place.code)
        return airport
