"""Normalized flight quote models."""

from datetime import datetime, timedelta
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Which way a journey travels"""
    OUTBOUND = "Outbound"
    INBOUND = "Inbound"


class QuoteModel(BaseModel):
    """Base for the normalized tree; values are immutable once built."""

    model_config = ConfigDict(frozen=True)


class Airport(QuoteModel):
    """Descriptive record of an airport, keyed by IATA code."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "London Heathrow Airport",
                "code": "LHR",
                "region": "England",
                "country": "United Kingdom"
            }
        }
    )

    name: str = Field(..., description="Airport name")
    code: str = Field(..., description="IATA code")
    region: str = Field("", description="Region name")
    country: str = Field("", description="Country name")


class FlightNumber(QuoteModel):
    carrier_code: str = Field(..., description="Airline code, e.g. BA")
    carrier_name: str = Field(..., description="Airline name")
    flight_number: str = Field(..., description="Flight number, e.g. 433")


class Flight(QuoteModel):
    """One non-stop flight, resolved from a provider segment."""

    id: str = Field(..., description="Provider segment id")
    flight_number: FlightNumber
    start_airport: Airport
    start_time: datetime
    destination_airport: Airport
    destination_time: datetime
    duration: timedelta


class Journey(QuoteModel):
    """All flights in one direction of a trip, resolved from a provider leg."""

    id: str = Field(..., description="Provider leg id")
    direction: Direction
    flights: List[Flight] = Field(default_factory=list)
    duration: timedelta
    start_time: datetime
    end_time: datetime


class Itinerary(QuoteModel):
    """A purchasable offer: one supplier's price for an outbound and inbound journey."""

    supplier_name: str
    supplier_type: str
    amount: int = Field(..., description="Price in minor currency units, e.g. pence")
    outbound_journey: Journey
    inbound_journey: Journey


class Quote(QuoteModel):
    """All offers found for one search session."""

    itineraries: List[Itinerary] = Field(default_factory=list)
    complete: bool = Field(False, description="Whether the provider had finished quoting")
