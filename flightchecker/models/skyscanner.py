"""
Models for the Skyscanner "Poll session results" document.

The provider returns independent arrays of records that refer to each other
by id (itineraries -> legs -> segments -> places / carriers, pricing options
-> agents). These models mirror that flat shape; nothing here resolves the
references. Ids are only unique within one response.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

QUOTES_COMPLETE_STATUS = "UpdatesComplete"
QUOTES_PENDING_STATUS = "UpdatesPending"


class SkyScannerModel(BaseModel):
    """Base model for the provider's PascalCase JSON."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SkyScannerQuery(SkyScannerModel):
    """The search parameters as echoed back by the provider"""

    country: str = Field("", alias="Country")
    currency: str = Field("", alias="Currency")
    locale: str = Field("", alias="Locale")
    adults: int = Field(0, alias="Adults")
    children: int = Field(0, alias="Children")
    infants: int = Field(0, alias="Infants")
    origin_place: str = Field("", alias="OriginPlace")
    destination_place: str = Field("", alias="DestinationPlace")
    outbound_date: str = Field("", alias="OutboundDate")
    inbound_date: str = Field("", alias="InboundDate")
    cabin_class: str = Field("", alias="CabinClass")
    group_pricing: bool = Field(False, alias="GroupPricing")


class SkyScannerPricingOption(SkyScannerModel):
    """A price offered by one or more agents"""

    agents: List[int] = Field(default_factory=list, alias="Agents")
    quote_age_in_minutes: int = Field(0, alias="QuoteAgeInMinutes")
    price: float = Field(0.0, alias="Price")
    deeplink_url: str = Field("", alias="DeeplinkUrl")


class SkyScannerItinerary(SkyScannerModel):
    """An outbound and inbound leg pair with its pricing options"""

    outbound_leg_id: str = Field(..., alias="OutboundLegId")
    inbound_leg_id: str = Field(..., alias="InboundLegId")
    pricing_options: List[SkyScannerPricingOption] = Field(default_factory=list, alias="PricingOptions")


class SkyScannerLeg(SkyScannerModel):
    """One direction of an itinerary, e.g. "2019-10-14T12:30:00" departure"""

    id: str = Field(..., alias="Id")
    segment_ids: List[int] = Field(default_factory=list, alias="SegmentIds")
    origin_station: Optional[int] = Field(None, alias="OriginStation")
    destination_station: Optional[int] = Field(None, alias="DestinationStation")
    departure: str = Field(..., alias="Departure")
    arrival: str = Field(..., alias="Arrival")
    duration: int = Field(0, alias="Duration", description="Minutes")
    directionality: str = Field("", alias="Directionality")


class SkyScannerSegment(SkyScannerModel):
    """A single non-stop flight within a leg"""

    id: int = Field(..., alias="Id")
    origin_station: int = Field(..., alias="OriginStation")
    destination_station: int = Field(..., alias="DestinationStation")
    departure_date_time: str = Field(..., alias="DepartureDateTime")
    arrival_date_time: str = Field(..., alias="ArrivalDateTime")
    carrier: int = Field(..., alias="Carrier")
    operating_carrier: Optional[int] = Field(None, alias="OperatingCarrier")
    duration: int = Field(0, alias="Duration", description="Minutes")
    flight_number: str = Field("", alias="FlightNumber")
    directionality: str = Field("", alias="Directionality")


class SkyScannerCarrier(SkyScannerModel):
    """An airline"""

    id: int = Field(..., alias="Id")
    code: str = Field("", alias="Code")
    name: str = Field("", alias="Name")
    display_code: str = Field("", alias="DisplayCode")


class SkyScannerAgent(SkyScannerModel):
    """A seller quoting a price, e.g. an airline or a travel agent"""

    id: int = Field(..., alias="Id")
    name: str = Field("", alias="Name")
    type: str = Field("", alias="Type")
    status: str = Field("", alias="Status")


class SkyScannerPlace(SkyScannerModel):
    """An airport, city or country; airports carry their IATA code"""

    id: int = Field(..., alias="Id")
    parent_id: Optional[int] = Field(None, alias="ParentId")
    code: str = Field("", alias="Code")
    type: str = Field("", alias="Type")
    name: str = Field("", alias="Name")


class SkyScannerResponse(SkyScannerModel):
    """Top level of a poll result page"""

    session_key: str = Field("", alias="SessionKey")
    query: Optional[SkyScannerQuery] = Field(None, alias="Query")
    status: str = Field("", alias="Status")
    itineraries: List[SkyScannerItinerary] = Field(default_factory=list, alias="Itineraries")
    legs: List[SkyScannerLeg] = Field(default_factory=list, alias="Legs")
    segments: List[SkyScannerSegment] = Field(default_factory=list, alias="Segments")
    carriers: List[SkyScannerCarrier] = Field(default_factory=list, alias="Carriers")
    agents: List[SkyScannerAgent] = Field(default_factory=list, alias="Agents")
    places: List[SkyScannerPlace] = Field(default_factory=list, alias="Places")

    @property
    def is_complete(self) -> bool:
        """True once the provider has finished quoting for the session"""
        return self.status == QUOTES_COMPLETE_STATUS
