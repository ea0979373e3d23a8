"""Request models for the flight quote service."""

from pydantic import BaseModel, ConfigDict, Field


class QuoteRequest(BaseModel):
    """Quote criteria: route, passengers and travel dates."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "origin": "LHR",
                "destination": "LAX",
                "adults": 2,
                "children": 2,
                "infants": 0,
                "outbound_date": "2019-11-01",
                "holiday_duration": 9
            }
        }
    )

    origin: str = Field(..., alias="Origin", description="Origin airport IATA code")
    destination: str = Field(..., alias="Destination", description="Destination airport IATA code")
    adults: int = Field(1, alias="Adults", ge=0, description="Passengers over 16")
    children: int = Field(0, alias="Children", ge=0, description="Passengers aged 1-16")
    infants: int = Field(0, alias="Infants", ge=0, description="Passengers aged 0-12 months")
    outbound_date: str = Field(..., alias="OutboundDate", description="Outbound date as YYYY-MM-DD")
    holiday_duration: int = Field(..., alias="HolidayDuration", ge=0, description="Holiday length in nights")


class Arguments(QuoteRequest):
    """Quote criteria plus the RapidAPI credentials used to run the search."""

    api_host: str = Field(..., alias="APIHost", description="RapidAPI host")
    api_key: str = Field(..., alias="APIKey", description="RapidAPI key", repr=False)

    @classmethod
    def from_request(cls, request: QuoteRequest, api_host: str, api_key: str) -> "Arguments":
        """Attach provider credentials to a quote request."""
        return cls(**request.model_dump(), api_host=api_host, api_key=api_key)
