"""
Test fixtures with sample Skyscanner results documents, airports and quote
arguments.
"""

import copy
from pathlib import Path
from typing import Any, Dict

from flightchecker.models.quotes import Airport
from flightchecker.models.requests import Arguments


class ArgumentsFixtures:
    """Sample quote arguments."""

    ARGUMENTS = {
        "origin": "LHR",
        "destination": "LAX",
        "adults": 2,
        "children": 2,
        "infants": 0,
        "outbound_date": "2019-11-01",
        "holiday_duration": 9,
        "api_host": "test.com",
        "api_key": "testKey",
    }

    # The PascalCase arguments.json format
    ARGUMENTS_FILE = {
        "Origin": "LHR",
        "Destination": "LAX",
        "Adults": 2,
        "Children": 2,
        "Infants": 0,
        "OutboundDate": "2019-11-01",
        "HolidayDuration": 9,
        "APIHost": "test.com",
        "APIKey": "testKey",
    }

    EXPECTED_PAYLOAD = (
        "inboundDate=2019-11-10&cabinClass=economy&children=2&infants=0&country=GB&currency=GBP&locale=en-GB"
        "&originPlace=LHR-sky&destinationPlace=LAX-sky&outboundDate=2019-11-01&adults=2&groupPricing=true"
    )

    @classmethod
    def arguments(cls, **overrides) -> Arguments:
        return Arguments(**{**cls.ARGUMENTS, **overrides})


class AirportFixtures:
    """Airports referenced by the sample results document."""

    AIRPORTS = {
        "LHR": Airport(name="London Heathrow Airport", code="LHR", region="England", country="United Kingdom"),
        "JFK": Airport(name="John F Kennedy International Airport", code="JFK", region="New York", country="United States"),
        "LAX": Airport(name="Los Angeles International Airport", code="LAX", region="California", country="United States"),
    }

    @classmethod
    def airports(cls) -> Dict[str, Airport]:
        return dict(cls.AIRPORTS)

    COUNTRIES_CSV = """\
"id","code","name","continent","wikipedia_link","keywords"
302672,"GB","United Kingdom","EU","https://en.wikipedia.org/wiki/United_Kingdom","Great Britain"
302755,"US","United States","NA","https://en.wikipedia.org/wiki/United_States","America"
"""

    REGIONS_CSV = """\
"id","code","local_code","name","continent","iso_country","wikipedia_link","keywords"
303998,"GB-ENG","ENG","England","EU","GB","https://en.wikipedia.org/wiki/England",
306076,"US-CA","CA","California","NA","US","https://en.wikipedia.org/wiki/California",
"""

    AIRPORTS_CSV = (
        '"id","ident","type","name","latitude_deg","longitude_deg","elevation_ft","continent",'
        '"iso_country","iso_region","municipality","scheduled_service","gps_code","iata_code",'
        '"local_code","home_link","wikipedia_link","keywords"\n'
        '2434,"EGLL","large_airport","London Heathrow Airport",51.4706,-0.461941,83,"EU","GB","GB-ENG",'
        '"London","yes","EGLL","LHR",,"",""\n'
        '3484,"KLAX","large_airport","Los Angeles International Airport",33.942501,-118.407997,125,"NA","US",'
        '"US-CA","Los Angeles","yes","KLAX","LAX","LAX","",""\n'
        '6523,"00A","heliport","Total Rf Heliport",40.070801,-74.933601,11,"NA","US","US-CA","Bensalem","no",'
        '"00A",,"00A","",""\n'
    )

    @classmethod
    def write_csv(cls, data_dir: Path) -> Path:
        """Write the countries, regions and airports CSV files into data_dir."""
        (data_dir / "countries.csv").write_text(cls.COUNTRIES_CSV, encoding="utf-8")
        (data_dir / "regions.csv").write_text(cls.REGIONS_CSV, encoding="utf-8")
        (data_dir / "airports.csv").write_text(cls.AIRPORTS_CSV, encoding="utf-8")
        return data_dir


class SkyScannerFixtures:
    """
    A complete results document: one itinerary LHR -> JFK -> LAX and back
    direct, with two pricing options, the first offered by two agents.
    """

    RESPONSE: Dict[str, Any] = {
        "SessionKey": "abc",
        "Query": {
            "Country": "GB",
            "Currency": "GBP",
            "Locale": "en-GB",
            "Adults": 2,
            "Children": 2,
            "Infants": 0,
            "OriginPlace": "13554",
            "DestinationPlace": "13771",
            "OutboundDate": "2019-11-01",
            "InboundDate": "2019-11-10",
            "LocationSchema": "Default",
            "CabinClass": "Economy",
            "GroupPricing": True
        },
        "Status": "UpdatesComplete",
        "Itineraries": [
            {
                "OutboundLegId": "13554-1911011030--32132-1-13771-1911011915",
                "InboundLegId": "13771-1911101600--32132-0-13554-1911111020",
                "PricingOptions": [
                    {
                        "Agents": [4499211, 2363321],
                        "QuoteAgeInMinutes": 3,
                        "Price": 758.42,
                        "DeeplinkUrl": "https://partners.api.skyscanner.net/apiservices/deeplink/v2?_cje=abc"
                    },
                    {
                        "Agents": [1963108],
                        "QuoteAgeInMinutes": 12,
                        "Price": 100.99,
                        "DeeplinkUrl": "https://partners.api.skyscanner.net/apiservices/deeplink/v2?_cje=def"
                    }
                ],
                "BookingDetailsLink": {
                    "Uri": "/apiservices/pricing/v1.0/abc/booking",
                    "Body": "OutboundLegId=13554-1911011030--32132-1-13771-1911011915",
                    "Method": "PUT"
                }
            }
        ],
        "Legs": [
            {
                "Id": "13554-1911011030--32132-1-13771-1911011915",
                "SegmentIds": [1, 2],
                "OriginStation": 13554,
                "DestinationStation": 13771,
                "Departure": "2019-11-01T10:30:00",
                "Arrival": "2019-11-01T19:15:00",
                "Duration": 885,
                "JourneyMode": "Flight",
                "Stops": [12712],
                "Carriers": [881],
                "OperatingCarriers": [881],
                "Directionality": "Outbound",
                "FlightNumbers": [{"FlightNumber": "117", "CarrierId": 881}, {"FlightNumber": "1", "CarrierId": 881}]
            },
            {
                "Id": "13771-1911101600--32132-0-13554-1911111020",
                "SegmentIds": [3],
                "OriginStation": 13771,
                "DestinationStation": 13554,
                "Departure": "2019-11-10T16:00:00",
                "Arrival": "2019-11-11T10:20:00",
                "Duration": 620,
                "JourneyMode": "Flight",
                "Stops": [],
                "Carriers": [881],
                "OperatingCarriers": [881],
                "Directionality": "Inbound",
                "FlightNumbers": [{"FlightNumber": "282", "CarrierId": 881}]
            }
        ],
        "Segments": [
            {
                "Id": 1,
                "OriginStation": 13554,
                "DestinationStation": 12712,
                "DepartureDateTime": "2019-11-01T10:30:00",
                "ArrivalDateTime": "2019-11-01T13:35:00",
                "Carrier": 881,
                "OperatingCarrier": 881,
                "Duration": 485,
                "FlightNumber": "117",
                "JourneyMode": "Flight",
                "Directionality": "Outbound"
            },
            {
                "Id": 2,
                "OriginStation": 12712,
                "DestinationStation": 13771,
                "DepartureDateTime": "2019-11-01T16:00:00",
                "ArrivalDateTime": "2019-11-01T19:15:00",
                "Carrier": 881,
                "OperatingCarrier": 881,
                "Duration": 375,
                "FlightNumber": "1",
                "JourneyMode": "Flight",
                "Directionality": "Outbound"
            },
            {
                "Id": 3,
                "OriginStation": 13771,
                "DestinationStation": 13554,
                "DepartureDateTime": "2019-11-10T16:00:00",
                "ArrivalDateTime": "2019-11-11T10:20:00",
                "Carrier": 881,
                "OperatingCarrier": 881,
                "Duration": 620,
                "FlightNumber": "282",
                "JourneyMode": "Flight",
                "Directionality": "Inbound"
            }
        ],
        "Carriers": [
            {
                "Id": 881,
                "Code": "BA",
                "Name": "British Airways",
                "ImageUrl": "https://s1.apideeplink.com/images/airlines/BA.png",
                "DisplayCode": "BA"
            }
        ],
        "Agents": [
            {
                "Id": 4499211,
                "Name": "British Airways",
                "ImageUrl": "https://s1.apideeplink.com/images/websites/ba__.png",
                "Status": "UpdatesComplete",
                "OptimisedForMobile": True,
                "Type": "Airline"
            },
            {
                "Id": 2363321,
                "Name": "Expedia",
                "ImageUrl": "https://s1.apideeplink.com/images/websites/expu.png",
                "Status": "UpdatesComplete",
                "OptimisedForMobile": True,
                "Type": "TravelAgent"
            },
            {
                "Id": 1963108,
                "Name": "Opodo",
                "ImageUrl": "https://s1.apideeplink.com/images/websites/opuk.png",
                "Status": "UpdatesComplete",
                "OptimisedForMobile": True,
                "Type": "TravelAgent"
            }
        ],
        "Places": [
            {"Id": 13554, "ParentId": 4698, "Code": "LHR", "Type": "Airport", "Name": "London Heathrow"},
            {"Id": 12712, "ParentId": 6073, "Code": "JFK", "Type": "Airport", "Name": "New York John F. Kennedy"},
            {"Id": 13771, "ParentId": 4750, "Code": "LAX", "Type": "Airport", "Name": "Los Angeles International"},
            {"Id": 4698, "ParentId": 1, "Code": "GB", "Type": "Country", "Name": "United Kingdom"}
        ],
        "Currencies": [
            {
                "Code": "GBP",
                "Symbol": "£",
                "ThousandsSeparator": ",",
                "DecimalSeparator": ".",
                "SymbolOnLeft": True,
                "SpaceBetweenAmountAndSymbol": False,
                "RoundingCoefficient": 0,
                "DecimalDigits": 2
            }
        ]
    }

    OUTBOUND_LEG_ID = "13554-1911011030--32132-1-13771-1911011915"
    INBOUND_LEG_ID = "13771-1911101600--32132-0-13554-1911111020"

    @classmethod
    def response(cls, **overrides) -> Dict[str, Any]:
        """A deep copy of the sample document, with top-level keys overridden."""
        document = copy.deepcopy(cls.RESPONSE)
        document.update(overrides)
        return document

    @classmethod
    def pending_response(cls) -> Dict[str, Any]:
        return cls.response(Status="UpdatesPending")
