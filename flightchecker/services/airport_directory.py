"""
Airport directory keyed by IATA code, loadable from OurAirports CSV exports
(countries.csv, regions.csv, airports.csv).
"""

import csv
import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from flightchecker.models.quotes import Airport

# Column positions in the OurAirports CSV files
COUNTRY_CODE_COLUMN = 1
COUNTRY_NAME_COLUMN = 2
REGION_CODE_COLUMN = 1
REGION_NAME_COLUMN = 3
AIRPORT_NAME_COLUMN = 3
AIRPORT_COUNTRY_COLUMN = 8
AIRPORT_REGION_COLUMN = 9
AIRPORT_IATA_COLUMN = 13


class AirportDirectory:
    """
    Read-only lookup of airports by IATA code.

    Missing codes are a normal outcome: ``get`` returns None rather than
    raising. Instances are never mutated after construction, so one directory
    can be shared by any number of concurrent quote runs.
    """

    def __init__(self, airports: Dict[str, Airport]):
        self._airports = dict(airports)

    def get(self, code: str) -> Optional[Airport]:
        """Find an airport by IATA code"""
        return self._airports.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._airports

    def __len__(self) -> int:
        return len(self._airports)

    def __iter__(self) -> Iterator[str]:
        return iter(self._airports)

    def values(self) -> List[Airport]:
        return list(self._airports.values())

    def filter(self, predicate: Callable[[Airport], bool]) -> List[Airport]:
        """Airports for which predicate is true, e.g. all airports in one country"""
        return [airport for airport in self._airports.values() if predicate(airport)]

    @classmethod
    def from_csv(
        cls,
        data_dir: Union[str, Path],
        logger: Optional[logging.Logger] = None
    ) -> "AirportDirectory":
        """
        Load all major airports (those with an IATA code) from a directory
        holding countries.csv, regions.csv and airports.csv.

        Raises:
            FileNotFoundError: if a CSV file is missing
            ValueError: if an airport refers to an unknown country or region
        """
        log = logger or logging.getLogger(__name__)
        data_dir = Path(data_dir)

        countries = _read_names(data_dir / "countries.csv", COUNTRY_CODE_COLUMN, COUNTRY_NAME_COLUMN)
        log.debug(f"Read {len(countries)} countries")

        regions = _read_names(data_dir / "regions.csv", REGION_CODE_COLUMN, REGION_NAME_COLUMN)
        log.debug(f"Read {len(regions)} regions")

        airports: Dict[str, Airport] = {}
        with open(data_dir / "airports.csv", newline="", encoding="utf-8") as csv_file:
            for line in csv.reader(csv_file):
                if len(line) <= AIRPORT_IATA_COLUMN:
                    continue
                iata_code = line[AIRPORT_IATA_COLUMN]

                # Only major airports have IATA codes; skip the header row too
                if not iata_code or iata_code == "iata_code":
                    continue

                country_code = line[AIRPORT_COUNTRY_COLUMN]
                if country_code not in countries:
                    raise ValueError(f"Countries missing name for code {country_code}")

                region_code = line[AIRPORT_REGION_COLUMN]
                if region_code not in regions:
                    raise ValueError(f"Regions missing name for code {region_code}")

                airports[iata_code] = Airport(
                    name=line[AIRPORT_NAME_COLUMN],
                    code=iata_code,
                    region=regions[region_code],
                    country=countries[country_code],
                )

        log.debug(f"Read {len(airports)} airports")
        return cls(airports)


def _read_names(filename: Path, code_column: int, name_column: int) -> Dict[str, str]:
    with open(filename, newline="", encoding="utf-8") as csv_file:
        return {
            line[code_column]: line[name_column]
            for line in csv.reader(csv_file)
            if len(line) > max(code_column, name_column)
        }
