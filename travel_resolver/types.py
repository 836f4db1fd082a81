"""Canonical entities returned by every resolver, whichever source produced them.

Attributes are snake_case in Python; the wire form (JSON schema handed to the
model, ``to_payload()``) uses the camelCase names the chat layer expects.
"""

import math
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TBD = "TBD"


class CanonicalModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def _check_iso_timestamp(value: str) -> str:
    text = value.strip()
    # fromisoformat only learned about "Z" in 3.11
    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        datetime.fromisoformat(candidate)
    except ValueError as e:
        raise ValueError(f"not an ISO-8601 timestamp: {value!r}") from e
    return text


def _normalize_code(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


class FlightEndpoint(CanonicalModel):
    """Departure or arrival point as shown on a flight status card."""
    city_name: str = Field(description="Name of the city")
    airport_code: str = Field(pattern=r"^[A-Z]{3}$", description="Three-letter IATA code of the airport")
    airport_name: str = Field(description="Full name of the airport")
    timestamp: str = Field(description="ISO 8601 date and time")
    terminal: str = Field(TBD, description="Terminal, or TBD when unknown")
    gate: str = Field(TBD, description="Gate, or TBD when unknown")

    normalize_code = field_validator("airport_code", mode="before")(_normalize_code)
    check_timestamp = field_validator("timestamp")(_check_iso_timestamp)


class FlightStatus(CanonicalModel):
    flight_number: str = Field(min_length=1, description="Flight number, e.g., BA123, AA31")
    departure: FlightEndpoint
    arrival: FlightEndpoint
    total_distance_in_miles: int = Field(ge=0, description="Total flight distance in miles")

    @field_validator("total_distance_in_miles", mode="before")
    @classmethod
    def round_distance(cls, value):
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"distance is not a finite number: {value!r}")
            # half-up, not banker's rounding
            return int(math.floor(value + 0.5))
        return value


class SearchEndpoint(CanonicalModel):
    city_name: str = Field(description="Name of the city")
    airport_code: str = Field(pattern=r"^[A-Z]{3}$", description="Three-letter IATA code of the airport")
    timestamp: str = Field(description="ISO 8601 date and time")

    normalize_code = field_validator("airport_code", mode="before")(_normalize_code)
    check_timestamp = field_validator("timestamp")(_check_iso_timestamp)


class FlightSearchResult(CanonicalModel):
    id: str = Field(min_length=1, description="Unique identifier for the flight, like BA123, AA31, etc.")
    departure: SearchEndpoint
    arrival: SearchEndpoint
    airlines: List[str] = Field(description="Carrier identifiers, in order")
    price_in_usd: float = Field(ge=0, alias="priceInUSD", description="Flight price in US dollars")
    number_of_stops: int = Field(ge=0, description="Number of stops during the flight")


class SeatOption(CanonicalModel):
    seat_number: str = Field(pattern=r"^\d{1,3}[A-Z]$", description="Seat identifier, e.g., 12A, 15C")
    price_in_usd: float = Field(ge=0, alias="priceInUSD", description="Seat price in US dollars")
    is_available: bool = Field(description="Whether the seat is available for booking")

    normalize_seat = field_validator("seat_number", mode="before")(_normalize_code)


class ReservationPriceQuote(CanonicalModel):
    total_price_in_usd: float = Field(ge=0, alias="totalPriceInUSD", description="Total reservation price in US dollars")


class ReservationEndpoint(CanonicalModel):
    city_name: str
    airport_code: str
    timestamp: str
    gate: str = TBD
    terminal: str = TBD


class ReservationDescription(CanonicalModel):
    """What the passenger is about to book; input to pricing only."""
    seats: List[str] = Field(min_length=1)
    flight_number: str
    departure: ReservationEndpoint
    arrival: ReservationEndpoint
    passenger_name: str
