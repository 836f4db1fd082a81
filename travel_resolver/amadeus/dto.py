"""Validated shapes of the Amadeus responses we consume.

Only the fields the mapping needs are declared; everything else in the
payload is ignored. A payload that does not fit raises
``pydantic.ValidationError`` here, at the boundary, instead of surfacing as
missing values further down.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class AmadeusModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Envelope(AmadeusModel, Generic[T]):
    data: List[T] = Field(default_factory=list)


# GET /v2/schedule/flights

class SchedulePoint(AmadeusModel):
    iata_code: str
    at: str
    terminal: Optional[str] = None
    gate: Optional[str] = None


class Distance(AmadeusModel):
    value: Optional[float] = None
    unit: Optional[str] = None


class ScheduleRecord(AmadeusModel):
    departure: SchedulePoint
    arrival: SchedulePoint
    distance: Optional[Distance] = None


# GET /v2/shopping/flight-offers

class SegmentPoint(AmadeusModel):
    iata_code: str
    at: str


class Segment(AmadeusModel):
    departure: SegmentPoint
    arrival: SegmentPoint
    number: str
    carrier_code: Optional[str] = None


class Itinerary(AmadeusModel):
    segments: List[Segment] = Field(min_length=1)
    duration: Optional[str] = None


class OfferPrice(AmadeusModel):
    total: str
    currency: Optional[str] = None


class FlightOffer(AmadeusModel):
    id: Optional[str] = None
    validating_airline_codes: List[str] = Field(min_length=1)
    itineraries: List[Itinerary] = Field(min_length=1)
    price: OfferPrice


# GET /v1/shopping/seatmaps

class SeatPrice(AmadeusModel):
    total: str


class TravelerPricing(AmadeusModel):
    # the sandbox reports seatAvailabilityStatus, older payloads use status
    status: str = Field(validation_alias=AliasChoices("status", "seatAvailabilityStatus"))
    price: Optional[SeatPrice] = None


class Seat(AmadeusModel):
    number: str
    traveler_pricing: List[TravelerPricing] = Field(min_length=1)


class Deck(AmadeusModel):
    seats: List[Seat] = Field(default_factory=list)


class SeatMap(AmadeusModel):
    decks: List[Deck] = Field(default_factory=list)


ScheduleResponse = Envelope[ScheduleRecord]
OffersResponse = Envelope[FlightOffer]
SeatMapResponse = Envelope[SeatMap]
