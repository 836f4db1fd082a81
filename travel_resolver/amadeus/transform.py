import math
from typing import List

from travel_resolver.amadeus.dto import FlightOffer, ScheduleRecord, SeatMap, SchedulePoint
from travel_resolver.types import (
    TBD,
    FlightEndpoint,
    FlightSearchResult,
    FlightStatus,
    SearchEndpoint,
    SeatOption,
)

AVAILABLE = "AVAILABLE"


def parse_price(total: str) -> float:
    # Amadeus sends decimal strings, e.g. "512.30"
    value = float(total)
    if not math.isfinite(value):
        raise ValueError(f"price is not a number: {total!r}")
    return value


def _status_endpoint(point: SchedulePoint) -> FlightEndpoint:
    # schedules carry no city or airport names; the code is the best we have
    return FlightEndpoint(
        city_name=point.iata_code,
        airport_code=point.iata_code,
        airport_name=point.iata_code,
        timestamp=point.at,
        terminal=point.terminal or TBD,
        gate=point.gate or TBD,
    )


def flight_status_from_schedule(flight_number: str, record: ScheduleRecord) -> FlightStatus:
    distance = record.distance.value if record.distance and record.distance.value is not None else 0
    return FlightStatus(
        flight_number=flight_number,
        departure=_status_endpoint(record.departure),
        arrival=_status_endpoint(record.arrival),
        total_distance_in_miles=float(distance),
    )


def search_result_from_offer(offer: FlightOffer) -> FlightSearchResult:
    segments = offer.itineraries[0].segments
    first, last = segments[0], segments[-1]
    return FlightSearchResult(
        id=f"{offer.validating_airline_codes[0]}{first.number}",
        departure=SearchEndpoint(
            city_name=first.departure.iata_code,
            airport_code=first.departure.iata_code,
            timestamp=first.departure.at,
        ),
        arrival=SearchEndpoint(
            city_name=last.arrival.iata_code,
            airport_code=last.arrival.iata_code,
            timestamp=last.arrival.at,
        ),
        airlines=list(offer.validating_airline_codes),
        price_in_usd=parse_price(offer.price.total),
        number_of_stops=len(segments) - 1,
    )


def search_results_from_offers(offers: List[FlightOffer], max_results: int = 4) -> List[FlightSearchResult]:
    return [search_result_from_offer(o) for o in offers[:max_results]]


def seat_options_from_seatmap(seatmap: SeatMap) -> List[SeatOption]:
    """Flatten the first deck. Seats without a price are free to select."""
    options = []
    for seat in seatmap.decks[0].seats:
        pricing = seat.traveler_pricing[0]
        options.append(SeatOption(
            seat_number=seat.number,
            price_in_usd=parse_price(pricing.price.total) if pricing.price else 0.0,
            is_available=pricing.status == AVAILABLE,
        ))
    return options
