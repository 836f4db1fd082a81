from travel_resolver.resolvers.base import Resolver
from travel_resolver.resolvers.flight_search import FlightSearchResolver, MAX_SEARCH_RESULTS
from travel_resolver.resolvers.flight_status import FlightStatusResolver, split_flight_number
from travel_resolver.resolvers.price import PriceResolver
from travel_resolver.resolvers.seat_map import SeatMapResolver, SimulatedSeatOption

__all__ = [
    "Resolver",
    "FlightStatusResolver",
    "FlightSearchResolver",
    "SeatMapResolver",
    "PriceResolver",
    "SimulatedSeatOption",
    "MAX_SEARCH_RESULTS",
    "split_flight_number",
]
