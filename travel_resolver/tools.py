"""
LangChain tools for the conversational layer.

Each tool wraps one resolver and returns plain camelCase dictionaries, the
shape the chat UI renders. List results are wrapped as ``{"flights": [...]}``
and ``{"seats": [...]}``.
"""

from typing import Any, Dict, List, Optional

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from travel_resolver.obs.context import tool_call_var
from travel_resolver.service import TravelDataService
from travel_resolver.types import ReservationDescription


class FlightStatusArgs(BaseModel):
    flight_number: str = Field(description="Flight number, e.g., BA123, AA31")
    date: str = Field(description="Date of the flight, YYYY-MM-DD or natural language")


class FlightSearchArgs(BaseModel):
    origin: str = Field(description="Origin airport or city code, e.g., SFO")
    destination: str = Field(description="Destination airport or city code, e.g., LHR")
    departure_date: Optional[str] = Field(None, description="YYYY-MM-DD; defaults to today")


class SeatSelectionArgs(BaseModel):
    flight_number: str = Field(description="Flight number, e.g., BA123")


class ReservationPriceArgs(BaseModel):
    reservation: ReservationDescription


def create_travel_tools(service: TravelDataService) -> List[StructuredTool]:
    async def get_flight_status(flight_number: str, date: str) -> Dict[str, Any]:
        tool_call_var.set("get_flight_status")
        status = await service.flight_status(flight_number, date)
        return status.to_payload()

    async def search_flights(origin: str, destination: str,
                             departure_date: Optional[str] = None) -> Dict[str, Any]:
        tool_call_var.set("search_flights")
        flights = await service.flight_search(origin, destination, departure_date)
        return {"flights": [f.to_payload() for f in flights]}

    async def select_seats(flight_number: str) -> Dict[str, Any]:
        tool_call_var.set("select_seats")
        seats = await service.seat_map(flight_number)
        return {"seats": [s.to_payload() for s in seats]}

    async def price_reservation(reservation: ReservationDescription) -> Dict[str, Any]:
        tool_call_var.set("price_reservation")
        quote = await service.price(reservation)
        return quote.to_payload()

    return [
        StructuredTool.from_function(
            coroutine=get_flight_status,
            name="get_flight_status",
            description="Get the current status of a flight by flight number and date",
            args_schema=FlightStatusArgs,
        ),
        StructuredTool.from_function(
            coroutine=search_flights,
            name="search_flights",
            description="Search for flights between two airports, at most 4 results",
            args_schema=FlightSearchArgs,
        ),
        StructuredTool.from_function(
            coroutine=select_seats,
            name="select_seats",
            description="Show the seat map and seat prices for a flight",
            args_schema=SeatSelectionArgs,
        ),
        StructuredTool.from_function(
            coroutine=price_reservation,
            name="price_reservation",
            description="Estimate the total price of a reservation before payment",
            args_schema=ReservationPriceArgs,
        ),
    ]
