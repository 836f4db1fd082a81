from typing import List

from pydantic import Field

from travel_resolver.resolvers.base import Resolver
from travel_resolver.types import SeatOption

ROWS = 5
SEATS_PER_ROW = 6
MAX_SIMULATED_SEAT_PRICE = 99


class SimulatedSeatOption(SeatOption):
    price_in_usd: float = Field(
        ge=0, lt=MAX_SIMULATED_SEAT_PRICE, alias="priceInUSD",
        description=f"Seat price in US dollars, less than ${MAX_SIMULATED_SEAT_PRICE}",
    )


class SeatMapResolver(Resolver):
    name = "seat_map"

    async def __call__(self, flight_number: str) -> List[SeatOption]:
        flight_number = flight_number.replace(" ", "").upper()
        seat_count = ROWS * SEATS_PER_ROW

        async def fallback() -> List[SeatOption]:
            seats = await self.engine.generate(
                f"Simulate available seats for flight number {flight_number}, "
                f"{SEATS_PER_ROW} seats on each row and {ROWS} rows in total, "
                f"adjust pricing based on location of seat",
                SimulatedSeatOption,
                "array",
                min_items=seat_count,
                max_items=seat_count,
                unique_by="seat_number",
            )
            return [SeatOption.model_validate(s.model_dump()) for s in seats]

        # the seat map endpoint is keyed by flight order; the flight number stands in for it
        return await self._resolve(
            lambda provider: provider.fetch_seat_map(flight_number),
            fallback,
        )
