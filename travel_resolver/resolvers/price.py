import json
from typing import Any, Dict, Union

from travel_resolver.obs.logger import log_event
from travel_resolver.resolvers.base import Resolver
from travel_resolver.types import ReservationDescription, ReservationPriceQuote


class PriceResolver(Resolver):
    """Reservation pricing is always estimated; the provider has no pricing path."""

    name = "reservation_price"

    async def __call__(self, reservation: Union[ReservationDescription, Dict[str, Any]]) -> ReservationPriceQuote:
        if not isinstance(reservation, ReservationDescription):
            reservation = ReservationDescription.model_validate(reservation)

        log_event(
            "price_requested",
            flight_number=reservation.flight_number,
            seats=len(reservation.seats),
            passenger_name=reservation.passenger_name,
        )

        async def fallback() -> ReservationPriceQuote:
            return await self.engine.generate(
                "Generate price for the following reservation \n\n"
                + json.dumps(reservation.to_payload(), indent=2),
                ReservationPriceQuote,
                "object",
            )

        return await self._resolve(None, fallback)
