from travel_resolver.resolvers.base import Resolver
from travel_resolver.types import FlightStatus
from travel_resolver.utils.dates import to_iso_date


def split_flight_number(flight_number: str) -> tuple[str, str]:
    """'BA123' -> ('BA', '123'). Carrier codes are always two characters."""
    normalized = flight_number.replace(" ", "").upper()
    return normalized[:2], normalized[2:]


class FlightStatusResolver(Resolver):
    name = "flight_status"

    async def __call__(self, flight_number: str, date: str) -> FlightStatus:
        carrier_code, number = split_flight_number(flight_number)
        flight_number = f"{carrier_code}{number}"
        iso_date = to_iso_date(date, self.tz) or date

        async def fallback() -> FlightStatus:
            return await self.engine.generate(
                f"Flight status for flight number {flight_number} on {iso_date}. "
                f"Use TBD for any terminal or gate that would not be known yet.",
                FlightStatus,
                "object",
            )

        status = await self._resolve(
            lambda provider: provider.fetch_flight_status(carrier_code, number, iso_date),
            fallback,
        )
        return status.model_copy(update={"flight_number": flight_number})
