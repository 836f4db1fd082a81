from typing import List, Optional

from travel_resolver.resolvers.base import Resolver
from travel_resolver.types import FlightSearchResult
from travel_resolver.utils.dates import to_iso_date, today_iso

MAX_SEARCH_RESULTS = 4


class FlightSearchResolver(Resolver):
    name = "flight_search"

    async def __call__(self, origin: str, destination: str,
                       departure_date: Optional[str] = None) -> List[FlightSearchResult]:
        origin = origin.strip().upper()
        destination = destination.strip().upper()
        if departure_date:
            departure_date = to_iso_date(departure_date, self.tz) or departure_date
        else:
            departure_date = today_iso(self.tz)

        async def fallback() -> List[FlightSearchResult]:
            return await self.engine.generate(
                f"Generate search results for flights from {origin} to {destination} "
                f"departing on {departure_date}, limit to {MAX_SEARCH_RESULTS} results",
                FlightSearchResult,
                "array",
                min_items=1,
                max_items=MAX_SEARCH_RESULTS,
            )

        return await self._resolve(
            lambda provider: provider.search_flights(
                origin, destination, departure_date, max_results=MAX_SEARCH_RESULTS,
            ),
            fallback,
        )
