"""Amadeus-backed provider adapter.

Every operation returns ``Success`` with canonical entities or ``Failure``
carrying a ``ProviderNotConfigured`` / ``ProviderRequestFailed``. The adapter
never falls back and never retries; that is the resolvers' decision.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

import httpx

from travel_resolver.amadeus.client import AmadeusClient
from travel_resolver.amadeus.dto import OffersResponse, ScheduleResponse, SeatMapResponse
from travel_resolver.amadeus.transform import (
    flight_status_from_schedule,
    search_results_from_offers,
    seat_options_from_seatmap,
)
from travel_resolver.config import Settings
from travel_resolver.errors import ProviderNotConfigured, ProviderRequestFailed
from travel_resolver.obs.logger import log_event
from travel_resolver.obs.metrics import inc_counter
from travel_resolver.result import Failure, ProviderResult, Success
from travel_resolver.types import FlightSearchResult, FlightStatus, SeatOption

T = TypeVar("T")


class ProviderAdapter:
    def __init__(self, client: Optional[AmadeusClient]):
        self.client = client

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def fetch_flight_status(self, carrier_code: str, flight_number: str,
                                  date: str) -> ProviderResult[FlightStatus]:
        def build(payload: Dict[str, Any]) -> FlightStatus:
            response = ScheduleResponse.model_validate(payload)
            if not response.data:
                raise ProviderRequestFailed(
                    ProviderRequestFailed.EMPTY,
                    f"no schedule for {carrier_code}{flight_number} on {date}",
                )
            return flight_status_from_schedule(f"{carrier_code}{flight_number}", response.data[0])

        return await self._call(
            "flight_status",
            lambda: self.client.get_flight_schedule(carrier_code, flight_number, date),
            build,
        )

    async def search_flights(self, origin: str, destination: str, departure_date: str,
                             max_results: int = 4) -> ProviderResult[List[FlightSearchResult]]:
        def build(payload: Dict[str, Any]) -> List[FlightSearchResult]:
            response = OffersResponse.model_validate(payload)
            return search_results_from_offers(response.data, max_results)

        return await self._call(
            "flight_search",
            lambda: self.client.search_flight_offers(
                origin, destination, departure_date, adults=1, max_results=max_results,
            ),
            build,
        )

    async def fetch_seat_map(self, flight_order_id: str) -> ProviderResult[List[SeatOption]]:
        def build(payload: Dict[str, Any]) -> List[SeatOption]:
            response = SeatMapResponse.model_validate(payload)
            if not response.data or not response.data[0].decks:
                raise ProviderRequestFailed(
                    ProviderRequestFailed.EMPTY, f"no seat map deck for {flight_order_id}",
                )
            return seat_options_from_seatmap(response.data[0])

        return await self._call(
            "seat_map",
            lambda: self.client.get_seatmaps(flight_order_id),
            build,
        )

    async def _call(self, operation: str,
                    fetch: Callable[[], Awaitable[Dict[str, Any]]],
                    build: Callable[[Dict[str, Any]], T]) -> ProviderResult[T]:
        if self.client is None:
            return Failure(ProviderNotConfigured())

        try:
            payload = await fetch()
            return Success(build(payload))
        except ProviderRequestFailed as e:
            error = e
        except httpx.HTTPStatusError as e:
            code = e.response.status_code
            kind = ProviderRequestFailed.AUTH if code in (401, 403) else ProviderRequestFailed.HTTP
            error = ProviderRequestFailed(kind, f"HTTP {code} from {e.request.url.path}", cause=e)
        except httpx.RequestError as e:
            error = ProviderRequestFailed(ProviderRequestFailed.NETWORK, f"{type(e).__name__}: {e}", cause=e)
        except (KeyError, TypeError, ValueError) as e:
            # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
            error = ProviderRequestFailed(ProviderRequestFailed.MALFORMED, f"{type(e).__name__}: {e}", cause=e)

        inc_counter("provider_failures_total", {"operation": operation, "kind": error.kind})
        log_event(
            "provider_failed",
            level="WARNING",
            operation=operation,
            kind=error.kind,
            error=str(error),
        )
        return Failure(error)


def build_provider_adapter(settings: Settings,
                           transport: Optional[httpx.AsyncBaseTransport] = None) -> ProviderAdapter:
    """Construct the process-wide adapter; without both credentials it stays unconfigured."""
    if not settings.amadeus_configured:
        return ProviderAdapter(None)
    return ProviderAdapter(AmadeusClient(
        client_id=settings.AMADEUS_CLIENT_ID,
        client_secret=settings.AMADEUS_CLIENT_SECRET,
        base_url=settings.amadeus_base_url,
        timeout_seconds=settings.AMADEUS_TIMEOUT_SECONDS,
        transport=transport,
    ))
