"""
Process-wide wiring of the resolution layer.

Built once at startup: one provider adapter (unconfigured when either Amadeus
credential is missing), one fallback engine, and the four resolvers sharing
both. Nothing here is mutated after construction.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
from langchain_core.language_models import BaseChatModel

from travel_resolver.amadeus.adapter import ProviderAdapter, build_provider_adapter
from travel_resolver.config import Settings, settings as default_settings
from travel_resolver.llm.fallback import GenerativeFallbackEngine, build_fallback_engine
from travel_resolver.obs.logger import log_event
from travel_resolver.resolvers import (
    FlightSearchResolver,
    FlightStatusResolver,
    PriceResolver,
    SeatMapResolver,
)


@dataclass(frozen=True)
class TravelDataService:
    provider: ProviderAdapter
    engine: GenerativeFallbackEngine
    flight_status: FlightStatusResolver
    flight_search: FlightSearchResolver
    seat_map: SeatMapResolver
    price: PriceResolver

    async def aclose(self) -> None:
        if self.provider.client is not None:
            await self.provider.client.aclose()


def create_travel_data_service(settings: Optional[Settings] = None,
                               llm: Optional[BaseChatModel] = None,
                               transport: Optional[httpx.AsyncBaseTransport] = None) -> TravelDataService:
    settings = settings or default_settings
    provider = build_provider_adapter(settings, transport=transport)
    engine = build_fallback_engine(settings, llm=llm)

    log_event(
        "service_created",
        provider_configured=provider.configured,
        amadeus_env=settings.AMADEUS_ENV,
        model=settings.OPENAI_MODEL,
    )

    return TravelDataService(
        provider=provider,
        engine=engine,
        flight_status=FlightStatusResolver(provider, engine, tz=settings.TZ),
        flight_search=FlightSearchResolver(provider, engine, tz=settings.TZ),
        seat_map=SeatMapResolver(provider, engine, tz=settings.TZ),
        price=PriceResolver(provider, engine, tz=settings.TZ),
    )
