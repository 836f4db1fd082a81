"""Primary -> Fallback resolution shared by the four query resolvers."""

from typing import Awaitable, Callable, Optional, TypeVar

from travel_resolver.amadeus.adapter import ProviderAdapter
from travel_resolver.errors import ProviderNotConfigured
from travel_resolver.llm.fallback import GenerativeFallbackEngine
from travel_resolver.obs.logger import log_event
from travel_resolver.obs.metrics import inc_counter, timed
from travel_resolver.result import Failure, ProviderResult, Success

T = TypeVar("T")

PROVIDER = "provider"
FALLBACK = "fallback"


class Resolver:
    """Two states, no loop: ask the provider once, otherwise ask the engine once.

    ``provider`` may be ``None`` to mean "not configured".
    """

    name = "resolver"

    def __init__(self, provider: Optional[ProviderAdapter], engine: GenerativeFallbackEngine,
                 tz: str = "UTC"):
        self.provider = provider
        self.engine = engine
        self.tz = tz

    async def _resolve(self,
                       primary: Optional[Callable[[ProviderAdapter], Awaitable[ProviderResult[T]]]],
                       fallback: Callable[[], Awaitable[T]]) -> T:
        with timed("resolver_latency_ms", {"resolver": self.name}):
            if primary is not None:
                outcome = await self._primary(primary)
                if isinstance(outcome, Success):
                    inc_counter("resolver_source_total", {"resolver": self.name, "source": PROVIDER})
                    return outcome.value
                log_event(
                    "resolver_fallback",
                    resolver=self.name,
                    reason=outcome.kind,
                )

            value = await fallback()
            inc_counter("resolver_source_total", {"resolver": self.name, "source": FALLBACK})
            return value

    async def _primary(self, primary: Callable[[ProviderAdapter], Awaitable[ProviderResult[T]]]) -> ProviderResult[T]:
        if self.provider is None:
            return Failure(ProviderNotConfigured())
        return await primary(self.provider)

