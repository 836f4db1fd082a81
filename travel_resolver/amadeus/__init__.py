from travel_resolver.amadeus.adapter import ProviderAdapter, build_provider_adapter
from travel_resolver.amadeus.client import AmadeusClient

__all__ = ["AmadeusClient", "ProviderAdapter", "build_provider_adapter"]
