from travel_resolver.llm.fallback import GenerativeFallbackEngine, build_fallback_engine

__all__ = ["GenerativeFallbackEngine", "build_fallback_engine"]
