"""Observability for the resolution layer.

Structured JSON logging, request-scoped context and in-process counters and
histograms, plus the ASGI middleware that ties them to HTTP requests.
"""

__all__ = [
    "middleware",
    "metrics",
    "logger",
    "context",
]
