"""Dual-source travel data resolution: live Amadeus data with a generative fallback."""

__version__ = "0.1.0"
