"""
Service layer for external reference data sources.
"""

from .reference_prices import fetch_coincap_prices, fetch_coingecko_prices, fetch_reference_prices

__all__ = [
    "fetch_coincap_prices",
    "fetch_coingecko_prices",
    "fetch_reference_prices",
]
