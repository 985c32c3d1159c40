"""Reference price lookups (CoinGecko with CoinCap fallback)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import httpx

from utils.http_client import get_http_client
from utils.logger import get_logger
from utils.settings import get_settings

logger = get_logger(__name__)

PriceEntry = Dict[str, Any]


async def fetch_reference_prices(
    symbols: Sequence[str],
    quote_currency: str = "usd",
    client: Optional[httpx.AsyncClient] = None,
    include_market_cap: bool = False,
    include_24h_change: bool = False,
) -> List[PriceEntry]:
    """
    Return current prices for ``symbols`` quoted in ``quote_currency``.

    CoinGecko is queried first; CoinCap is only consulted when CoinGecko yields
    nothing usable. An empty list means neither provider had data.
    """
    targets = [symbol.strip() for symbol in symbols if symbol and symbol.strip()]
    if not targets:
        return []
    currency = (quote_currency or "usd").lower()
    settings = get_settings()

    async with get_http_client(settings.reference_timeout_seconds, client=client) as http:
        prices = await fetch_coingecko_prices(
            http,
            targets,
            currency,
            include_market_cap=include_market_cap,
            include_24h_change=include_24h_change,
        )
        if prices:
            return prices

        logger.info("CoinGecko returned no prices for %s; falling back to CoinCap", targets)
        return await fetch_coincap_prices(http, targets)


async def fetch_coingecko_prices(
    client: httpx.AsyncClient,
    symbols: Sequence[str],
    quote_currency: str,
    include_market_cap: bool = False,
    include_24h_change: bool = False,
) -> List[PriceEntry]:
    settings = get_settings()
    params = {
        "ids": ",".join(symbol.lower() for symbol in symbols),
        "vs_currencies": quote_currency,
        "include_market_cap": str(include_market_cap).lower(),
        "include_24hr_change": str(include_24h_change).lower(),
    }
    try:
        response = await client.get(
            settings.coingecko_url("simple/price"),
            params=params,
            timeout=settings.reference_timeout_seconds,
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("CoinGecko price lookup failed for %s: %s", list(symbols), exc)
        return []

    if not isinstance(data, dict):
        return []

    prices: List[PriceEntry] = []
    now = datetime.now(timezone.utc).isoformat()
    for symbol in symbols:
        record = data.get(symbol.lower())
        if not isinstance(record, dict):
            continue
        price = _to_float(record.get(quote_currency))
        if price is None:
            continue
        prices.append(
            {
                "symbol": symbol.upper(),
                "name": symbol,
                "price": price,
                "market_cap": _to_float(record.get(f"{quote_currency}_market_cap")),
                "change_24h": _to_float(record.get(f"{quote_currency}_24h_change")),
                "last_updated": now,
            }
        )
    return prices


async def fetch_coincap_prices(client: httpx.AsyncClient, symbols: Sequence[str]) -> List[PriceEntry]:
    """CoinCap only quotes USD, one asset per request."""

    settings = get_settings()
    prices: List[PriceEntry] = []
    for symbol in symbols:
        try:
            response = await client.get(
                settings.coincap_url(f"assets/{symbol.lower()}"),
                timeout=settings.reference_timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("CoinCap lookup failed for %s: %s", symbol, exc)
            continue

        record = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(record, dict):
            continue
        price = _to_float(record.get("priceUsd"))
        if price is None:
            continue
        prices.append(
            {
                "symbol": symbol.upper(),
                "name": record.get("name") or symbol,
                "price": price,
                "market_cap": _to_float(record.get("marketCapUsd")),
                "change_24h": _to_float(record.get("changePercent24Hr")),
                "last_updated": _timestamp_to_iso(payload.get("timestamp")),
            }
        )
    return prices


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _timestamp_to_iso(value: Any) -> str:
    millis = _to_float(value)
    if millis is None:
        return datetime.now(timezone.utc).isoformat()
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).isoformat()
