from __future__ import annotations

import math
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from utils.logger import get_logger
from utils.settings import Settings, get_settings

from .models import VerificationRequest
from .scoring import deviation_score

logger = get_logger(__name__)

PriceFetcher = Callable[[List[str], str], Awaitable[List[Dict[str, Any]]]]

CURRENCY_KEYS = ("vsCurrency", "vs_currency", "quote_currency")


def comparison_enabled(request: VerificationRequest, settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    return settings.is_price_endpoint(request.endpoint_type) and settings.wants_reference_comparison(
        request.comparison_sources
    )


def requested_symbols(payload: Dict[str, Any], settings: Settings) -> List[str]:
    raw = payload.get("symbols")
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        return list(settings.default_reference_symbols)
    symbols = [str(token).strip() for token in raw if str(token).strip()]
    return symbols or list(settings.default_reference_symbols)


def requested_currency(payload: Dict[str, Any], settings: Settings) -> str:
    for key in CURRENCY_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip().lower()
    return settings.default_quote_currency


def extract_price_entries(body: Any) -> Optional[List[Any]]:
    """Return the price list from a bare array or a ``{"data": [...]}`` wrapper."""

    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return body["data"]
    return None


def price_deviations(endpoint_prices: Sequence[Any], reference_prices: Sequence[Dict[str, Any]]) -> List[float]:
    """Relative deviation for every endpoint entry that matches a reference entry."""

    deviations: List[float] = []
    for entry in endpoint_prices:
        if not isinstance(entry, dict):
            continue
        key = _identity(entry.get("symbol")) or _identity(entry.get("name"))
        if not key:
            continue
        reference = next(
            (ref for ref in reference_prices if key in (_identity(ref.get("symbol")), _identity(ref.get("name")))),
            None,
        )
        if reference is None:
            continue
        endpoint_price = _nonzero_float(entry.get("price"))
        reference_price = _positive_float(reference.get("price"))
        if endpoint_price is None or reference_price is None:
            continue
        deviations.append(abs(endpoint_price - reference_price) / reference_price)
    return deviations


async def accuracy_score(
    request: VerificationRequest,
    body: Any,
    fetch_prices: PriceFetcher,
    settings: Optional[Settings] = None,
) -> float:
    """
    Score how closely the endpoint's prices agree with the reference source.

    Falls back to the baseline when cross-validation is not requested. The
    reference lookup is a bonus signal: when it raises or comes back empty the
    neutral reference-failure score is used instead.
    """
    settings = settings or get_settings()
    if not comparison_enabled(request, settings):
        return settings.accuracy_baseline_score

    endpoint_prices = extract_price_entries(body)
    if not endpoint_prices:
        return settings.accuracy_no_price_data_score

    symbols = requested_symbols(request.test_payload, settings)
    currency = requested_currency(request.test_payload, settings)
    try:
        reference_prices = await fetch_prices(symbols, currency)
    except Exception as exc:
        logger.warning("Reference price lookup failed for %s: %s", symbols, exc)
        return settings.accuracy_reference_failure_score
    if not reference_prices:
        logger.warning("Reference source returned no prices for %s", symbols)
        return settings.accuracy_reference_failure_score

    deviations = price_deviations(endpoint_prices, reference_prices)
    if not deviations:
        return settings.accuracy_unmatched_score

    average = sum(deviations) / len(deviations)
    logger.info("Average deviation %.4f over %s matched prices", average, len(deviations))
    return deviation_score(average)


def _identity(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().lower()


def _nonzero_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number == 0 or not math.isfinite(number):
        return None
    return number


def _positive_float(value: Any) -> Optional[float]:
    number = _nonzero_float(value)
    return number if number is not None and number > 0 else None
