from __future__ import annotations

from datetime import datetime, timezone
from functools import partial
from typing import Any, Dict, Optional

import httpx

from services.reference_prices import fetch_reference_prices
from utils.http_client import get_http_client
from utils.logger import get_logger
from utils.settings import get_settings

from .accuracy import PriceFetcher, accuracy_score
from .models import ProbeOutcome, ScoreBreakdown, VerificationRequest, VerificationResult
from .prober import probe_endpoint
from .scoring import (
    FAILED_BADGE,
    badge_for,
    grade_for,
    latency_score,
    overall_trust_score,
    recommendation_for,
    reliability_score,
)

logger = get_logger(__name__)


async def verify(
    request: VerificationRequest,
    client: Optional[httpx.AsyncClient] = None,
    fetch_prices: Optional[PriceFetcher] = None,
) -> VerificationResult:
    """
    Probe ``request.endpoint_url`` and grade it.

    Always returns a complete result. An unreachable endpoint is reported as a
    failed verification with every score at zero.
    """
    settings = get_settings()

    async with get_http_client(settings.probe_timeout_seconds, client=client) as http:
        probe = await probe_endpoint(request, client=http, timeout=settings.probe_timeout_seconds)
        if probe.unreachable:
            logger.info("Endpoint %s unreachable: %s", request.url, probe.error_message)
            return failed_verification(probe)

        fetcher = fetch_prices or partial(fetch_reference_prices, client=http)
        accuracy = await accuracy_score(request, probe.body, fetcher, settings=settings)

    breakdown = ScoreBreakdown(
        accuracy=accuracy,
        latency=latency_score(probe.latency_ms),
        reliability=reliability_score(probe.status_code, probe.succeeded),
    )
    result = compose_result(breakdown, probe)
    logger.info(
        "Verified %s: score=%s grade=%s recommendation=%s",
        request.url,
        result.overall_score,
        result.grade,
        result.recommendation,
    )
    return result


def compose_result(breakdown: ScoreBreakdown, probe: ProbeOutcome) -> VerificationResult:
    if probe.unreachable:
        return failed_verification(probe)

    score = overall_trust_score(breakdown.accuracy, breakdown.latency, breakdown.reliability)
    return VerificationResult(
        breakdown=breakdown,
        overall_score=score,
        grade=grade_for(score),
        recommendation=recommendation_for(score),
        badge=badge_for(score),
        probe=probe,
    )


def failed_verification(probe: ProbeOutcome) -> VerificationResult:
    return VerificationResult(
        breakdown=ScoreBreakdown(accuracy=0, latency=0, reliability=0),
        overall_score=0.0,
        grade="F",
        recommendation="AVOID",
        badge=FAILED_BADGE,
        probe=probe,
    )


def build_verification_payload(
    request: VerificationRequest,
    result: VerificationResult,
    verified_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Shape a result the way the dispatcher returns it to callers."""

    timestamp = verified_at or datetime.now(timezone.utc)
    return {
        "endpoint": request.url,
        "verification": {
            "accuracy_score": result.breakdown.accuracy,
            "latency_score": result.breakdown.latency,
            "reliability_score": result.breakdown.reliability,
            "overall_trust_score": result.overall_score,
            "grade": result.grade,
            "recommendation": result.recommendation,
        },
        "details": {
            "endpoint_returned": result.probe.body,
            "latency_ms": result.probe.latency_ms,
            "status_code": result.probe.status_code,
            "error": result.probe.error_message,
        },
        "badge": result.badge,
        "verified_at": timestamp.isoformat(),
    }
