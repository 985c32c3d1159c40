from __future__ import annotations

import asyncio
import time
from typing import Optional

import httpx

from utils.http_client import get_http_client
from utils.logger import get_logger
from utils.settings import get_settings

from .models import ProbeOutcome, VerificationRequest

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

_clock = time.perf_counter


async def probe_endpoint(
    request: VerificationRequest,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> ProbeOutcome:
    """
    POST the test payload to the endpoint once and record what happened.

    Never raises for network trouble: timeouts and transport errors come back
    as an outcome with ``status_code`` 0. There are no retries.
    """
    limit = timeout if timeout is not None else get_settings().probe_timeout_seconds
    url = request.url

    async with get_http_client(limit, client=client) as http:
        started = _clock()
        try:
            response = await asyncio.wait_for(
                http.post(url, json=request.test_payload, headers=JSON_HEADERS, timeout=limit),
                timeout=limit,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            latency_ms = _elapsed_ms(started)
            logger.warning("Probe of %s timed out after %sms", url, latency_ms)
            return ProbeOutcome(
                latency_ms=latency_ms,
                error_message=f"endpoint unreachable: timed out after {limit:g}s",
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            latency_ms = _elapsed_ms(started)
            logger.warning("Probe of %s failed: %s", url, exc)
            return ProbeOutcome(latency_ms=latency_ms, error_message=f"endpoint unreachable: {str(exc) or type(exc).__name__}")
        except Exception as exc:  # pragma: no cover - network guard
            latency_ms = _elapsed_ms(started)
            logger.exception("Unexpected probe failure for %s", url)
            return ProbeOutcome(latency_ms=latency_ms, error_message=f"endpoint unreachable: {exc}")

        latency_ms = _elapsed_ms(started)

    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = response.text

    succeeded = 200 <= status < 300
    error_message = None
    if not succeeded:
        error_message = f"HTTP {status} {response.reason_phrase}".strip()

    logger.info("Probe of %s returned HTTP %s in %sms", url, status, latency_ms)
    return ProbeOutcome(
        latency_ms=latency_ms,
        status_code=status,
        succeeded=succeeded,
        body=body,
        error_message=error_message,
    )


def _elapsed_ms(started: float) -> int:
    return max(int(round((_clock() - started) * 1000)), 0)
