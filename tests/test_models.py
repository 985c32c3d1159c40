"""Tests for the verification models."""

import pytest
from pydantic import ValidationError

from trust.models import ProbeOutcome, ScoreBreakdown, VerificationRequest


def test_request_rejects_invalid_url():
    with pytest.raises(ValidationError):
        VerificationRequest(endpoint_url="not a url")


def test_request_rejects_empty_url():
    with pytest.raises(ValidationError):
        VerificationRequest(endpoint_url="")


def test_request_accepts_original_field_names():
    request = VerificationRequest(
        endpoint_url="https://data.example.com/prices",
        test_query={"symbols": ["bitcoin"]},
        endpoint_type="crypto-price",
        comparison_sources=["pulseapi"],
    )
    assert request.test_payload == {"symbols": ["bitcoin"]}
    assert request.comparison_sources == frozenset({"pulseapi"})
    assert request.url.startswith("https://data.example.com")


def test_request_is_immutable():
    request = VerificationRequest(endpoint_url="https://data.example.com/prices")
    with pytest.raises(ValidationError):
        request.endpoint_type = "price"


def test_breakdown_fields_are_bounded():
    with pytest.raises(ValidationError):
        ScoreBreakdown(accuracy=101, latency=50, reliability=50)
    with pytest.raises(ValidationError):
        ScoreBreakdown(accuracy=50, latency=-1, reliability=50)


def test_probe_outcome_unreachable_only_without_status():
    assert ProbeOutcome(latency_ms=10, error_message="down").unreachable is True
    assert ProbeOutcome(latency_ms=10, status_code=500, error_message="HTTP 500").unreachable is False
    assert ProbeOutcome(latency_ms=10, status_code=200, succeeded=True).unreachable is False
