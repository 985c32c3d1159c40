"""
Endpoint trust verification: probe an endpoint, score it, grade it.
"""

from .models import ProbeOutcome, ScoreBreakdown, VerificationRequest, VerificationResult
from .verifier import build_verification_payload, verify

__all__ = [
    "ProbeOutcome",
    "ScoreBreakdown",
    "VerificationRequest",
    "VerificationResult",
    "build_verification_payload",
    "verify",
]
