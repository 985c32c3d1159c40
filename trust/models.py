from __future__ import annotations

from typing import Any, Dict, FrozenSet, Literal, Optional

from pydantic import AliasChoices, AnyHttpUrl, BaseModel, ConfigDict, Field

Grade = Literal["A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D", "F"]
Recommendation = Literal["TRUSTED", "CAUTION", "AVOID"]


class VerificationRequest(BaseModel):
    """An endpoint to probe plus the payload to send it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    endpoint_url: AnyHttpUrl
    test_payload: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("test_payload", "test_query"),
    )
    endpoint_type: Optional[str] = None
    comparison_sources: FrozenSet[str] = Field(default_factory=frozenset)

    @property
    def url(self) -> str:
        return str(self.endpoint_url)


class ProbeOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    latency_ms: int = Field(ge=0)
    status_code: int = Field(default=0, ge=0)
    succeeded: bool = False
    body: Any = None
    error_message: Optional[str] = None

    @property
    def unreachable(self) -> bool:
        """True when no HTTP response was ever received."""
        return not self.succeeded and self.status_code == 0


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    accuracy: float = Field(ge=0, le=100)
    latency: float = Field(ge=0, le=100)
    reliability: float = Field(ge=0, le=100)


class VerificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    breakdown: ScoreBreakdown
    overall_score: float = Field(ge=0, le=100)
    grade: Grade
    recommendation: Recommendation
    badge: str
    probe: ProbeOutcome
