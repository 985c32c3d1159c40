"""
Score curves and the trust tables.

Every function here is pure: raw measurements in, a number or a label out.
The piecewise curves share one shape: five bands, the best band pinned to
[95, 100] and the worst decaying towards 0.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from .models import Grade, Recommendation

ACCURACY_WEIGHT = 0.4
LATENCY_WEIGHT = 0.3
RELIABILITY_WEIGHT = 0.3

GRADE_THRESHOLDS: Sequence[Tuple[float, Grade]] = (
    (95, "A+"),
    (90, "A"),
    (85, "A-"),
    (80, "B+"),
    (75, "B"),
    (70, "B-"),
    (65, "C+"),
    (60, "C"),
    (55, "C-"),
    (50, "D"),
)
GRADES: Tuple[Grade, ...] = ("F",) + tuple(grade for _, grade in reversed(GRADE_THRESHOLDS))

RECOMMENDATION_THRESHOLDS: Sequence[Tuple[float, Recommendation]] = (
    (80, "TRUSTED"),
    (60, "CAUTION"),
)

BADGE_THRESHOLDS: Sequence[Tuple[float, str]] = (
    (98, "platinum"),
    (95, "gold"),
    (90, "silver"),
    (80, "bronze"),
    (70, "basic"),
    (60, "caution"),
)
NOT_RECOMMENDED_BADGE = "not recommended"
FAILED_BADGE = "failed verification"


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def latency_score(latency_ms: float) -> float:
    """Map response time to 0-100; faster is better."""

    latency_ms = max(latency_ms, 0)
    if latency_ms < 200:
        return min(100.0, 95 + (200 - latency_ms) / 40)
    if latency_ms < 500:
        return 85 + ((500 - latency_ms) / 300) * 10
    if latency_ms < 1000:
        return 70 + ((1000 - latency_ms) / 500) * 15
    if latency_ms < 3000:
        return 50 + ((3000 - latency_ms) / 2000) * 20
    return max(0.0, 50 - ((latency_ms - 3000) / 2000) * 10)


def reliability_score(status_code: int, succeeded: bool) -> float:
    if succeeded and status_code == 200:
        return 100.0
    if succeeded and status_code < 300:
        return 95.0
    if status_code == 429:
        return 60.0
    if 400 <= status_code < 500:
        return 30.0
    if status_code >= 500:
        return 10.0
    # Unknown outcome: neutral middle value.
    return 50.0


def deviation_score(avg_deviation: float) -> float:
    """Map an average relative price deviation (0.02 == 2%) to 0-100."""

    avg_deviation = abs(avg_deviation)
    if avg_deviation < 0.01:
        return min(100.0, 95 + (0.01 - avg_deviation) * 500)
    if avg_deviation < 0.03:
        return 85 + ((0.03 - avg_deviation) / 0.02) * 10
    if avg_deviation < 0.05:
        return 70 + ((0.05 - avg_deviation) / 0.02) * 15
    if avg_deviation < 0.1:
        return 50 + ((0.1 - avg_deviation) / 0.05) * 20
    return max(0.0, 50 - ((avg_deviation - 0.1) / 0.1) * 50)


def overall_trust_score(accuracy: float, latency: float, reliability: float) -> float:
    score = accuracy * ACCURACY_WEIGHT + latency * LATENCY_WEIGHT + reliability * RELIABILITY_WEIGHT
    return round(clamp(score), 1)


def grade_for(score: float) -> Grade:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def recommendation_for(score: float) -> Recommendation:
    for threshold, recommendation in RECOMMENDATION_THRESHOLDS:
        if score >= threshold:
            return recommendation
    return "AVOID"


def badge_for(score: float) -> str:
    for threshold, badge in BADGE_THRESHOLDS:
        if score >= threshold:
            return badge
    return NOT_RECOMMENDED_BADGE
