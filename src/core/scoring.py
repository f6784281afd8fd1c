"""Score helpers for handwriting analysis.

Provides generate_score(base, variance, seed) -> int, the seed derivation
used by core.analysis, and the small summaries shown next to each group
(technical score, group averages, score bands).

generate_score is a placeholder: it looks only at a numeric seed built from
input string lengths, never at image content. Stored analyses and the golden
tests pin the integers it produces.
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from .models import AnalysisBundle

# (group attribute, metric key) pairs averaged into the technical score
_TECHNICAL_FIELDS = (
    ("stroke_analysis", "quality"),
    ("grip_analysis", "control"),
    ("baseline_analysis", "stability"),
    ("spacing_analysis", "letterSpacing"),
    ("pressure_analysis", "consistency"),
)


def score_seed(
    handwriting_ref: str,
    comparison_ref: Optional[str] = None,
    font_ref: Optional[str] = None,
) -> int:
    """Sum of the reference lengths; missing refs count as zero."""
    return len(handwriting_ref) + len(comparison_ref or "") + len(font_ref or "")


def generate_score(base: float, variance: float, seed: int) -> int:
    """Return ``clamp(floor(base + (sin(seed) * 10000 mod variance)), 0, 100)``.

    ``mod`` keeps the sign of the dividend (math.fmod), so negative sines
    pull the score below ``base``.
    """
    pseudo_random = math.sin(seed) * 10000
    return min(100, max(0, math.floor(base + math.fmod(pseudo_random, variance))))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def technical_score(bundle: AnalysisBundle) -> int:
    """Mean of the five headline metrics, rounded half-up."""
    values = [getattr(bundle, group).metrics()[key] for group, key in _TECHNICAL_FIELDS]
    return round_half_up(sum(values) / len(values))


def group_average(metrics: Dict[str, int]) -> int:
    values = list(metrics.values())
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def group_label(average: float) -> str:
    if average >= 80:
        return "Strong"
    if average >= 60:
        return "Average"
    return "Needs Work"


def score_band(score: float) -> str:
    """'high' / 'medium' / 'low' buckets used to colour scores."""
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"
