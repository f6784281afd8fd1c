"""Simulated handwriting analysis.

analyze_handwriting() builds an AnalysisBundle from the lengths of the
sample/comparison/font references. No pixels are read: every metric comes
from core.scoring.generate_score with a fixed (base, variance) per field,
and every sentence branches on whether that metric beat its base.

Because one seed feeds every call, scores from the same run are strongly
correlated (all characters share one score, for instance). Callers must not
rely on fields being independent.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from .models import (
    AnalysisBundle,
    AscenderMetrics,
    BaselineAnalysis,
    CharacterDetail,
    DescenderMetrics,
    FormationAnalysis,
    GripAnalysis,
    OverallAssessment,
    PressureAnalysis,
    SpacingAnalysis,
    StrokeAnalysis,
)
from .scoring import generate_score, score_seed

logger = logging.getLogger(__name__)

COMPARISON_TYPES = ("font", "image")

CANDIDATE_LETTERS = (
    "a", "e", "t", "r", "s", "o", "n", "i", "l", "h",
    "g", "d", "p", "q", "b", "u", "m", "w", "y", "v",
)

# letter group -> feature named in the character notes
_LETTER_FEATURES = (
    (frozenset("aeo"), "bowl formation"),
    (frozenset("tf"), "crossbar placement"),
    (frozenset("gjypq"), "descender shape"),
    (frozenset("bdhkl"), "ascender height"),
)
_DEFAULT_FEATURE = "basic structure"

# (base, variance) per metric
CHARACTER_PARAMS = (60, 40)
STROKE_PARAMS = {
    "quality": (75, 25),
    "consistency": (70, 30),
    "fluidity": (65, 35),
    "direction": (80, 20),
}
GRIP_PARAMS = {
    "pressure": (70, 30),
    "control": (75, 25),
    "consistency": (65, 35),
}
BASELINE_PARAMS = {
    "stability": (70, 30),
    "angle": (75, 25),
    "consistency": (80, 20),
    "drift": (65, 35),
}
SPACING_PARAMS = {
    "letter_spacing": (75, 25),
    "word_spacing": (70, 30),
    "line_spacing": (65, 35),
    "margins": (80, 20),
}
PRESSURE_PARAMS = {
    "depth": (70, 30),
    "consistency": (75, 25),
    "variation": (65, 35),
    "control": (80, 20),
}
ASCENDER_PARAMS = {
    "height": (75, 25),
    "consistency": (70, 30),
    "alignment": (65, 35),
}
DESCENDER_PARAMS = {
    "depth": (70, 30),
    "consistency": (75, 25),
    "alignment": (80, 20),
}

OVERALL_ASSESSMENT = OverallAssessment(
    summary=(
        "Your handwriting shows a developing personal style with a solid "
        "foundation in letter formation and spacing."
    ),
    strengths=(
        "Consistent letter sizing across most characters",
        "Good overall legibility",
        "Steady baseline on most lines",
    ),
    areas_for_improvement=(
        "Uniformity of letter spacing within words",
        "Consistency of ascender and descender lengths",
        "Pressure control on connecting strokes",
    ),
    recommendations=(
        "Practice slow, deliberate letter drills on lined paper",
        "Use guide sheets to keep a consistent slant",
        "Warm up with basic strokes and loops before writing",
    ),
)


def character_count(seed: int) -> int:
    """Number of candidate letters reported for a seed (10..19)."""
    return 10 + math.floor(abs(math.sin(seed)) * 10)


def letter_feature(letter: str) -> str:
    for group, feature in _LETTER_FEATURES:
        if letter in group:
            return feature
    return _DEFAULT_FEATURE


def character_notes(letter: str, score: int) -> str:
    feature = letter_feature(letter)
    if score >= 80:
        return f"Your '{letter}' shows excellent {feature} and closely matches the comparison."
    if score >= 60:
        return f"Your '{letter}' shows good {feature} with minor differences from the comparison."
    return f"Your '{letter}' needs improvement in {feature} to match the comparison."


def _scores(params, seed: int) -> dict:
    return {name: generate_score(base, variance, seed) for name, (base, variance) in params.items()}


def _stroke(seed: int) -> StrokeAnalysis:
    s = _scores(STROKE_PARAMS, seed)
    details = (
        f"Stroke formation shows {'confident' if s['fluidity'] > 65 else 'hesitant'} pen movement",
        f"Line quality is {'smooth and even' if s['quality'] > 75 else 'somewhat uneven'}",
        f"Stroke direction is {'consistent' if s['direction'] > 80 else 'variable'} across letters",
    )
    return StrokeAnalysis(details=details, **s)


def _grip(seed: int) -> GripAnalysis:
    s = _scores(GRIP_PARAMS, seed)
    details = (
        f"Pen grip appears {'relaxed and stable' if s['control'] > 75 else 'tense'}",
        f"Grip pressure is {'well balanced' if s['pressure'] > 70 else 'uneven'} through each word",
        f"Hand position {'stays steady' if s['consistency'] > 65 else 'shifts'} between lines",
    )
    return GripAnalysis(details=details, **s)


def _baseline(seed: int) -> BaselineAnalysis:
    s = _scores(BASELINE_PARAMS, seed)
    details = (
        f"Writing {'stays on' if s['stability'] > 70 else 'wanders from'} the baseline",
        f"Baseline angle is {'level' if s['angle'] > 75 else 'tilted'}",
        f"Drift across the line is {'minimal' if s['drift'] > 65 else 'noticeable'}",
    )
    return BaselineAnalysis(details=details, **s)


def _spacing(seed: int) -> SpacingAnalysis:
    s = _scores(SPACING_PARAMS, seed)
    details = (
        f"Letter spacing is {'even' if s['letter_spacing'] > 75 else 'irregular'}",
        f"Word spacing is {'consistent' if s['word_spacing'] > 70 else 'inconsistent'}",
        f"Line spacing {'leaves clear room' if s['line_spacing'] > 65 else 'is crowded'} between lines",
        f"Margins are {'well maintained' if s['margins'] > 80 else 'uneven'}",
    )
    return SpacingAnalysis(details=details, **s)


def _pressure(seed: int) -> PressureAnalysis:
    s = _scores(PRESSURE_PARAMS, seed)
    details = (
        f"Stroke depth suggests {'firm' if s['depth'] > 70 else 'light'} pressure",
        f"Pen pressure is {'steady' if s['consistency'] > 75 else 'fluctuating'}",
        f"Pressure control is {'precise' if s['control'] > 80 else 'loose'} on connecting strokes",
    )
    return PressureAnalysis(details=details, **s)


def _formation(seed: int) -> FormationAnalysis:
    a = _scores(ASCENDER_PARAMS, seed)
    d = _scores(DESCENDER_PARAMS, seed)
    ascenders = AscenderMetrics(
        details=(
            f"Ascenders reach {'a consistent' if a['height'] > 75 else 'an uneven'} height",
            f"Ascender alignment is {'upright' if a['alignment'] > 65 else 'leaning'}",
        ),
        **a,
    )
    descenders = DescenderMetrics(
        details=(
            f"Descenders are {'well proportioned' if d['depth'] > 70 else 'short'}",
            f"Descender alignment is {'consistent' if d['alignment'] > 80 else 'irregular'}",
        ),
        **d,
    )
    return FormationAnalysis(ascenders=ascenders, descenders=descenders)


def _characters(seed: int) -> List[CharacterDetail]:
    base, variance = CHARACTER_PARAMS
    details = []
    for letter in CANDIDATE_LETTERS[: character_count(seed)]:
        score = generate_score(base, variance, seed)
        details.append(
            CharacterDetail(
                character=letter,
                similarity_score=score,
                notes=character_notes(letter, score),
            )
        )
    details.sort(key=lambda d: d.character)
    return details


def analyze_handwriting(
    handwriting_ref: str,
    comparison_type: str,
    comparison_ref: Optional[str] = None,
    font_ref: Optional[str] = None,
) -> AnalysisBundle:
    """Build the full AnalysisBundle for one sample.

    comparison_type ("font" or "image") is informational; whichever of
    comparison_ref / font_ref is missing simply adds nothing to the seed.
    """
    seed = score_seed(handwriting_ref, comparison_ref, font_ref)
    logger.debug("analysis seed=%d comparison_type=%s", seed, comparison_type)
    return AnalysisBundle(
        stroke_analysis=_stroke(seed),
        grip_analysis=_grip(seed),
        baseline_analysis=_baseline(seed),
        spacing_analysis=_spacing(seed),
        pressure_analysis=_pressure(seed),
        formation_analysis=_formation(seed),
        character_details=_characters(seed),
        overall_assessment=OVERALL_ASSESSMENT,
    )
