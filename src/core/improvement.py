"""Personalised improvement plan derived from an AnalysisBundle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .models import AnalysisBundle

_TIPS: Dict[str, Dict[str, str]] = {
    "characterSpacing": {
        "low": "Practice maintaining consistent spacing between letters. Use lined paper with grid markings to guide your spacing.",
        "medium": "Your character spacing is improving! Continue practicing with consistent letter widths and pay attention to kerning pairs.",
        "high": "Excellent spacing! To perfect it further, focus on problematic letter combinations like 'rn' vs 'm'.",
    },
    "lineConsistency": {
        "low": "Use lined paper and practice writing in a straight line. Try to keep your text from slanting upward or downward.",
        "medium": "Your line consistency is getting better. Try placing a ruler or straight edge below each line as you write to maintain straightness.",
        "high": "Great line consistency! For perfection, practice writing on unlined paper while maintaining the same baseline.",
    },
    "characterFormation": {
        "low": "Practice drawing each letter slowly and deliberately. Study exemplars of each letter and try to match their form.",
        "medium": "Your letter formations are developing well. Focus on consistency in loops, ascenders, and descenders.",
        "high": "Excellent character formation! To perfect it, focus on the subtle details like serifs and letter terminations.",
    },
    "pressure": {
        "low": "Try to maintain even pressure throughout your writing. Practice with different pen types to find what works best for your style.",
        "medium": "Your pressure consistency is improving. Practice transitioning between thin and thick strokes if using a pressure-sensitive pen.",
        "high": "Great pressure control! To perfect it, practice calligraphic techniques that require varied pressure.",
    },
    "slant": {
        "low": "Choose a slant angle (forward, vertical, or backward) and practice maintaining it consistently across all letters.",
        "medium": "Your slant consistency is improving. Draw slant lines on your practice paper as guides.",
        "high": "Excellent slant consistency! Try varying your slant intentionally to develop different writing styles.",
    },
}

DAILY_ROUTINE = (
    "Warm up with basic strokes (5 minutes): Practice straight lines, curves, and loops.",
    "Letter formation (10 minutes): Focus on the letters identified as needing improvement in the details.",
    "Word practice (5 minutes): Write common words that include your challenging letters.",
    "Sentence practice (5 minutes): Write a sentence containing all letters of the alphabet.",
)

PRIORITY_COUNT = 2


@dataclass(frozen=True)
class PlanArea:
    name: str
    key: str
    score: int

    @property
    def level(self) -> str:
        return improvement_level(self.score)

    @property
    def status(self) -> str:
        return "Needs Attention" if self.score < 50 else "Improving"

    @property
    def tip(self) -> str:
        return improvement_tip(self.key, self.score)

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "key": self.key,
            "score": self.score,
            "level": self.level,
            "status": self.status,
            "tip": self.tip,
        }


@dataclass(frozen=True)
class ImprovementPlan:
    areas: List[PlanArea]
    daily_routine: tuple = DAILY_ROUTINE
    priority: List[PlanArea] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "priorityAreas": [a.to_dict() for a in self.priority],
            "areas": [a.to_dict() for a in self.areas],
            "dailyRoutine": list(self.daily_routine),
        }


def improvement_level(score: float) -> str:
    if score < 60:
        return "low"
    if score < 80:
        return "medium"
    return "high"


def improvement_tip(key: str, score: float) -> str:
    """Tip text for a plan category; KeyError for unknown keys."""
    return _TIPS[key][improvement_level(score)]


def build_plan(bundle: AnalysisBundle) -> ImprovementPlan:
    """Rank the five plan categories, weakest first; the first two are priorities."""
    areas = [
        PlanArea("Character Spacing", "characterSpacing", bundle.spacing_analysis.letter_spacing),
        PlanArea("Line Consistency", "lineConsistency", bundle.baseline_analysis.consistency),
        PlanArea(
            "Character Formation",
            "characterFormation",
            bundle.formation_analysis.ascenders.consistency,
        ),
        PlanArea("Pressure Consistency", "pressure", bundle.pressure_analysis.consistency),
        PlanArea("Writing Slant", "slant", bundle.baseline_analysis.angle),
    ]
    # sorted() is stable: ties keep the order above
    areas = sorted(areas, key=lambda a: a.score)
    return ImprovementPlan(areas=areas, priority=areas[:PRIORITY_COUNT])
