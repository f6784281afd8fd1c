"""Core data models for a handwriting analysis run.

Every score is an int in 0..100. ``to_dict()`` renders the plain payload
handed to storage and report code, using the camelCase keys the stored
records have always used (``strokeAnalysis``, ``letterSpacing``, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Tuple


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class _Payload:
    """Mixin: dataclass -> camelCase dict."""

    def to_dict(self) -> Dict[str, Any]:
        return {_camel(f.name): _plain(getattr(self, f.name)) for f in fields(self)}

    def metrics(self) -> Dict[str, int]:
        """Numeric fields only, keyed like ``to_dict()``."""
        return {
            _camel(f.name): getattr(self, f.name)
            for f in fields(self)
            if isinstance(getattr(self, f.name), int)
            and not isinstance(getattr(self, f.name), bool)
        }


@dataclass(frozen=True)
class CharacterDetail(_Payload):
    character: str
    similarity_score: int
    notes: str


@dataclass(frozen=True)
class StrokeAnalysis(_Payload):
    quality: int
    consistency: int
    fluidity: int
    direction: int
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GripAnalysis(_Payload):
    pressure: int
    control: int
    consistency: int
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BaselineAnalysis(_Payload):
    stability: int
    angle: int
    consistency: int
    drift: int
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SpacingAnalysis(_Payload):
    letter_spacing: int
    word_spacing: int
    line_spacing: int
    margins: int
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PressureAnalysis(_Payload):
    depth: int
    consistency: int
    variation: int
    control: int
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AscenderMetrics(_Payload):
    height: int
    consistency: int
    alignment: int
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DescenderMetrics(_Payload):
    depth: int
    consistency: int
    alignment: int
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FormationAnalysis(_Payload):
    ascenders: AscenderMetrics
    descenders: DescenderMetrics


@dataclass(frozen=True)
class OverallAssessment(_Payload):
    summary: str
    strengths: Tuple[str, ...] = ()
    areas_for_improvement: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisBundle(_Payload):
    stroke_analysis: StrokeAnalysis
    grip_analysis: GripAnalysis
    baseline_analysis: BaselineAnalysis
    spacing_analysis: SpacingAnalysis
    pressure_analysis: PressureAnalysis
    formation_analysis: FormationAnalysis
    character_details: List[CharacterDetail] = field(default_factory=list)
    overall_assessment: OverallAssessment = field(
        default_factory=lambda: OverallAssessment(summary="")
    )

    def groups(self) -> Dict[str, _Payload]:
        """Technical groups in display order (formation excluded)."""
        return {
            "Stroke Analysis": self.stroke_analysis,
            "Grip Analysis": self.grip_analysis,
            "Baseline Analysis": self.baseline_analysis,
            "Spacing Analysis": self.spacing_analysis,
            "Pressure Analysis": self.pressure_analysis,
        }
