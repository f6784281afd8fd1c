"""analyzer.pipeline

One analysis request end to end: ingest the sample (and comparison image),
resolve the comparison font, run the simulated engine, then derive the
improvement plan and the record payload for the history store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.analysis import COMPARISON_TYPES, analyze_handwriting
from core.fonts import comparison_target, get_font
from core.improvement import ImprovementPlan, build_plan
from core.models import AnalysisBundle
from core.records import AnalysisRecord, build_record
from core.scoring import technical_score
from file_handler import FileHandler
from settings import get_font_preference, get_upload_dir

logger = logging.getLogger(__name__)


@dataclass
class AnalysisRun:
    sample: Dict[str, Any]
    comparison: Optional[Dict[str, Any]]
    comparison_type: str
    font_key: Optional[str]
    bundle: AnalysisBundle
    plan: ImprovementPlan
    record: AnalysisRecord

    @property
    def overall_score(self) -> int:
        return technical_score(self.bundle)

    def to_dict(self) -> Dict[str, Any]:
        out = self.record.to_dict()
        out["improvement_plan"] = self.plan.to_dict()
        return out


def run_analysis(
    sample: str,
    comparison_type: str = "font",
    font: Optional[str] = None,
    comparison: Optional[str] = None,
    file_handler: Optional[FileHandler] = None,
    user_id: Optional[str] = None,
) -> AnalysisRun:
    """Analyze one handwriting sample.

    sample/comparison are local image paths or http(s) URLs. For font
    comparisons, font defaults to the saved preference. Raises ValueError
    for bad input (unknown type or font, missing comparison image, files
    that are not images).
    """
    if comparison_type not in COMPARISON_TYPES:
        raise ValueError(
            f"Invalid comparison type '{comparison_type}'; expected one of {COMPARISON_TYPES}"
        )
    if comparison_type == "image" and not comparison:
        raise ValueError("Image comparison needs a comparison image.")

    fh = file_handler or FileHandler(get_upload_dir())

    sample_meta = fh.handle_input(sample)
    logger.info("Sample ingested: %s", sample_meta.get("filename"))

    comparison_meta = None
    font_key = None
    if comparison_type == "image":
        comparison_meta = fh.handle_input(comparison)
        logger.info("Comparison ingested: %s", comparison_meta.get("filename"))
    else:
        font_key = get_font(font or get_font_preference()).key

    bundle = analyze_handwriting(
        sample_meta["sample_ref"],
        comparison_type,
        comparison_ref=comparison_meta["sample_ref"] if comparison_meta else None,
        font_ref=font_key,
    )
    plan = build_plan(bundle)
    record = build_record(
        bundle,
        image_url=sample_meta["sample_ref"],
        comparison_type=comparison_type,
        comparison_target=comparison_target(comparison_type, font_key or ""),
        user_id=user_id,
    )
    logger.info(
        "Analysis %s finished: score=%d target=%s",
        record.id,
        record.similarity_score,
        record.comparison_target,
    )
    return AnalysisRun(
        sample=sample_meta,
        comparison=comparison_meta,
        comparison_type=comparison_type,
        font_key=font_key,
        bundle=bundle,
        plan=plan,
        record=record,
    )
