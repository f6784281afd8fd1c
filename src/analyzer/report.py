"""Plain-text rendering of an AnalysisRun for the terminal."""

from __future__ import annotations

import re
from typing import Dict, List

from core.records import expiry_message, format_record_date
from core.scoring import group_average, group_label, score_band

from .pipeline import AnalysisRun

BAR_WIDTH = 20


def _label(key: str) -> str:
    # letterSpacing -> "Letter Spacing"
    return re.sub(r"([A-Z])", r" \1", key).strip().title()


def _bar(score: int) -> str:
    filled = round(BAR_WIDTH * max(0, min(100, score)) / 100)
    return "#" * filled + "." * (BAR_WIDTH - filled)


def _metric_lines(metrics: Dict[str, int], indent: str = "  ") -> List[str]:
    width = max((len(_label(k)) for k in metrics), default=0)
    return [
        f"{indent}{_label(k).ljust(width)}  [{_bar(v)}] {v:3d}%"
        for k, v in metrics.items()
    ]


def render_report(run: AnalysisRun) -> str:
    bundle = run.bundle
    rec = run.record
    out: List[str] = []

    out.append(f"Handwriting analysis {rec.id}")
    out.append(f"Compared to {rec.comparison_target}")
    out.append(f"{format_record_date(rec.created_at)} ({expiry_message(rec.created_at)})")
    out.append(f"Overall technical score: {run.overall_score}%")
    out.append("")

    for title, group in bundle.groups().items():
        metrics = group.metrics()
        avg = group_average(metrics)
        out.append(f"{title} - {avg}% {group_label(avg)}")
        out.extend(_metric_lines(metrics))
        out.extend(f"  * {d}" for d in group.details)
        out.append("")

    for title, part in (
        ("Ascenders", bundle.formation_analysis.ascenders),
        ("Descenders", bundle.formation_analysis.descenders),
    ):
        out.append(f"{title} Formation")
        out.extend(_metric_lines(part.metrics()))
        out.extend(f"  * {d}" for d in part.details)
        out.append("")

    out.append("Character Details")
    for cd in bundle.character_details:
        out.append(
            f"  '{cd.character}'  [{_bar(cd.similarity_score)}] "
            f"{cd.similarity_score:3d}% ({score_band(cd.similarity_score)})"
        )
        out.append(f"       {cd.notes}")
    out.append("")

    oa = bundle.overall_assessment
    out.append("Overall Assessment")
    out.append(f"  {oa.summary}")
    for heading, items in (
        ("Strengths", oa.strengths),
        ("Areas for Improvement", oa.areas_for_improvement),
        ("Recommended Exercises", oa.recommendations),
    ):
        if items:
            out.append(f"  {heading}:")
            out.extend(f"    - {i}" for i in items)
    out.append("")

    out.append("Improvement Plan - Priority Focus Areas")
    for area in run.plan.priority:
        out.append(f"  {area.name} ({area.score}%, {area.status})")
        out.append(f"    Tip: {area.tip}")
    out.append("  Daily Practice Routine:")
    out.extend(f"    {n}. {step}" for n, step in enumerate(run.plan.daily_routine, 1))

    return "\n".join(out) + "\n"
