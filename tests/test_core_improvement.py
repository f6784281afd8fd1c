import pytest

from core.analysis import analyze_handwriting
from core.improvement import (
    DAILY_ROUTINE,
    PlanArea,
    build_plan,
    improvement_level,
    improvement_tip,
)


def test_levels():
    assert improvement_level(59) == "low"
    assert improvement_level(60) == "medium"
    assert improvement_level(79) == "medium"
    assert improvement_level(80) == "high"


def test_tip_lookup():
    assert improvement_tip("slant", 10).startswith("Choose a slant angle")
    assert improvement_tip("characterSpacing", 95).startswith("Excellent spacing!")
    with pytest.raises(KeyError):
        improvement_tip("nope", 50)


def test_plan_area_status():
    assert PlanArea("X", "pressure", 49).status == "Needs Attention"
    assert PlanArea("X", "pressure", 50).status == "Improving"


def test_build_plan_orders_weakest_first():
    bundle = analyze_handwriting("x" * 20, "font", font_ref="times")
    plan = build_plan(bundle)
    scores = [a.score for a in plan.areas]
    assert scores == sorted(scores)
    assert len(plan.areas) == 5
    assert plan.priority == plan.areas[:2]
    assert {a.key for a in plan.areas} == {
        "characterSpacing",
        "lineConsistency",
        "characterFormation",
        "pressure",
        "slant",
    }


def test_build_plan_maps_bundle_fields():
    bundle = analyze_handwriting("x" * 20, "font", font_ref="times")
    by_key = {a.key: a.score for a in build_plan(bundle).areas}
    assert by_key["characterSpacing"] == bundle.spacing_analysis.letter_spacing
    assert by_key["lineConsistency"] == bundle.baseline_analysis.consistency
    assert by_key["characterFormation"] == bundle.formation_analysis.ascenders.consistency
    assert by_key["pressure"] == bundle.pressure_analysis.consistency
    assert by_key["slant"] == bundle.baseline_analysis.angle


def test_ties_keep_declared_order():
    # seed 0: spacing 75, line 80, formation 70, pressure 75, slant 75
    plan = build_plan(analyze_handwriting("", "font"))
    assert [a.key for a in plan.areas] == [
        "characterFormation",
        "characterSpacing",
        "pressure",
        "slant",
        "lineConsistency",
    ]


def test_plan_to_dict():
    d = build_plan(analyze_handwriting("abc", "font", font_ref="arial")).to_dict()
    assert len(d["priorityAreas"]) == 2
    assert d["dailyRoutine"] == list(DAILY_ROUTINE)
    assert {"name", "key", "score", "level", "status", "tip"} <= set(d["areas"][0])
