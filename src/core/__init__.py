"""Analysis core: models, scoring, the simulated engine and its summaries."""

from .analysis import analyze_handwriting
from .models import AnalysisBundle, CharacterDetail
from .scoring import generate_score, score_seed, technical_score

__all__ = [
    "AnalysisBundle",
    "CharacterDetail",
    "analyze_handwriting",
    "generate_score",
    "score_seed",
    "technical_score",
]
