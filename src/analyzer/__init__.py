"""Analysis requests: sample intake, engine run, reporting and the CLI."""

from .pipeline import AnalysisRun, run_analysis

__all__ = ["AnalysisRun", "run_analysis"]
