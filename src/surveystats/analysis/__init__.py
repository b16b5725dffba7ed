"""Analysis pipeline over a table of participant responses.

Public API:
-----------
from surveystats.analysis import run_analysis, AnalysisConfig
from surveystats.analysis.reports import build_all_tables

report = run_analysis(responses_df, design, AnalysisConfig(alpha=0.05))
tables = build_all_tables(report)
"""

from surveystats.analysis.api import AnalysisReport, run_analysis, run_analysis_from_files
from surveystats.analysis.config import AnalysisConfig

__all__ = ["AnalysisReport", "AnalysisConfig", "run_analysis", "run_analysis_from_files"]
