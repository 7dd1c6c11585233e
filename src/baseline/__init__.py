"""
Baseline table and evaluation against it.
"""

from baseline.table import BaselineDefinition, BaselineTable, UnknownBaselineError, build_default_table
from baseline.evaluate import (
    BaselineReport,
    Evaluation,
    FileReport,
    ReportSummary,
    build_report,
    coverage,
    evaluate,
)

__all__ = [
    "BaselineDefinition",
    "BaselineTable",
    "UnknownBaselineError",
    "build_default_table",
    "BaselineReport",
    "Evaluation",
    "FileReport",
    "ReportSummary",
    "build_report",
    "coverage",
    "evaluate",
]
