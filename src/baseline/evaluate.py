"""
Baseline evaluation: partition detected features into safe and risky, and
aggregate per-file results into a report.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping

from baseline.table import BaselineDefinition


@dataclass(frozen=True)
class Evaluation:
    risky: FrozenSet[str]
    safe: FrozenSet[str]

    @property
    def coverage(self) -> float:
        return coverage(len(self.safe), len(self.risky))


@dataclass
class FileReport:
    risky_features: List[str]
    safe_features: List[str]

    @property
    def has_issues(self) -> bool:
        return bool(self.risky_features)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riskyFeatures": list(self.risky_features),
            "safeFeatures": list(self.safe_features),
            "hasIssues": self.has_issues,
        }


@dataclass
class ReportSummary:
    files_scanned: int
    total_risky: int
    total_safe: int
    target_year: str

    @property
    def total_features(self) -> int:
        return self.total_risky + self.total_safe

    @property
    def coverage(self) -> float:
        return coverage(self.total_safe, self.total_risky)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filesScanned": self.files_scanned,
            "totalRisky": self.total_risky,
            "totalSafe": self.total_safe,
            "targetYear": self.target_year,
            "coverage": round(self.coverage, 2),
        }


@dataclass
class BaselineReport:
    summary: ReportSummary
    files: Dict[str, FileReport] = field(default_factory=dict)

    def risky_features(self) -> FrozenSet[str]:
        """Union of risky features across all files."""
        risky = set()
        for file_report in self.files.values():
            risky.update(file_report.risky_features)
        return frozenset(risky)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "files": {path: report.to_dict() for path, report in self.files.items()},
        }


def evaluate(detected: Iterable[str], definition: BaselineDefinition) -> Evaluation:
    """risky = detected - supported; safe = detected & supported."""
    detected_set = frozenset(detected)
    safe = detected_set & definition.supported
    return Evaluation(risky=detected_set - safe, safe=safe)


def coverage(safe_count: int, risky_count: int) -> float:
    """Percentage of detected features that are safe; 100 when nothing was detected."""
    total = safe_count + risky_count
    if total == 0:
        return 100.0
    return 100.0 * safe_count / total


def build_report(scan_result: Mapping[str, Iterable[str]], definition: BaselineDefinition) -> BaselineReport:
    """Evaluate every scanned file against one baseline."""
    files: Dict[str, FileReport] = {}
    total_risky = 0
    total_safe = 0

    for path, features in scan_result.items():
        result = evaluate(features, definition)
        files[path] = FileReport(
            risky_features=sorted(result.risky),
            safe_features=sorted(result.safe),
        )
        total_risky += len(result.risky)
        total_safe += len(result.safe)

    summary = ReportSummary(
        files_scanned=len(files),
        total_risky=total_risky,
        total_safe=total_safe,
        target_year=definition.year,
    )
    return BaselineReport(summary=summary, files=files)
