"""
Tests for baseline tables and risky/safe evaluation.
"""
import pytest

from baseline.evaluate import build_report, coverage, evaluate
from baseline.table import BaselineDefinition, BaselineTable, UnknownBaselineError, build_default_table


@pytest.fixture
def table():
    return build_default_table()


class TestBaselineTable:
    def test_years(self, table):
        assert table.years() == ["2023", "2024"]
        assert "2023" in table
        assert "1999" not in table
        assert len(table) == 2

    def test_unknown_year(self, table):
        with pytest.raises(UnknownBaselineError) as exc:
            table.get("1999")
        assert str(exc.value) == "Unknown baseline year: 1999 (available: 2023, 2024)"
        assert exc.value.valid_years == ["2023", "2024"]
        assert isinstance(exc.value, KeyError)

    def test_find_returns_none_for_unknown(self, table):
        assert table.find("1999") is None
        assert table.find("2023").year == "2023"

    def test_cumulative_years(self, table):
        later = table.get("2024")
        assert later.supports("Array.prototype.at")
        assert later.supports("Array.prototype.toSorted")
        assert table.get("2023").supported <= later.supported

    def test_non_cumulative(self):
        data = {"2030": {"supported": ["A"]}, "2031": {"supported": ["B"]}}
        flat = BaselineTable.from_data(data, cumulative=False)
        assert flat.get("2031").supported == {"B"}
        assert BaselineTable.from_data(data).get("2031").supported == {"A", "B"}

    def test_duplicate_year_rejected(self):
        definition = BaselineDefinition("2030", frozenset())
        with pytest.raises(ValueError):
            BaselineTable([definition, definition])


class TestEvaluate:
    def test_partition(self, table):
        detected = {"Array.prototype.at", "Array.groupBy", "Not A Real Feature"}
        result = evaluate(detected, table.get("2023"))
        assert result.safe == {"Array.prototype.at"}
        assert result.risky == {"Array.groupBy", "Not A Real Feature"}
        assert result.safe | result.risky == detected
        assert not result.safe & result.risky

    def test_documented_unsupported_is_ignored(self):
        definition = BaselineTable.from_data({"2030": {"supported": ["A"], "unsupported": ["A", "B"]}}).get("2030")
        assert definition.documented_unsupported == {"A", "B"}
        result = evaluate({"A", "B"}, definition)
        assert result.safe == {"A"}
        assert result.risky == {"B"}

    def test_nothing_detected(self, table):
        result = evaluate(set(), table.get("2023"))
        assert result.safe == frozenset()
        assert result.risky == frozenset()
        assert result.coverage == 100.0


def test_coverage():
    assert coverage(0, 0) == 100.0
    assert coverage(1, 1) == 50.0
    assert coverage(0, 3) == 0.0
    assert coverage(3, 0) == 100.0


class TestBuildReport:
    def test_summary_and_files(self, table):
        scan = {
            "src/a.js": frozenset({"Array.prototype.toSorted", "Array.prototype.at", "Object.hasOwn"}),
            "src/b.js": frozenset(),
        }
        report = build_report(scan, table.get("2023"))

        assert report.summary.files_scanned == 2
        assert report.summary.total_risky == 2
        assert report.summary.total_safe == 1
        assert report.summary.target_year == "2023"

        a = report.files["src/a.js"]
        assert a.risky_features == ["Array.prototype.toSorted", "Object.hasOwn"]
        assert a.safe_features == ["Array.prototype.at"]
        assert a.has_issues
        assert not report.files["src/b.js"].has_issues
        assert report.risky_features() == {"Array.prototype.toSorted", "Object.hasOwn"}

    def test_to_dict(self, table):
        scan = {"x.js": frozenset({"Array.prototype.at", "Array.groupBy", "Error.cause"})}
        data = build_report(scan, table.get("2023")).to_dict()
        assert data["summary"] == {
            "filesScanned": 1,
            "totalRisky": 2,
            "totalSafe": 1,
            "targetYear": "2023",
            "coverage": 33.33,
        }
        assert data["files"]["x.js"] == {
            "riskyFeatures": ["Array.groupBy", "Error.cause"],
            "safeFeatures": ["Array.prototype.at"],
            "hasIssues": True,
        }

    def test_same_feature_in_two_files_counts_twice(self, table):
        scan = {"a.js": frozenset({"Array.groupBy"}), "b.js": frozenset({"Array.groupBy"})}
        report = build_report(scan, table.get("2023"))
        assert report.summary.total_risky == 2
        assert report.risky_features() == {"Array.groupBy"}

    def test_empty_scan(self, table):
        report = build_report({}, table.get("2024"))
        assert report.summary.files_scanned == 0
        assert report.summary.coverage == 100.0
        assert report.to_dict() == {
            "summary": {
                "filesScanned": 0,
                "totalRisky": 0,
                "totalSafe": 0,
                "targetYear": "2024",
                "coverage": 100.0,
            },
            "files": {},
        }
