import json
import math
import os
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, TextIO

from baseline.evaluate import BaselineReport
from remediation.advisor import RemediationPlan
from remediation.configgen import GeneratedConfig
from templates import render


_USE_COLOR = not os.environ.get("POLYBASE_NO_COLORS")


class _C:
    """ANSI color codes."""

    RESET = "\033[0m" if _USE_COLOR else ""
    BOLD = "\033[1m" if _USE_COLOR else ""
    DIM = "\033[2m" if _USE_COLOR else ""
    # Colors
    RED = "\033[31m" if _USE_COLOR else ""
    GREEN = "\033[32m" if _USE_COLOR else ""
    YELLOW = "\033[33m" if _USE_COLOR else ""
    CYAN = "\033[36m" if _USE_COLOR else ""


class OutputMode(Enum):
    """Report renderings. JSON is the machine-readable contract; the rest are projections of it."""

    CONSOLE = "console"
    JSON = "json"
    MARKDOWN = "markdown"
    HTML = "html"


Printer = Callable[..., None]


def _printer(output_file: Optional[TextIO]) -> Printer:
    """print() to stdout, mirrored to `output_file` when given."""

    def _print(msg: str = ""):
        print(msg)
        if output_file:
            print(msg, file=output_file)

    return _print


def _coverage_color(coverage: float) -> str:
    if coverage >= 100.0:
        return _C.GREEN
    if coverage >= 50.0:
        return _C.YELLOW
    return _C.RED


def _format_coverage(coverage: float) -> str:
    """Whole percent, halves rounded up (62.5 -> 63%)."""
    return f"{math.floor(coverage + 0.5)}%"


# =============================================================================
# Data projections
# =============================================================================


def report_to_dict(report: BaselineReport, plan: Optional[RemediationPlan] = None) -> Dict[str, Any]:
    data = report.to_dict()
    if plan is not None:
        data["remediation"] = plan.to_dict()
    return data


def report_to_json(report: BaselineReport, plan: Optional[RemediationPlan] = None) -> str:
    return json.dumps(report_to_dict(report, plan), indent=2)


def render_markdown(report: BaselineReport, plan: Optional[RemediationPlan] = None) -> str:
    risky_files = [(path, fr) for path, fr in report.files.items() if fr.has_issues]
    return render(
        "report.md.j2",
        report=report,
        summary=report.summary,
        plan=plan,
        risky_files=risky_files,
        coverage=_format_coverage(report.summary.coverage),
    )


def render_html(report: BaselineReport, plan: Optional[RemediationPlan] = None) -> str:
    return render(
        "report.html.j2",
        report=report,
        summary=report.summary,
        plan=plan,
        coverage=_format_coverage(report.summary.coverage),
    )


# =============================================================================
# check
# =============================================================================


def report_check(
    report: BaselineReport,
    output_mode: OutputMode = OutputMode.CONSOLE,
    output_file: Optional[TextIO] = None,
) -> None:
    """Print a baseline report (check command). Supports CONSOLE and JSON."""
    _print = _printer(output_file)
    if output_mode == OutputMode.JSON:
        _print(report_to_json(report))
        return

    summary = report.summary
    _print(f"\n{_C.BOLD}Baseline {summary.target_year} Compatibility Report{_C.RESET}")
    _print("=" * 50)
    _print(f"Files scanned: {summary.files_scanned}")
    _print(f"Safe features: {_C.GREEN}{summary.total_safe}{_C.RESET}")
    _print(f"Risky features: {_C.RED if summary.total_risky else ''}{summary.total_risky}{_C.RESET}")
    _print(f"Coverage: {_coverage_color(summary.coverage)}{_format_coverage(summary.coverage)}{_C.RESET}")

    if not report.files:
        return

    _print("\nFile Details:")
    for path, file_report in report.files.items():
        _print(f"\n{path}:")
        if file_report.has_issues:
            for feature in file_report.risky_features:
                _print(f"  {_C.RED}-{_C.RESET} {feature}")
        else:
            _print(f"  {_C.DIM}No compatibility issues found{_C.RESET}")


# =============================================================================
# polyfill
# =============================================================================


def report_polyfill(
    report: BaselineReport,
    plan: RemediationPlan,
    output_mode: OutputMode = OutputMode.CONSOLE,
    output_file: Optional[TextIO] = None,
) -> None:
    """Print a baseline report with remediation guidance (polyfill command)."""
    _print = _printer(output_file)
    if output_mode == OutputMode.JSON:
        _print(report_to_json(report, plan))
        return
    if output_mode == OutputMode.MARKDOWN:
        _print(render_markdown(report, plan))
        return
    if output_mode == OutputMode.HTML:
        _print(render_html(report, plan))
        return

    summary = report.summary
    _print(f"\n{_C.BOLD}Polyfill Recommendations for Baseline {summary.target_year}{_C.RESET}")
    _print("=" * 60)

    _print("\nSummary:")
    _print(f"   Files scanned: {summary.files_scanned}")
    _print(f"   Features found: {summary.total_features}")
    _print(f"   Safe: {summary.total_safe} ({_format_coverage(summary.coverage)} coverage)")
    _print(f"   Needs polyfills: {summary.total_risky}")

    risky_files = {path: fr for path, fr in report.files.items() if fr.has_issues}
    _print("\nRisky Features by File:")
    if not risky_files:
        _print(f"   {_C.GREEN}No risky features found! Your code is Baseline {summary.target_year} compatible!{_C.RESET}")
        return

    for path, file_report in risky_files.items():
        _print(f"\n   {path}")
        for feature in file_report.risky_features:
            _print(f"      {_C.YELLOW}!{_C.RESET} {feature}")

    if plan.install_commands:
        _print("\nInstallation Commands:")
        for command in plan.install_commands:
            _print(f"   $ {command}")

    if plan.required_packages:
        _print("\nRequired NPM Packages (runtime):")
        for package in plan.required_packages:
            _print(f"   - {package}")

    if plan.required_build_plugins:
        _print("\nRequired Babel Plugins (build time):")
        for plugin in plan.required_build_plugins:
            _print(f"   - {plugin}")
        _print("\nBabel Configuration Example (babel.config.js):")
        for line in render("config/babel.config.js.j2", plugins=plan.required_build_plugins).split("\n"):
            _print(f"   {line}")

    if plan.manual_fixes:
        _print("\nManual Fixes:")
        for note in plan.manual_fixes:
            _print(f"   - {note}")

    if plan.inline_snippets:
        _print("\nManual Implementation Snippets:")
        for feature, snippet in plan.inline_snippets.items():
            _print(f"\n   {_C.BOLD}{feature}{_C.RESET}:")
            for line in snippet.split("\n"):
                _print(f"      {line}")

    _print("\nNext Steps:")
    _print("   1. Run the installation commands above")
    _print("   2. Configure your build system (Babel, Webpack, etc.)")
    _print("   3. Run 'polybase check' again to verify compatibility")


# =============================================================================
# debug / generate-config / features
# =============================================================================


def report_debug(scan_result: Mapping[str, Any], report: BaselineReport) -> None:
    """Raw per-file feature sets followed by baseline totals."""
    print(f"Found {len(scan_result)} file(s):")
    for path, features in scan_result.items():
        print(f"\n{path}:")
        if not features:
            print(f"  {_C.DIM}No features detected{_C.RESET}")
            continue
        file_report = report.files.get(path)
        risky = set(file_report.risky_features) if file_report else set()
        for feature in sorted(features):
            tag = f"{_C.RED}risky{_C.RESET}" if feature in risky else f"{_C.GREEN}safe{_C.RESET}"
            print(f"  - {feature} [{tag}]")

    diagnostics = getattr(scan_result, "diagnostics", ())
    if diagnostics:
        print(f"\n{len(diagnostics)} problem(s) while scanning:")
        for diagnostic in diagnostics:
            print(f"  [{diagnostic.kind}] {diagnostic}")

    summary = report.summary
    print(f"\nBaseline {summary.target_year} Analysis:")
    print(f"Risky features: {summary.total_risky}")
    print(f"Safe features: {summary.total_safe}")
    print(f"Coverage: {_format_coverage(summary.coverage)}")


def report_generated_config(config: Optional[GeneratedConfig], target_year: str) -> None:
    if config is None:
        print(f"No config needed - your code is already Baseline {target_year} compatible!")
        return
    print(f"Save as {config.filename}:\n")
    print(config.content)


def report_features(status: Mapping[str, bool], descriptions: Mapping[str, str], target_year: str) -> None:
    """List registered features with their support status for a target year."""
    print(f"Known features ({len(status)}), Baseline {target_year}:\n")
    for name in sorted(status):
        tag = f"{_C.GREEN}supported{_C.RESET}" if status[name] else f"{_C.RED}not supported{_C.RESET}"
        print(f"  {name} [{tag}]")
        description = descriptions.get(name)
        if description:
            print(f"    {_C.DIM}{description}{_C.RESET}")
