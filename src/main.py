"""
Main entry point and command dispatch.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Load environment variables from .env file (if exists) before reading POLYBASE_* settings
from dotenv import load_dotenv

load_dotenv()

from baseline.evaluate import build_report
from baseline.table import UnknownBaselineError
from catalog import feature_status
from cli.debug import dump_ast_impl
from cli.helpers import load_catalog, resolve_target, scan_path, validate_environment
from core.config import CONFIG_FILENAME, OUTPUT_CHOICES, config_template, load_config
from core.utils import error, info
from remediation.advisor import RemediationAdvisor
from remediation.configgen import ConfigFormat, generate_config
from reporter import (
    OutputMode,
    report_check,
    report_debug,
    report_features,
    report_generated_config,
    report_polyfill,
)


def cmd_check(args, config) -> int:
    catalog = load_catalog(config)
    target = resolve_target(args.target, config)
    definition = catalog.baselines.get(target)

    info(f"Scanning {args.path} against Baseline {target}...")
    scan_result = scan_path(args.path, config, catalog)
    report = build_report(scan_result, definition)

    report_check(report, OutputMode.JSON if args.json else OutputMode.CONSOLE)
    return 0


def cmd_polyfill(args, config) -> int:
    catalog = load_catalog(config)
    target = resolve_target(args.target, config)
    definition = catalog.baselines.get(target)
    output_mode = OutputMode(args.output or config.output)

    info(f"Generating polyfills for {args.path} against Baseline {target}...")
    scan_result = scan_path(args.path, config, catalog)
    report = build_report(scan_result, definition)
    plan = RemediationAdvisor(catalog.remedies).advise(report.risky_features())

    if args.output_file:
        with open(args.output_file, "w", encoding="utf-8") as output_file:
            report_polyfill(report, plan, output_mode, output_file)
        info(f"Report written to {args.output_file}")
    else:
        report_polyfill(report, plan, output_mode)
    return 0


def cmd_debug(args, config) -> int:
    catalog = load_catalog(config)
    target = resolve_target(args.target, config)
    definition = catalog.baselines.get(target)

    info(f"Debug scan for {args.path}...")
    scan_result = scan_path(args.path, config, catalog)
    if args.dump_ast:
        dump_ast_impl(scan_result.keys())
    report = build_report(scan_result, definition)
    report_debug(scan_result, report)
    return 0


def cmd_generate_config(args, config) -> int:
    catalog = load_catalog(config)
    target = resolve_target(args.target, config)
    definition = catalog.baselines.get(target)
    fmt = ConfigFormat(args.format)

    info(f"Generating {fmt.value} config for {args.path}...")
    scan_result = scan_path(args.path, config, catalog)
    report = build_report(scan_result, definition)
    plan = RemediationAdvisor(catalog.remedies).advise(report.risky_features())

    report_generated_config(generate_config(plan, fmt), target)
    return 0


def cmd_features(args, config) -> int:
    catalog = load_catalog(config)
    target = resolve_target(args.target, config)
    status = feature_status(catalog, target)
    descriptions = {p.name: p.description for p in catalog.registry.patterns()}
    report_features(status, descriptions, target)
    return 0


def cmd_init(args, config) -> int:
    path = Path(args.path) if args.path else Path.cwd() / CONFIG_FILENAME
    if path.exists():
        error(f"{path} already exists, not overwriting")
        return 1
    path.write_text(json.dumps(config_template(), indent=2) + "\n", encoding="utf-8")
    print(f"Created {path}")
    return 0


def _add_target(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--target", metavar="YEAR", help="Target Baseline year (default: from config, else 2023)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polybase",
        description="Scan JavaScript/TypeScript for features outside a Baseline year and suggest polyfills",
    )
    parser.add_argument("--config", metavar="FILE", help=f"Config file (default: ./{CONFIG_FILENAME})")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    check = subparsers.add_parser("check", help="Report features outside the target Baseline")
    check.add_argument("path", help="Source file or directory")
    _add_target(check)
    check.add_argument("--json", action="store_true", help="Output results as JSON")
    check.set_defaults(func=cmd_check)

    polyfill = subparsers.add_parser("polyfill", help="Report plus packages, plugins and snippets to fix it")
    polyfill.add_argument("path", help="Source file or directory")
    _add_target(polyfill)
    polyfill.add_argument(
        "-o", "--output", choices=OUTPUT_CHOICES, default=None, help="Output format (default: from config, else console)"
    )
    polyfill.add_argument("-O", "--output-file", metavar="FILE", help="Also write the report to FILE")
    polyfill.set_defaults(func=cmd_polyfill)

    debug_cmd = subparsers.add_parser("debug", help="Show raw detected features per file")
    debug_cmd.add_argument("path", help="Source file or directory")
    _add_target(debug_cmd)
    debug_cmd.add_argument("-da", "--dump-ast", action="store_true", help="Dump tree-sitter AST of each file")
    debug_cmd.set_defaults(func=cmd_debug)

    gen = subparsers.add_parser("generate-config", help="Print a config skeleton enabling the needed polyfills")
    gen.add_argument("path", help="Source file or directory")
    _add_target(gen)
    gen.add_argument(
        "--format", choices=[f.value for f in ConfigFormat], default=ConfigFormat.BABEL.value, help="Config format"
    )
    gen.set_defaults(func=cmd_generate_config)

    features = subparsers.add_parser("features", help="List detectable features and their Baseline status")
    _add_target(features)
    features.set_defaults(func=cmd_features)

    init = subparsers.add_parser("init", help=f"Write a {CONFIG_FILENAME} template")
    init.add_argument("path", nargs="?", help=f"Where to write (default: ./{CONFIG_FILENAME})")
    init.set_defaults(func=cmd_init)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run one command. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.command != "init":
        validate_environment()

    try:
        return args.func(args, config)
    except UnknownBaselineError as e:
        error(str(e))
        return 1


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
