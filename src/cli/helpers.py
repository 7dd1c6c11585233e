"""
CLI helper functions: environment validation, catalog and scanner setup, target resolution.
"""

import sys
from typing import Optional

from catalog import Catalog, build_catalog
from core.config import Config
from core.utils import debug, error
from features.detector import FeatureDetector
from js.parse import Dialect, get_language
from scanner import Scanner, ScanResult


def validate_environment() -> None:
    """
    Check that the tree-sitter grammars load.
    Exits with error if validation fails.
    """
    errors = []
    for dialect in Dialect:
        try:
            get_language(dialect)
        except Exception as e:
            errors.append(f"tree-sitter grammar '{dialect.value}' failed to load: {e}")

    if errors:
        error("Environment validation failed:\n")
        for i, err in enumerate(errors, 1):
            error(f"\n{i}. {err}\n")
        error("Reinstall compatible versions: pip install -U tree-sitter tree-sitter-typescript")
        sys.exit(1)


def resolve_target(cli_target: Optional[str], config: Config) -> str:
    """--target wins over the config file's `target`."""
    target = cli_target or config.target
    debug(f"Target baseline: {target}")
    return target


def load_catalog(config: Config) -> Catalog:
    return build_catalog(custom_polyfills=config.custom_polyfills)


def make_scanner(config: Config, catalog: Catalog) -> Scanner:
    return Scanner(
        FeatureDetector(catalog.registry),
        ignore_patterns=config.ignore_patterns,
        include_extensions=config.include_extensions,
    )


def scan_path(path: str, config: Config, catalog: Catalog) -> ScanResult:
    return make_scanner(config, catalog).scan(path)
