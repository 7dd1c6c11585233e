"""
Process-wide read-only tables: feature registry, baseline table and
remediation mapping, built together and cross-checked once at startup.

Every feature name mentioned by a baseline, a remedy or a snippet must exist
in the registry; a typo in any table would otherwise turn into a silent
no-op.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from baseline.table import BaselineTable, build_default_table
from features.patterns import build_default_registry
from features.registry import FeatureRegistry
from remediation.mapping import RemediationMapping, build_default_mapping
from templates import exists as template_exists


class CatalogError(Exception):
    """Raised when tables reference features the registry does not know."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("Inconsistent feature tables:\n  " + "\n  ".join(problems))


@dataclass(frozen=True)
class Catalog:
    registry: FeatureRegistry
    baselines: BaselineTable
    remedies: RemediationMapping


def validate_catalog(registry: FeatureRegistry, baselines: BaselineTable, remedies: RemediationMapping) -> None:
    problems: List[str] = []

    for definition in baselines.definitions():
        for feature in sorted(definition.supported | definition.documented_unsupported):
            if feature not in registry:
                problems.append(f"baseline {definition.year}: unknown feature '{feature}'")

    for feature in sorted(remedies.remedies):
        if feature not in registry:
            problems.append(f"remediation: unknown feature '{feature}'")

    for feature, template in sorted(remedies.snippets.items()):
        if feature not in registry:
            problems.append(f"snippet: unknown feature '{feature}'")
        if not template_exists(template):
            problems.append(f"snippet: template '{template}' for '{feature}' not found")

    if problems:
        raise CatalogError(problems)


def build_catalog(
    custom_polyfills: Optional[Mapping[str, str]] = None,
    registry: Optional[FeatureRegistry] = None,
    baselines: Optional[BaselineTable] = None,
    remedies: Optional[RemediationMapping] = None,
) -> Catalog:
    """Build (or accept) each table, validate them against each other, then apply user overrides."""
    if registry is None:
        registry = build_default_registry()
    if baselines is None:
        baselines = build_default_table()
    if remedies is None:
        remedies = build_default_mapping()

    validate_catalog(registry, baselines, remedies)

    if custom_polyfills:
        remedies = remedies.with_overrides(custom_polyfills, registry)

    return Catalog(registry=registry, baselines=baselines, remedies=remedies)


def feature_status(catalog: Catalog, year: str) -> Dict[str, bool]:
    """Feature name -> supported in `year`, for every registered feature."""
    definition = catalog.baselines.get(year)
    return {name: definition.supports(name) for name in catalog.registry.names()}
