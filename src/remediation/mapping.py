"""
Feature -> remediation mapping: runtime packages, Babel plugins and inline snippets.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from core.utils import warn

# Build-time plugins are recognized by their npm scope
BUILD_PLUGIN_PREFIX = "@babel/"


class RemedyKind(Enum):
    PACKAGE = "package"  # Runtime dependency (npm install)
    BUILD_PLUGIN = "build_plugin"  # Build-time dependency (npm install --save-dev)


@dataclass(frozen=True)
class Remedy:
    kind: RemedyKind
    name: str

    @classmethod
    def from_identifier(cls, identifier: str) -> "Remedy":
        """Classify an npm identifier: `@babel/...` is a build plugin, anything else a package."""
        if identifier.startswith(BUILD_PLUGIN_PREFIX):
            return cls(RemedyKind.BUILD_PLUGIN, identifier)
        return cls(RemedyKind.PACKAGE, identifier)


BUILTIN_POLYFILLS: Dict[str, str] = {
    "Array.prototype.at": "array.prototype.at",
    "Optional chaining (?.)": "@babel/plugin-proposal-optional-chaining",
    "Nullish coalescing (??)": "@babel/plugin-proposal-nullish-coalescing-operator",
    "Promise.any": "promise.any",
    "String.prototype.replaceAll": "string.prototype.replaceall",
    "Logical assignment (&&=, ||=, ??=)": "@babel/plugin-proposal-logical-assignment-operators",
    "Private fields": "@babel/plugin-proposal-class-properties",
    "Private methods": "@babel/plugin-proposal-private-methods",
    "Top-level await": "@babel/plugin-syntax-top-level-await",
    "Array.prototype.includes": "array.prototype.includes",
    "Object.entries": "object.entries",
    "Object.values": "object.values",
    "String.prototype.padStart": "string.prototype.padstart",
    "String.prototype.padEnd": "string.prototype.padend",
    "Array.groupBy": "array.prototype.group",
    "Object.hasOwn": "object.hasown",
    "Error.cause": "error-cause",
}

# Feature -> snippet template under templates/snippets/
SNIPPET_TEMPLATES: Dict[str, str] = {
    "Array.prototype.at": "snippets/array_at.js.j2",
    "Nullish coalescing (??)": "snippets/nullish_coalescing.js.j2",
    "Optional chaining (?.)": "snippets/optional_chaining.js.j2",
    "Array.prototype.includes": "snippets/array_includes.js.j2",
    "Object.entries": "snippets/object_entries.js.j2",
    "Object.hasOwn": "snippets/object_has_own.js.j2",
    "Promise.any": "snippets/promise_any.js.j2",
}


class RemediationMapping:
    """Read-only feature -> Remedy table plus snippet templates."""

    def __init__(self, remedies: Mapping[str, Remedy], snippets: Mapping[str, str]):
        self._remedies = MappingProxyType(dict(remedies))
        self._snippets = MappingProxyType(dict(snippets))

    @property
    def remedies(self) -> Mapping[str, Remedy]:
        return self._remedies

    @property
    def snippets(self) -> Mapping[str, str]:
        return self._snippets

    def remedy_for(self, feature: str) -> Optional[Remedy]:
        return self._remedies.get(feature)

    def snippet_template(self, feature: str) -> Optional[str]:
        return self._snippets.get(feature)

    def with_overrides(self, custom: Mapping[str, str], known_features) -> "RemediationMapping":
        """
        New mapping with user-supplied feature -> package entries merged over this one.

        Entries naming a feature outside `known_features` are reported and dropped.
        """
        remedies = dict(self._remedies)
        for feature, identifier in custom.items():
            if feature not in known_features:
                warn(f"customPolyfills: unknown feature '{feature}', ignoring")
                continue
            if not identifier.strip():
                warn(f"customPolyfills: empty package name for '{feature}', ignoring")
                continue
            remedies[feature] = Remedy.from_identifier(identifier.strip())
        return RemediationMapping(remedies, self._snippets)


def build_default_mapping() -> RemediationMapping:
    remedies = {feature: Remedy.from_identifier(name) for feature, name in BUILTIN_POLYFILLS.items()}
    return RemediationMapping(remedies, SNIPPET_TEMPLATES)
