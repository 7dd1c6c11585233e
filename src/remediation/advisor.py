"""
Remediation advisor: turn a set of risky features into packages to install,
Babel plugins to configure, inline snippets, and manual-fix notes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from core.utils import debug
from remediation.mapping import RemediationMapping, RemedyKind
from templates import render


@dataclass
class RemediationPlan:
    risky_features: List[str] = field(default_factory=list)
    required_packages: List[str] = field(default_factory=list)
    required_build_plugins: List[str] = field(default_factory=list)
    install_commands: List[str] = field(default_factory=list)
    unmapped_features: List[str] = field(default_factory=list)
    manual_fixes: List[str] = field(default_factory=list)
    inline_snippets: Dict[str, str] = field(default_factory=dict)

    @property
    def has_actions(self) -> bool:
        return bool(self.risky_features)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riskyFeatures": list(self.risky_features),
            "requiredPackages": list(self.required_packages),
            "requiredBuildPlugins": list(self.required_build_plugins),
            "installCommands": list(self.install_commands),
            "unmappedFeatures": list(self.unmapped_features),
            "manualFixes": list(self.manual_fixes),
            "inlineSnippets": dict(self.inline_snippets),
        }


def manual_fix_message(feature: str) -> str:
    return f'Feature "{feature}" may require manual implementation'


def installation_commands(packages: Iterable[str], plugins: Iterable[str]) -> List[str]:
    """One `npm install` for runtime packages, one `--save-dev` for build plugins, names sorted."""
    commands = []
    packages = sorted(set(packages))
    plugins = sorted(set(plugins))
    if packages:
        commands.append(f"npm install {' '.join(packages)}")
    if plugins:
        commands.append(f"npm install --save-dev {' '.join(plugins)}")
    return commands


class RemediationAdvisor:
    def __init__(self, mapping: RemediationMapping):
        self.mapping = mapping

    def advise(self, risky_features: Iterable[str]) -> RemediationPlan:
        """Build a plan for the given risky features. Pure: same input, same plan."""
        features = sorted(set(risky_features))
        packages = set()
        plugins = set()
        unmapped: List[str] = []
        snippets: Dict[str, str] = {}

        for feature in features:
            remedy = self.mapping.remedy_for(feature)
            if remedy is None:
                unmapped.append(feature)
            elif remedy.kind == RemedyKind.BUILD_PLUGIN:
                plugins.add(remedy.name)
            else:
                packages.add(remedy.name)

            template = self.mapping.snippet_template(feature)
            if template:
                snippets[feature] = render(template)

        debug(f"Remediation: {len(packages)} package(s), {len(plugins)} plugin(s), {len(unmapped)} unmapped")

        return RemediationPlan(
            risky_features=features,
            required_packages=sorted(packages),
            required_build_plugins=sorted(plugins),
            install_commands=installation_commands(packages, plugins),
            unmapped_features=unmapped,
            manual_fixes=[manual_fix_message(f) for f in unmapped],
            inline_snippets=snippets,
        )
