"""
Remediation guidance for risky features: packages, build plugins, snippets, config skeletons.
"""

from remediation.mapping import Remedy, RemedyKind, RemediationMapping, build_default_mapping
from remediation.advisor import RemediationAdvisor, RemediationPlan, installation_commands
from remediation.configgen import ConfigFormat, GeneratedConfig, generate_config

__all__ = [
    "Remedy",
    "RemedyKind",
    "RemediationMapping",
    "build_default_mapping",
    "RemediationAdvisor",
    "RemediationPlan",
    "installation_commands",
    "ConfigFormat",
    "GeneratedConfig",
    "generate_config",
]
