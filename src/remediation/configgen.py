"""
Configuration-file skeletons derived from a remediation plan.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from remediation.advisor import RemediationPlan
from templates import render


class ConfigFormat(Enum):
    BABEL = "babel"
    PACKAGE = "package"
    WEBPACK = "webpack"


@dataclass(frozen=True)
class GeneratedConfig:
    filename: str
    content: str


def _package_additions(plan: RemediationPlan) -> str:
    additions = {
        "dependencies": {pkg: "latest" for pkg in plan.required_packages},
        "devDependencies": {plugin: "latest" for plugin in plan.required_build_plugins},
    }
    return json.dumps(additions, indent=2)


def generate_config(plan: RemediationPlan, fmt: ConfigFormat) -> Optional[GeneratedConfig]:
    """Config skeleton for `fmt`, or None when the plan has nothing to fix."""
    if not plan.has_actions:
        return None

    if fmt == ConfigFormat.BABEL:
        content = render("config/babel.config.js.j2", plugins=plan.required_build_plugins)
        return GeneratedConfig("babel.config.js", content)

    if fmt == ConfigFormat.PACKAGE:
        return GeneratedConfig("package.json.additions", _package_additions(plan))

    if fmt == ConfigFormat.WEBPACK:
        content = render(
            "config/webpack.config.js.j2",
            packages=plan.required_packages,
            plugins=plan.required_build_plugins,
        )
        return GeneratedConfig("webpack.config.polyfills.js", content)

    raise ValueError(f"Unsupported config format: {fmt}")
