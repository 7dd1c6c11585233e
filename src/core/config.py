"""
Configuration file loading.

Reads an optional `polybase.config.json` from the working directory (or the
path given by --config / POLYBASE_CONFIG). A broken file never aborts a run:
invalid JSON falls back to the built-in defaults, and a single key with the
wrong type falls back to that key's default.
"""

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.utils import debug, normalize_extension, warn

CONFIG_FILENAME = "polybase.config.json"

DEFAULT_TARGET = "2023"
DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = ("node_modules", "dist", "build")
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")
OUTPUT_CHOICES: Tuple[str, ...] = ("console", "json", "markdown", "html")


@dataclass(frozen=True)
class Config:
    """Effective configuration for one CLI invocation."""

    target: str = DEFAULT_TARGET
    ignore_patterns: Tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    include_extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    output: str = "console"
    custom_polyfills: Dict[str, str] = field(default_factory=dict)
    source: Optional[str] = None  # Path the config was loaded from, if any


def _string_list(value: Any) -> Optional[List[str]]:
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    return None


def _apply(config: Config, raw: Dict[str, Any], path: str) -> Config:
    """Merge a parsed JSON object over the defaults, key by key."""
    updates: Dict[str, Any] = {}

    if "target" in raw:
        target = raw["target"]
        # Years written as numbers are accepted ("target": 2024)
        if isinstance(target, int) and not isinstance(target, bool):
            target = str(target)
        if isinstance(target, str) and target.strip():
            updates["target"] = target.strip()
        else:
            warn(f"{path}: 'target' must be a string, using default '{config.target}'")

    if "ignorePatterns" in raw:
        patterns = _string_list(raw["ignorePatterns"])
        if patterns is None:
            warn(f"{path}: 'ignorePatterns' must be a list of strings, using defaults")
        else:
            updates["ignore_patterns"] = tuple(patterns)

    if "includeExtensions" in raw:
        exts = _string_list(raw["includeExtensions"])
        if exts is None:
            warn(f"{path}: 'includeExtensions' must be a list of strings, using defaults")
        else:
            updates["include_extensions"] = tuple(e for e in (normalize_extension(x) for x in exts) if e)

    if "output" in raw:
        output = raw["output"]
        if output in OUTPUT_CHOICES:
            updates["output"] = output
        else:
            warn(f"{path}: 'output' must be one of {', '.join(OUTPUT_CHOICES)}, using '{config.output}'")

    if "customPolyfills" in raw:
        custom = raw["customPolyfills"]
        if isinstance(custom, dict) and all(isinstance(k, str) and isinstance(v, str) for k, v in custom.items()):
            updates["custom_polyfills"] = dict(custom)
        else:
            warn(f"{path}: 'customPolyfills' must map feature names to package names, ignoring")

    known = {"target", "ignorePatterns", "includeExtensions", "output", "customPolyfills"}
    for key in raw:
        if key not in known:
            debug(f"{path}: ignoring unknown config key '{key}'")

    return replace(config, source=path, **updates)


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """Config file location: explicit argument, then POLYBASE_CONFIG, then ./polybase.config.json."""
    if explicit:
        return Path(explicit)
    env_path = os.getenv("POLYBASE_CONFIG")
    if env_path:
        return Path(env_path)
    return Path.cwd() / CONFIG_FILENAME


def load_config(explicit_path: Optional[str] = None) -> Config:
    """
    Load configuration, falling back to defaults on any problem.

    A missing file is not an error unless it was requested explicitly, in
    which case a warning is printed.
    """
    defaults = Config()
    path = resolve_config_path(explicit_path)

    if not path.exists():
        if explicit_path:
            warn(f"Config file not found: {path}, using defaults")
        return defaults

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        warn(f"Invalid config file {path} ({e}), using defaults")
        return defaults

    if not isinstance(raw, dict):
        warn(f"Invalid config file {path} (expected a JSON object), using defaults")
        return defaults

    debug(f"Loaded config from {path}")
    return _apply(defaults, raw, str(path))


def config_template() -> Dict[str, Any]:
    """Starter config written by `polybase init`."""
    return {
        "target": DEFAULT_TARGET,
        "ignorePatterns": ["node_modules", "dist", "build", "*.test.js"],
        "includeExtensions": [".js", ".jsx", ".ts", ".tsx"],
        "output": "console",
        "customPolyfills": {"Array.prototype.toSorted": "array.prototype.tosorted"},
    }
