"""
Feature detection: registry of syntax patterns and the tree walker that applies them.
"""

from features.registry import (
    FeatureRegistry,
    FeaturePattern,
    DuplicateFeatureError,
    RegistryFrozenError,
)
from features.patterns import build_default_registry
from features.detector import FeatureDetector

__all__ = [
    "FeatureRegistry",
    "FeaturePattern",
    "DuplicateFeatureError",
    "RegistryFrozenError",
    "build_default_registry",
    "FeatureDetector",
]
