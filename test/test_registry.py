"""
Tests for the feature registry: definition rules and matching behavior.
"""
import pytest

from features.detector import FeatureDetector
from features.patterns import INSTANCE_METHODS, STATIC_MEMBERS, build_default_registry
from features.registry import DuplicateFeatureError, FeatureRegistry, RegistryFrozenError
from js.nodes import NodeKind


def _always(node, ancestors):
    return True


def _boom(node, ancestors):
    raise AttributeError("predicate bug")


class TestDefinition:
    def test_duplicate_name_rejected(self):
        registry = FeatureRegistry()
        registry.define("Feature", NodeKind.BINARY_EXPRESSION)
        with pytest.raises(DuplicateFeatureError):
            registry.define("Feature", NodeKind.CALL_EXPRESSION)
        # First definition is kept
        assert registry.get("Feature").kinds == (NodeKind.BINARY_EXPRESSION,)

    def test_frozen_registry_rejects_definitions(self):
        registry = FeatureRegistry().freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.define("Late", NodeKind.CALL_EXPRESSION)

    def test_empty_kinds_rejected(self):
        with pytest.raises(ValueError):
            FeatureRegistry().define("Nothing", ())

    def test_names_sorted(self):
        registry = FeatureRegistry()
        registry.define("b", NodeKind.CALL_EXPRESSION)
        registry.define("a", NodeKind.CALL_EXPRESSION)
        assert registry.names() == ["a", "b"]
        assert list(registry) == ["a", "b"]
        assert [p.name for p in registry.patterns()] == ["a", "b"]

    def test_node_types(self):
        registry = FeatureRegistry()
        registry.define("x", (NodeKind.NEW_EXPRESSION, NodeKind.CALL_EXPRESSION))
        assert registry.node_types() == {"new_expression", "call_expression"}


class TestMatching:
    def test_raising_predicate_counts_as_no_match(self):
        registry = FeatureRegistry()
        registry.define("broken", NodeKind.BINARY_EXPRESSION, _boom)
        registry.define("any binary", NodeKind.BINARY_EXPRESSION)
        detector = FeatureDetector(registry.freeze())
        assert detector.detect_source("const x = a ?? b;") == {"any binary"}

    def test_several_patterns_match_one_node(self):
        registry = FeatureRegistry()
        registry.define("first", NodeKind.AWAIT_EXPRESSION)
        registry.define("second", NodeKind.AWAIT_EXPRESSION, _always)
        detector = FeatureDetector(registry.freeze())
        assert detector.detect_source("await x;") == {"first", "second"}

    def test_ancestors_only_when_requested(self):
        seen = {}

        def record(key):
            def predicate(node, ancestors):
                seen[key] = [a.type for a in ancestors]
                return True

            return predicate

        registry = FeatureRegistry()
        registry.define("plain", NodeKind.AWAIT_EXPRESSION, record("plain"))
        registry.define("with path", NodeKind.AWAIT_EXPRESSION, record("with path"), needs_ancestors=True)
        FeatureDetector(registry.freeze()).detect_source("await x;")

        assert seen["plain"] == []
        # Nearest parent first, root last
        assert seen["with path"][0] == "expression_statement"
        assert seen["with path"][-1] == "program"

    def test_empty_registry_matches_nothing(self):
        detector = FeatureDetector(FeatureRegistry().freeze())
        assert detector.detect_source("const x = a?.b ?? c;") == frozenset()


class TestDefaultRegistry:
    def test_frozen(self):
        assert build_default_registry().frozen

    def test_contains_all_builtins(self):
        registry = build_default_registry()
        for feature, _ in INSTANCE_METHODS:
            assert feature in registry
        for feature, _, _ in STATIC_MEMBERS:
            assert feature in registry
        for feature in (
            "Optional chaining (?.)",
            "Nullish coalescing (??)",
            "Logical assignment (&&=, ||=, ??=)",
            "Class fields",
            "Static class fields",
            "Private fields",
            "Private methods",
            "Top-level await",
            "Error.cause",
        ):
            assert feature in registry
        assert len(registry) == len(INSTANCE_METHODS) + len(STATIC_MEMBERS) + 9

    def test_every_feature_has_description(self):
        for pattern in build_default_registry().patterns():
            assert pattern.description, pattern.name
