"""
Feature detection: walk a syntax tree and apply the feature registry.
"""

from typing import FrozenSet, List, Set, Tuple

from core.utils import debug
from features.registry import FeatureRegistry
from js.parse import Dialect, parse_source


class FeatureDetector:
    """
    Applies a FeatureRegistry to every node of a tree.

    Traversal is an explicit-stack pre-order walk over all nodes (named and
    anonymous), so deeply nested sources cannot hit the recursion limit.
    The ancestor path is tracked alongside and only materialized for node
    types whose patterns ask for it.
    """

    def __init__(self, registry: FeatureRegistry):
        self.registry = registry
        self._relevant_types = registry.node_types()

    def detect(self, tree) -> FrozenSet[str]:
        """Return the set of feature names used anywhere in `tree` (a Tree or root Node)."""
        root = getattr(tree, "root_node", tree)
        features: Set[str] = set()

        path: List = []  # Ancestors of the node being visited, root first
        stack: List[Tuple[object, int]] = [(root, 0)]
        visited = 0

        while stack:
            node, depth = stack.pop()
            del path[depth:]
            visited += 1

            if node.type in self._relevant_types:
                ancestors: Tuple = ()
                if self.registry.wants_ancestors(node.type):
                    ancestors = tuple(reversed(path))
                features |= self.registry.match(node, ancestors)

            children = node.children
            if children:
                path.append(node)
                for child in reversed(children):
                    stack.append((child, depth + 1))

        debug(f"Visited {visited} nodes, {len(features)} feature(s) detected")
        return frozenset(features)

    def detect_source(self, source_code: str, dialect: Dialect = Dialect.TSX) -> FrozenSet[str]:
        """Parse and detect. Raises ParseError for invalid source."""
        return self.detect(parse_source(source_code, dialect))
