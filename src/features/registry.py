"""
Feature registry: feature name -> syntax-shape matcher.

Each feature is registered exactly once with the node kinds it applies to and
an optional refinement predicate. Attempting to register the same name twice
raises DuplicateFeatureError, so a second definition can never silently
replace the first one.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Set, Tuple, Union

from core.utils import debug
from js.nodes import NodeKind

# Ancestors of a node, nearest parent first, root last
Ancestors = Tuple[object, ...]

# Predicate over (node, ancestors); ancestors is () unless the pattern asks for them
Predicate = Callable[[object, Ancestors], bool]


class DuplicateFeatureError(ValueError):
    """Raised when a feature name is registered twice."""

    pass


class RegistryFrozenError(RuntimeError):
    """Raised when defining a feature on a frozen registry."""

    pass


@dataclass(frozen=True)
class FeaturePattern:
    """Declarative (node kinds, predicate) pair for one feature."""

    name: str
    kinds: Tuple[NodeKind, ...]
    predicate: Optional[Predicate] = None
    needs_ancestors: bool = False
    description: str = ""

    def matches(self, node, ancestors: Ancestors) -> bool:
        if self.predicate is None:
            return True
        return bool(self.predicate(node, ancestors))


class FeatureRegistry:
    """
    Set of feature patterns indexed by node type.

    Build with define(), then freeze(). The registry is never mutated after
    freezing and can be shared between detectors freely.
    """

    def __init__(self):
        self._patterns: Dict[str, FeaturePattern] = {}
        self._by_type: Dict[str, List[FeaturePattern]] = {}
        self._frozen = False

    def define(
        self,
        name: str,
        kinds: Union[NodeKind, Sequence[NodeKind]],
        predicate: Optional[Predicate] = None,
        needs_ancestors: bool = False,
        description: str = "",
    ) -> FeaturePattern:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot define feature '{name}': registry is frozen")
        if name in self._patterns:
            raise DuplicateFeatureError(f"Feature '{name}' already registered")

        kind_tuple = (kinds,) if isinstance(kinds, NodeKind) else tuple(kinds)
        if not kind_tuple:
            raise ValueError(f"Feature '{name}' must select at least one node kind")

        pattern = FeaturePattern(name, kind_tuple, predicate, needs_ancestors, description)
        self._patterns[name] = pattern
        for kind in kind_tuple:
            self._by_type.setdefault(kind.value, []).append(pattern)
        return pattern

    def freeze(self) -> "FeatureRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[FeaturePattern]:
        return self._patterns.get(name)

    def names(self) -> List[str]:
        return sorted(self._patterns)

    def patterns(self) -> List[FeaturePattern]:
        return [self._patterns[name] for name in self.names()]

    def __contains__(self, name: object) -> bool:
        return name in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def node_types(self) -> Set[str]:
        """Node types that at least one pattern selects on."""
        return set(self._by_type)

    def wants_ancestors(self, node_type: str) -> bool:
        return any(p.needs_ancestors for p in self._by_type.get(node_type, ()))

    def match(self, node, ancestors: Ancestors = ()) -> Set[str]:
        """
        Return every feature whose pattern matches `node`.

        A predicate that raises is treated as "no match" for that pattern only.
        """
        candidates = self._by_type.get(node.type)
        if not candidates:
            return set()

        matched: Set[str] = set()
        for pattern in candidates:
            try:
                if pattern.matches(node, ancestors if pattern.needs_ancestors else ()):
                    matched.add(pattern.name)
            except Exception as e:
                debug(f"Pattern '{pattern.name}' failed on {node.type} at {node.start_point}: {e}")
        return matched
