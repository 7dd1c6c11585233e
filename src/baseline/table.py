"""
Immutable baseline table: target year -> supported feature set.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from baseline.data import BASELINE_FEATURES


class UnknownBaselineError(KeyError):
    """Raised when a target year has no baseline definition."""

    def __init__(self, year: str, valid_years: Iterable[str]):
        self.year = year
        self.valid_years = sorted(valid_years)
        super().__init__(year)

    def __str__(self) -> str:
        return f"Unknown baseline year: {self.year} (available: {', '.join(self.valid_years) or 'none'})"


@dataclass(frozen=True)
class BaselineDefinition:
    """Features supported for one target year."""

    year: str
    supported: FrozenSet[str]
    # Documentation only: never consulted when partitioning features
    documented_unsupported: FrozenSet[str] = frozenset()

    def supports(self, feature: str) -> bool:
        return feature in self.supported


class BaselineTable:
    """Read-only collection of BaselineDefinition keyed by year."""

    def __init__(self, definitions: Iterable[BaselineDefinition]):
        self._definitions: Dict[str, BaselineDefinition] = {}
        for definition in definitions:
            if definition.year in self._definitions:
                raise ValueError(f"Baseline year '{definition.year}' defined twice")
            self._definitions[definition.year] = definition

    @classmethod
    def from_data(cls, data: Mapping[str, Mapping[str, List[str]]], cumulative: bool = True) -> "BaselineTable":
        """
        Build a table from {year: {"supported": [...], "unsupported": [...]}}.

        With `cumulative`, each year also supports everything earlier years
        support (years ordered lexically, which matches numeric order for
        four-digit years).
        """
        definitions = []
        inherited: FrozenSet[str] = frozenset()
        for year in sorted(data):
            entry = data[year]
            supported = frozenset(entry.get("supported", ()))
            if cumulative:
                supported = supported | inherited
                inherited = supported
            definitions.append(
                BaselineDefinition(
                    year=year,
                    supported=supported,
                    documented_unsupported=frozenset(entry.get("unsupported", ())),
                )
            )
        return cls(definitions)

    def get(self, year: str) -> BaselineDefinition:
        definition = self._definitions.get(year)
        if definition is None:
            raise UnknownBaselineError(year, self._definitions)
        return definition

    def find(self, year: str) -> Optional[BaselineDefinition]:
        return self._definitions.get(year)

    def years(self) -> List[str]:
        return sorted(self._definitions)

    def definitions(self) -> List[BaselineDefinition]:
        return [self._definitions[y] for y in self.years()]

    def __contains__(self, year: object) -> bool:
        return year in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


def build_default_table() -> BaselineTable:
    return BaselineTable.from_data(BASELINE_FEATURES)
