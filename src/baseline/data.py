"""
Baseline data: features considered safely supported per target year.

Each year lists only the features it adds; BaselineTable makes the years
cumulative. `unsupported` entries are documentation for readers of this
file and never affect the risky/safe partition.
"""

from typing import Dict, List

BASELINE_FEATURES: Dict[str, Dict[str, List[str]]] = {
    "2023": {
        "supported": [
            "Array.prototype.at",
            "Optional chaining (?.)",
            "Nullish coalescing (??)",
            "Promise.any",
            "String.prototype.replaceAll",
            "Logical assignment (&&=, ||=, ??=)",
            "Class fields",
            "Static class fields",
            "Private methods",
            "Top-level await",
            "Array.prototype.includes",
            "Object.entries",
            "Object.values",
            "String.prototype.padStart",
            "String.prototype.padEnd",
        ],
        "unsupported": [
            "Array.groupBy",
            "Object.hasOwn",
            "Error.cause",
            "Array.prototype.toReversed",
            "Array.prototype.toSorted",
            "Array.prototype.toSpliced",
            "Array.prototype.with",
        ],
    },
    "2024": {
        "supported": [
            "Array.groupBy",
            "Object.hasOwn",
            "Error.cause",
            "Array.prototype.toReversed",
            "Array.prototype.toSorted",
            "Array.prototype.toSpliced",
            "Array.prototype.with",
        ],
        "unsupported": [],
    },
}
