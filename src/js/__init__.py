"""
JavaScript / TypeScript parsing on top of tree-sitter.
"""

from js.parse import (
    Dialect,
    ParseError,
    dialect_for_path,
    get_language,
    get_parser,
    parse_file_source,
    parse_source,
)

__all__ = [
    "Dialect",
    "ParseError",
    "dialect_for_path",
    "get_language",
    "get_parser",
    "parse_source",
    "parse_file_source",
]
