"""
JavaScript / TypeScript source parsing - main entry points.

Both dialects come from tree-sitter-typescript, which is a superset of the
JavaScript grammar: type annotations, class member accessibility modifiers
and (for TSX) JSX all parse without extra configuration.
"""

import sys
from enum import Enum
from functools import lru_cache

from core.utils import error, path_extension
from js.utils import find_error_nodes, node_position, node_text, short_text

try:
    import tree_sitter_typescript
    from tree_sitter import Language, Parser
except ImportError:
    error("tree-sitter not installed. Run: pip install tree-sitter tree-sitter-typescript")
    sys.exit(1)


class Dialect(Enum):
    """Grammar used to parse a file."""

    TSX = "tsx"  # JS, JSX, TSX: everything that may contain markup
    TYPESCRIPT = "typescript"  # .ts files, where `<T>value` casts are legal


# Extensions that must use the plain TypeScript grammar; everything else uses TSX
_TYPESCRIPT_EXTENSIONS = {".ts", ".mts", ".cts"}


class ParseError(Exception):
    """Raised when source text is not valid under the selected dialect."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        base = super().__str__()
        if self.line:
            return f"{base} (line {self.line}, column {self.column})"
        return base


def dialect_for_path(path: str) -> Dialect:
    """Pick the grammar for a file based on its extension."""
    if path_extension(path) in _TYPESCRIPT_EXTENSIONS:
        return Dialect.TYPESCRIPT
    return Dialect.TSX


@lru_cache(maxsize=None)
def get_language(dialect: Dialect) -> Language:
    if dialect == Dialect.TYPESCRIPT:
        return Language(tree_sitter_typescript.language_typescript())
    return Language(tree_sitter_typescript.language_tsx())


@lru_cache(maxsize=None)
def get_parser(dialect: Dialect) -> Parser:
    return Parser(get_language(dialect))


def parse_source(source_code: str, dialect: Dialect = Dialect.TSX):
    """
    Parse source text and return the tree-sitter Tree.

    Tree-sitter always produces a tree, recovering from errors with ERROR and
    MISSING nodes. A tree containing any of those is rejected with ParseError
    so that a broken file is never half-analyzed.
    """
    tree = get_parser(dialect).parse(source_code.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        errors = find_error_nodes(root, max_errors=1)
        if errors:
            first = errors[0]
            line, col = node_position(first)
            if first.is_missing:
                raise ParseError(f"Missing '{first.type}'", line, col)
            raise ParseError(f"Unexpected {short_text(node_text(first)) or 'input'!r}", line, col)
        raise ParseError("Syntax error")
    return tree


def parse_file_source(path: str, source_code: str):
    """Parse a file's text with the dialect chosen from its extension."""
    return parse_source(source_code, dialect_for_path(path))
