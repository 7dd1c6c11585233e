"""
CLI utilities: environment validation, catalog/scanner setup, debug commands.
"""

from cli.helpers import (
    validate_environment,
    resolve_target,
    load_catalog,
    make_scanner,
    scan_path,
)
from cli.debug import (
    dump_ast_tree,
    dump_ast_impl,
)

__all__ = [
    "validate_environment",
    "resolve_target",
    "load_catalog",
    "make_scanner",
    "scan_path",
    "dump_ast_tree",
    "dump_ast_impl",
]
