"""
Debug CLI commands: AST dump for files whose detection looks wrong.
"""

from typing import Iterable

from core.utils import error
from js.parse import dialect_for_path, get_parser
from js.utils import find_error_nodes, node_position, node_text, short_text
from scanner import read_source


def dump_ast_tree(root, max_depth: int = 30) -> None:
    """Print the tree-sitter AST structure for debugging."""

    def print_node(node, depth: int = 0):
        if depth > max_depth:
            return

        indent = "  " * depth
        text = short_text(node_text(node))
        line, col = node_position(node)
        marker = "" if node.is_named else " (anon)"

        print(f"{indent}{node.type}{marker} [{line}:{col}] {text!r}")

        for child in node.children:
            print_node(child, depth + 1)

    print_node(root)


def dump_ast_impl(paths: Iterable[str]) -> None:
    """
    Dump the parse tree of each file, including trees with errors.

    Parses without the error check in js.parse so that the ERROR nodes are
    visible in the dump.
    """
    for path in paths:
        try:
            source_code = read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            error(f"Failed to read {path}: {e}")
            continue

        tree = get_parser(dialect_for_path(path)).parse(source_code.encode("utf-8"))
        print(f"\n=== AST for {path} ===")
        dump_ast_tree(tree.root_node)

        errors = find_error_nodes(tree.root_node)
        if errors:
            error(f"PARSER ERRORS FOUND in {path}: {len(errors)} node(s)")
            for err_node in errors:
                line, col = node_position(err_node)
                kind = "MISSING" if err_node.is_missing else "ERROR"
                error(f"  {kind} [{line}:{col}] {short_text(node_text(err_node))!r}")
        print("=== End AST ===")

