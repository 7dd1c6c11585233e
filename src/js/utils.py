"""
Shared utilities for JavaScript/TypeScript parse trees.
"""

from typing import List, Optional, Tuple

# Limit for snippets shown in error messages and AST dumps
MAX_SNIPPET_LENGTH = 60


def node_text(node) -> str:
    """
    Text covered by a node.

    Tree-sitter works on UTF-8 bytes, so the node's own byte slice is decoded
    rather than slicing the Python string with byte offsets.
    """
    raw = node.text
    if raw is None:
        return ""
    return raw.decode("utf-8", errors="replace")


def node_position(node) -> Tuple[int, int]:
    """1-indexed (line, column) of a node's start."""
    row, col = node.start_point[0], node.start_point[1]
    return row + 1, col + 1


def short_text(text: str, limit: int = MAX_SNIPPET_LENGTH) -> str:
    text = text.replace("\n", "\\n")
    if len(text) > limit:
        text = text[:limit] + "..."
    return text


def find_error_nodes(root, max_errors: Optional[int] = None) -> List:
    """
    Collect ERROR and MISSING nodes in document order.

    Only subtrees flagged with has_error are descended into, so a clean tree
    costs a single check at the root.
    """
    errors: List = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
            if max_errors is not None and len(errors) >= max_errors:
                break
            continue
        if node.has_error:
            stack.extend(reversed(node.children))
    return errors
