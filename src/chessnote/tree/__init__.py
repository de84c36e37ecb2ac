"""Game tree model and navigation cursor."""

from chessnote.tree.cursor import TreeCursor
from chessnote.tree.errors import InvalidPath, OutOfRange, TreeError
from chessnote.tree.node import (
    Path,
    Shape,
    TreeNode,
    append_child,
    create_node,
    find_node,
    find_parent,
    has_more_priority,
    insert_variation,
    iter_main_line,
    iter_nodes,
    main_line_path,
    node_count,
    promote_to_main_line,
    promote_variation,
    remove_annotation,
    remove_node,
    set_annotation,
    variation_line,
)

__all__ = [
    "InvalidPath",
    "OutOfRange",
    "Path",
    "Shape",
    "TreeCursor",
    "TreeError",
    "TreeNode",
    "append_child",
    "create_node",
    "find_node",
    "find_parent",
    "has_more_priority",
    "insert_variation",
    "iter_main_line",
    "iter_nodes",
    "main_line_path",
    "node_count",
    "promote_to_main_line",
    "promote_variation",
    "remove_annotation",
    "remove_node",
    "set_annotation",
    "variation_line",
]
