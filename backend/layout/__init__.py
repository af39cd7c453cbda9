"""Layout module - computes positions for task flow chart trees."""

from .tree_layout import compute_flowchart_layout, place_subtree, subtree_width

__all__ = ["compute_flowchart_layout", "place_subtree", "subtree_width"]
