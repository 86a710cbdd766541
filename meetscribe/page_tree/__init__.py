"""Content tree building for Confluence spaces.

Turns the flat page and folder listings returned by Confluence into a tree
with depths, child flags and a display order.
"""

from .collation import compare_titles, configure_collation, title_key
from .hierarchy_builder import (
    HierarchyBuilder,
    HierarchyResult,
    children_of,
    compare_for_display,
    destination_candidates,
)

__all__ = [
    'HierarchyBuilder',
    'HierarchyResult',
    'children_of',
    'compare_for_display',
    'compare_titles',
    'configure_collation',
    'destination_candidates',
    'title_key',
]
