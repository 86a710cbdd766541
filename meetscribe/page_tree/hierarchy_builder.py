"""Hierarchy builder for Confluence content trees.

This module turns the flat item list returned by a listing source into a tree:
it links children to parents, flags items that have children, computes each
item's depth by walking parent references, and orders the result for display.

Parent references that do not resolve inside the fetched collection make an
item a root. Depth is computed with an explicit loop, not recursion; a chain
that revisits an item (a parent cycle) or exceeds the depth bound yields 0.
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..models import PageItem
from .collation import compare_titles, title_key

logger = logging.getLogger(__name__)

# Deepest ancestor chain walked before an item is treated as a root
MAX_DEPTH = 1000

# Items up to this depth are offered as publish destinations by the
# structural filter even when they are plain pages without children
DESTINATION_MAX_LEVEL = 2


@dataclass
class HierarchyResult:
    """Output of the hierarchy builder.

    Attributes:
        items: Annotated items in display order
        children: Parent ID -> child IDs ordered by title, then position
    """
    items: List[PageItem]
    children: Dict[str, List[str]] = field(default_factory=dict)

    def get(self, item_id: str) -> Optional[PageItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


def compare_for_display(a: PageItem, b: PageItem) -> int:
    """Order items: folders first, then depth, then position, then title.

    Position only decides when both items carry one; otherwise titles are
    compared with locale-aware, case- and accent-insensitive collation.
    """
    if a.is_folder != b.is_folder:
        return -1 if a.is_folder else 1
    if a.level != b.level:
        return -1 if a.level < b.level else 1
    if a.position is not None and b.position is not None and a.position != b.position:
        return -1 if a.position < b.position else 1
    return compare_titles(a.title, b.title)


def _sibling_key(item: PageItem):
    position = item.position if item.position is not None else float('inf')
    return (title_key(item.title), position)


class HierarchyBuilder:
    """Builds parent/child structure and depths for a flat item list.

    Example:
        >>> result = HierarchyBuilder().build(items)
        >>> [(item.title, item.level) for item in result.items]
        [('Root', 0), ('Child', 1)]
    """

    def __init__(self, max_depth: int = MAX_DEPTH):
        """Initialize the builder.

        Args:
            max_depth: Longest ancestor chain followed before giving up
        """
        self._max_depth = max_depth

    def build(self, items: Iterable[PageItem]) -> HierarchyResult:
        """Annotate items with level / has_children and build the adjacency map.

        Args:
            items: Items in any order; duplicates by ID keep the first occurrence

        Returns:
            HierarchyResult with items in display order
        """
        index: Dict[str, PageItem] = {}
        for item in items:
            if item.id in index:
                logger.debug(f"Ignoring duplicate content item {item.id} ('{item.title}')")
                continue
            index[item.id] = item

        children: Dict[str, List[PageItem]] = {}
        for item in index.values():
            if item.parent_id is not None and item.parent_id in index and item.parent_id != item.id:
                children.setdefault(item.parent_id, []).append(item)

        for item in index.values():
            item.has_children = item.id in children
            item.level = self.compute_depth(item.id, index)

        adjacency = {
            parent_id: [child.id for child in sorted(kids, key=_sibling_key)]
            for parent_id, kids in children.items()
        }

        ordered = sorted(index.values(), key=functools.cmp_to_key(compare_for_display))

        if ordered:
            distribution = {}
            for item in ordered:
                distribution[item.level] = distribution.get(item.level, 0) + 1
            logger.info(
                f"Built hierarchy of {len(ordered)} items; levels: "
                + ", ".join(f"L{level}:{count}" for level, count in sorted(distribution.items()))
            )

        return HierarchyResult(items=ordered, children=adjacency)

    def compute_depth(self, item_id: str, index: Dict[str, PageItem]) -> int:
        """Count ancestors of an item by walking parent references upward.

        Args:
            item_id: ID of the item to measure
            index: All items by ID

        Returns:
            Number of resolvable ancestors; 0 for roots, for unknown IDs, and
            for any item whose ancestor chain revisits itself
        """
        current = index.get(item_id)
        if current is None:
            return 0

        visited = {item_id}
        depth = 0
        while current.parent_id is not None and current.parent_id in index:
            parent_id = current.parent_id
            if parent_id in visited:
                logger.warning(f"Parent cycle detected at content item {item_id}; treating it as a root")
                return 0
            if depth >= self._max_depth:
                logger.warning(f"Content item {item_id} is nested deeper than {self._max_depth}; treating it as a root")
                return 0
            visited.add(parent_id)
            current = index[parent_id]
            depth += 1
        return depth


def destination_candidates(items: Iterable[PageItem]) -> List[PageItem]:
    """Keep items that look like containers: folders, parents, or shallow pages.

    This is a display convenience for choosing where to publish, not a content
    classification: a shallow page without children is still a page.
    """
    return [
        item for item in items
        if item.is_folder or item.has_children or item.level <= DESTINATION_MAX_LEVEL
    ]


def children_of(result: HierarchyResult, parent_id: str) -> List[PageItem]:
    """Return the direct children of ``parent_id`` in adjacency order."""
    by_id = {item.id: item for item in result.items}
    return [by_id[child_id] for child_id in result.children.get(parent_id, [])]
