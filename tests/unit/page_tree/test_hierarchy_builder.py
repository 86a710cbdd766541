"""Unit tests for page_tree.hierarchy_builder module."""

import functools

from meetscribe.models import PageItem
from meetscribe.page_tree.hierarchy_builder import (
    HierarchyBuilder,
    children_of,
    compare_for_display,
    destination_candidates,
)


class TestBuild:
    """Test cases for HierarchyBuilder.build."""

    def test_chain_depths_and_has_children(self):
        """A -> B -> C yields depths 0, 1, 2."""
        items = [
            PageItem(id='c', title='C', parent_id='b'),
            PageItem(id='a', title='A'),
            PageItem(id='b', title='B', parent_id='a'),
        ]

        result = HierarchyBuilder().build(items)

        assert [(item.id, item.level, item.has_children) for item in result.items] == [
            ('a', 0, True),
            ('b', 1, True),
            ('c', 2, False),
        ]

    def test_parent_cycle_yields_depth_zero(self):
        """A <-> B cycle yields depth 0 for both."""
        items = [
            PageItem(id='a', title='A', parent_id='b'),
            PageItem(id='b', title='B', parent_id='a'),
        ]

        result = HierarchyBuilder().build(items)

        assert result.get('a').level == 0
        assert result.get('b').level == 0

    def test_self_parent_is_root_without_children(self):
        result = HierarchyBuilder().build([PageItem(id='a', title='A', parent_id='a')])

        item = result.get('a')
        assert item.level == 0
        assert item.has_children is False
        assert result.children == {}

    def test_unknown_parent_makes_item_a_root(self):
        result = HierarchyBuilder().build([PageItem(id='a', title='A', parent_id='missing')])

        assert result.get('a').level == 0
        assert 'missing' not in result.children

    def test_duplicate_ids_keep_first_occurrence(self):
        items = [
            PageItem(id='a', title='First'),
            PageItem(id='a', title='Second'),
        ]

        result = HierarchyBuilder().build(items)

        assert [item.title for item in result.items] == ['First']

    def test_depth_bound_treats_deep_items_as_roots(self):
        items = [PageItem(id='0', title='Item 0')]
        items += [PageItem(id=str(i), title=f'Item {i}', parent_id=str(i - 1)) for i in range(1, 6)]

        result = HierarchyBuilder(max_depth=3).build(items)

        assert result.get('3').level == 3
        assert result.get('4').level == 0

    def test_folder_sorts_before_page_at_same_depth(self):
        """Folder "Zeta" comes before page "Alpha" at the same depth."""
        items = [
            PageItem(id='1', title='Alpha'),
            PageItem(id='2', title='Zeta', type='folder'),
        ]

        result = HierarchyBuilder().build(items)

        assert [item.title for item in result.items] == ['Zeta', 'Alpha']

    def test_adjacency_orders_siblings_by_title(self):
        items = [
            PageItem(id='root', title='Root'),
            PageItem(id='2', title='Gamma', parent_id='root', position=1),
            PageItem(id='3', title='Alpha', parent_id='root', position=3),
            PageItem(id='4', title='Beta', parent_id='root', position=2),
        ]

        result = HierarchyBuilder().build(items)

        assert result.children == {'root': ['3', '4', '2']}

    def test_empty_input(self):
        result = HierarchyBuilder().build([])

        assert result.items == []
        assert result.children == {}


class TestCompareForDisplay:
    """Test cases for compare_for_display ordering."""

    def sort(self, items):
        return sorted(items, key=functools.cmp_to_key(compare_for_display))

    def test_level_before_title(self):
        items = [
            PageItem(id='1', title='Alpha', level=1),
            PageItem(id='2', title='Zeta', level=0),
        ]

        assert [item.title for item in self.sort(items)] == ['Zeta', 'Alpha']

    def test_position_used_when_both_present(self):
        items = [
            PageItem(id='1', title='Alpha', position=5),
            PageItem(id='2', title='Beta', position=1),
        ]

        assert [item.title for item in self.sort(items)] == ['Beta', 'Alpha']

    def test_title_used_when_position_missing(self):
        items = [
            PageItem(id='1', title='Beta', position=1),
            PageItem(id='2', title='Alpha'),
        ]

        assert [item.title for item in self.sort(items)] == ['Alpha', 'Beta']


class TestFilters:
    """Test cases for destination_candidates and children_of."""

    def test_destination_candidates_keeps_folders_parents_and_shallow_items(self):
        items = [
            PageItem(id='1', title='Folder', type='folder', level=5),
            PageItem(id='2', title='Parent', level=4, has_children=True),
            PageItem(id='3', title='Shallow', level=2),
            PageItem(id='4', title='Deep leaf', level=3),
        ]

        assert [item.id for item in destination_candidates(items)] == ['1', '2', '3']

    def test_children_of_returns_direct_children_only(self):
        items = [
            PageItem(id='root', title='Root'),
            PageItem(id='a', title='A', parent_id='root'),
            PageItem(id='b', title='B', parent_id='a'),
        ]
        result = HierarchyBuilder().build(items)

        assert [item.id for item in children_of(result, 'root')] == ['a']
        assert children_of(result, 'b') == []
        assert children_of(result, 'unknown') == []


class TestTitleOrdering:
    """Title ordering ignores case and accents."""

    def test_mixed_case_titles_sort_alphabetically(self):
        items = [
            PageItem(id='1', title='Beta'),
            PageItem(id='2', title='alpha'),
        ]

        result = HierarchyBuilder().build(items)

        assert [item.title for item in result.items] == ['alpha', 'Beta']

    def test_adjacency_ignores_case_and_accents(self):
        items = [
            PageItem(id='root', title='Root'),
            PageItem(id='1', title='zeta', parent_id='root'),
            PageItem(id='2', title='Éclair', parent_id='root'),
            PageItem(id='3', title='Beta', parent_id='root'),
            PageItem(id='4', title='alpha', parent_id='root'),
        ]

        result = HierarchyBuilder().build(items)

        assert result.children == {'root': ['4', '3', '2', '1']}
