"""Unit tests for listing sources and the fallback chain."""

import pytest
from unittest.mock import Mock

from meetscribe.confluence_client.listing_sources import (
    CurrentApiSource,
    FallbackListing,
    LegacyApiSource,
)
from meetscribe.errors import RemoteListingError, UpstreamUnavailable, ValidationError
from meetscribe.models import PageItem, Space
from tests.fixtures import v1_content, v2_batch, v2_page


def routed_api(routes):
    """Create a mock API whose get_json answers by path.

    A route value that is an exception instance is raised instead.
    """
    api = Mock()

    def get_json(path, params=None):
        if path not in routes:
            raise RemoteListingError(path, 404, 'not found')
        value = routes[path]
        if isinstance(value, Exception):
            raise value
        return value

    api.get_json.side_effect = get_json
    return api


class TestCurrentApiSource:
    """Test cases for the REST API v2 source."""

    def test_list_spaces(self):
        api = routed_api({
            'api/v2/spaces': v2_batch([
                {'id': '1', 'key': 'TEAM', 'name': 'Team'},
                {'id': '2', 'key': 'DEV', 'name': 'Development'},
            ]),
        })

        spaces = CurrentApiSource(api).list_spaces()

        assert spaces == [Space(key='TEAM', name='Team', id='1'), Space(key='DEV', name='Development', id='2')]

    def test_list_content_resolves_space_id_and_maps_pages(self):
        api = routed_api({
            'rest/api/space/TEAM': {'id': 42, 'key': 'TEAM'},
            'api/v2/spaces/42/pages': v2_batch([
                v2_page('1', 'Root', position=10),
                v2_page('2', 'Child', parent_id='1', position='20'),
            ]),
            'api/v2/pages': v2_batch([]),
            'api/v2/folders': v2_batch([]),
        })

        items = CurrentApiSource(api).list_content('TEAM')

        assert items == [
            PageItem(id='1', title='Root', position=10),
            PageItem(id='2', title='Child', parent_id='1', parent_type='page', position=20),
        ]

    def test_folders_are_merged_and_deduplicated(self):
        folder = v2_page('9', 'Meetings', content_type='folder')
        api = routed_api({
            'rest/api/space/TEAM': {'id': '42'},
            'api/v2/spaces/42/pages': v2_batch([v2_page('1', 'Notes', parent_id='9', parent_type='folder')]),
            'api/v2/pages': v2_batch([v2_page('1', 'Notes'), folder]),
            'api/v2/folders': v2_batch([{'id': '9', 'title': 'Meetings'}]),
        })

        items = CurrentApiSource(api).list_content('TEAM')

        assert [(item.id, item.type) for item in items] == [('1', 'page'), ('9', 'folder')]
        assert items[0].parent_type == 'folder'

    def test_folder_lookup_failures_are_skipped(self):
        api = routed_api({
            'rest/api/space/TEAM': {'id': '42'},
            'api/v2/spaces/42/pages': v2_batch([v2_page('1', 'Root')]),
            'api/v2/pages': UpstreamUnavailable('Confluence'),
        })

        items = CurrentApiSource(api).list_content('TEAM')

        assert [item.id for item in items] == ['1']

    def test_page_listing_failure_propagates(self):
        api = routed_api({'rest/api/space/TEAM': {'id': '42'}})

        with pytest.raises(RemoteListingError):
            CurrentApiSource(api).list_content('TEAM')


class TestLegacyApiSource:
    """Test cases for the REST API v1 source."""

    def test_list_spaces(self):
        api = routed_api({
            'rest/api/space': {'results': [{'id': 7, 'key': 'OLD', 'name': 'Archive'}], '_links': {}},
        })

        assert LegacyApiSource(api).list_spaces() == [Space(key='OLD', name='Archive', id='7')]

    def test_parent_is_last_ancestor(self):
        api = routed_api({
            'rest/api/content': {
                'results': [
                    v1_content('1', 'Root'),
                    v1_content('2', 'Child', ['1']),
                    v1_content('3', 'Grandchild', ['1', '2']),
                ],
                '_links': {},
            },
        })

        items = LegacyApiSource(api).list_content('TEAM')

        assert [(item.id, item.parent_id, item.parent_type) for item in items] == [
            ('1', None, None),
            ('2', '1', 'page'),
            ('3', '2', 'page'),
        ]
        params = api.get_json.call_args[1]['params']
        assert params['spaceKey'] == 'TEAM'
        assert params['type'] == 'page'
        assert params['expand'] == 'ancestors'


class TestFallbackListing:
    """Test cases for FallbackListing."""

    def test_primary_non_2xx_returns_fallback_result(self):
        """A failing primary source falls through to the legacy source."""
        primary = Mock(spec=CurrentApiSource)
        primary.name = 'v2'
        primary.list_content.side_effect = RemoteListingError('api/v2/spaces/42/pages', 500)
        secondary = Mock(spec=LegacyApiSource)
        secondary.name = 'v1'
        secondary.list_content.return_value = []

        result = FallbackListing([primary, secondary]).list_content('TEAM')

        assert result == []
        secondary.list_content.assert_called_once_with('TEAM')

    def test_primary_success_skips_fallback(self):
        primary = Mock(spec=CurrentApiSource)
        primary.name = 'v2'
        primary.list_spaces.return_value = [Space(key='TEAM', name='Team', id='1')]
        secondary = Mock(spec=LegacyApiSource)

        result = FallbackListing([primary, secondary]).list_spaces()

        assert result == [Space(key='TEAM', name='Team', id='1')]
        secondary.list_spaces.assert_not_called()

    def test_all_sources_failing_raises_last_error(self):
        primary = Mock(spec=CurrentApiSource)
        primary.name = 'v2'
        primary.list_spaces.side_effect = UpstreamUnavailable('Confluence')
        secondary = Mock(spec=LegacyApiSource)
        secondary.name = 'v1'
        last_error = RemoteListingError('rest/api/space', 401, 'Unauthorized')
        secondary.list_spaces.side_effect = last_error

        with pytest.raises(RemoteListingError) as exc_info:
            FallbackListing([primary, secondary]).list_spaces()

        assert exc_info.value is last_error

    def test_non_listing_errors_are_not_swallowed(self):
        primary = Mock(spec=CurrentApiSource)
        primary.name = 'v2'
        primary.list_spaces.side_effect = ValidationError("bad space key")
        secondary = Mock(spec=LegacyApiSource)

        with pytest.raises(ValidationError):
            FallbackListing([primary, secondary]).list_spaces()

        secondary.list_spaces.assert_not_called()

    def test_requires_a_source(self):
        with pytest.raises(ValueError):
            FallbackListing([])


class TestSpaceIdLookup:
    """Test cases for resolving a space key to its v2 id."""

    def test_space_key_is_escaped(self):
        api = routed_api({
            'rest/api/space/A%3Fx': {'id': '42'},
            'api/v2/spaces/42/pages': v2_batch([]),
        })

        CurrentApiSource(api).list_content('A?x')

        assert api.get_json.call_args_list[0][0][0] == 'rest/api/space/A%3Fx'

    def test_missing_space_id_raises_listing_error(self):
        api = routed_api({'rest/api/space/TEAM': {'key': 'TEAM'}})

        with pytest.raises(RemoteListingError) as exc_info:
            CurrentApiSource(api).list_content('TEAM')

        assert exc_info.value.path == 'rest/api/space/TEAM'
        requested = [call[0][0] for call in api.get_json.call_args_list]
        assert requested == ['rest/api/space/TEAM']
