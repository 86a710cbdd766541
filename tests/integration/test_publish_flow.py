"""Integration tests: HTTP request -> services -> Confluence client.

Only the atlassian Confluence client is mocked; routing, the services, the
hierarchy builder, the storage formatter and error translation run for real.
"""

import pytest
from unittest.mock import Mock, patch

from bs4 import BeautifulSoup

from meetscribe.web import create_app
from tests.fixtures import CREATED_PAGE, make_response, sample_transcript_dict, v1_content


@pytest.fixture
def mock_confluence_client():
    with patch('meetscribe.confluence_client.api_wrapper.Confluence') as mock_confluence:
        client = Mock()
        mock_confluence.return_value = client
        yield client


@pytest.fixture
def client(settings, mock_confluence_client):
    return create_app(settings, transcription_service=Mock()).test_client()


class TestPublishFlow:
    """End-to-end publishing of a transcript."""

    def test_upload_returns_page_id_title_and_url(self, client, mock_confluence_client):
        mock_confluence_client.post.return_value = make_response(200, CREATED_PAGE)

        response = client.post('/api/confluence/upload', json={'transcript': sample_transcript_dict()})

        assert response.status_code == 200
        assert response.get_json() == {
            'success': True,
            'data': {'pageId': '123', 'title': 'T', 'url': 'https://test.atlassian.net/wiki/x'},
        }

        data = mock_confluence_client.post.call_args[1]['data']
        assert data['space'] == {'key': 'TEAM'}
        soup = BeautifulSoup(data['body']['storage']['value'], 'html.parser')
        participants = soup.find('h2', string='Participants').find_next_sibling('ul')
        assert [li.get_text() for li in participants.find_all('li')] == ['Kim', 'Lee']

    def test_rejected_page_is_502(self, client, mock_confluence_client):
        mock_confluence_client.post.return_value = make_response(400, 'A page with this title already exists')

        response = client.post('/api/confluence/upload', json={'transcript': sample_transcript_dict()})

        assert response.status_code == 502
        assert 'already exists' in response.get_json()['error']


class TestListingFlow:
    """End-to-end listing with fallback from REST API v2 to v1."""

    def test_v2_failure_falls_back_to_v1(self, client, mock_confluence_client):
        def get(path, params=None, advanced_mode=False):
            if path == 'rest/api/space/TEAM':
                return make_response(200, {'id': 42, 'key': 'TEAM'})
            if path.startswith('api/v2/'):
                return make_response(500, 'Internal Server Error')
            if path == 'rest/api/content':
                return make_response(200, {
                    'results': [
                        v1_content('2', 'Child', ['1']),
                        v1_content('1', 'Root'),
                    ],
                    '_links': {},
                })
            return make_response(404, 'Not Found')

        mock_confluence_client.get.side_effect = get

        response = client.get('/api/confluence/spaces/TEAM/pages')

        assert response.status_code == 200
        assert [(item['id'], item['level'], item['hasChildren']) for item in response.get_json()['data']] == [
            ('1', 0, True),
            ('2', 1, False),
        ]

    def test_both_sources_failing_is_502(self, client, mock_confluence_client):
        mock_confluence_client.get.return_value = make_response(401, 'Unauthorized')

        response = client.get('/api/confluence/spaces')

        assert response.status_code == 502
        assert response.get_json()['success'] is False
