"""
End-to-end tests: PersonioApiClient on the default requests transport.
"""

import pytest
import responses

from personio_client import ApiClientError, PersonioApiClient, SimpleApi
from personio_client.core.config import BASE_URL

AUTH_URL = BASE_URL + 'auth'


@pytest.fixture
def api_client():
    client = PersonioApiClient.with_credentials('abc', 'xyz')
    yield client
    client.close()


class TestFullIntegration:

    @responses.activate
    def test_exchange_then_business_call(self, api_client):
        responses.add(responses.POST, AUTH_URL, json={'success': True, 'data': {'token': 'T1'}})
        responses.add(
            responses.GET, BASE_URL + 'company/employees',
            json={'success': True, 'data': [{'type': 'Employee', 'attributes': {}}]},
        )

        response = api_client.get('company/employees', {'limit': 1})

        assert response.json()['data'][0]['type'] == 'Employee'
        assert len(responses.calls) == 2

        auth_call, business_call = responses.calls
        assert auth_call.request.url == AUTH_URL + '?client_id=abc&client_secret=xyz'
        assert auth_call.request.body is None
        assert business_call.request.url == BASE_URL + 'company/employees?limit=1'
        assert business_call.request.headers['Authorization'] == 'Bearer T1'
        assert business_call.request.headers['Accept'] == 'application/json'
        assert business_call.request.headers['User-Agent'].startswith('personio-client')

    @responses.activate
    def test_rotation_and_error_mapping(self, api_client):
        responses.add(responses.POST, AUTH_URL, json={'success': True, 'data': {'token': 'T1'}})
        responses.add(
            responses.GET, BASE_URL + 'company/time-offs',
            json={'success': True, 'data': []},
            headers={'Authorization': 'Bearer T2'},
        )
        responses.add(
            responses.DELETE, BASE_URL + 'company/time-offs/42',
            json={'success': False, 'error': {'code': 404, 'message': 'Time-off not found'}},
            status=404,
        )

        api = SimpleApi.with_api_client(api_client)
        assert api.get_time_offs() == {'success': True, 'data': []}

        with pytest.raises(ApiClientError) as exc_info:
            api.delete_time_off(42)

        assert exc_info.value.message == 'Time-off not found'
        assert exc_info.value.code == 404
        assert responses.calls[2].request.headers['Authorization'] == 'Bearer T2'

    @responses.activate
    def test_unreachable_api(self, api_client):
        import requests

        responses.add(responses.POST, AUTH_URL, body=requests.exceptions.ConnectionError("Connection refused"))

        with pytest.raises(ApiClientError) as exc_info:
            api_client.get('company/employees')

        assert not exc_info.value.has_response
        assert 'Connection refused' in exc_info.value.message
