"""Tests for RequestsTransport."""

import threading

import pytest
import requests
import responses

from personio_client.core.config import BASE_URL, TimeoutConfig
from personio_client.core.exceptions import TransportError
from personio_client.core.messages import OutboundRequest
from personio_client.core.transport import RequestsTransport

URL = BASE_URL + 'company/employees'


class TestRequestsTransport:

    @responses.activate
    def test_send_returns_inbound_response(self):
        responses.add(
            responses.GET, URL,
            json={'success': True, 'data': []},
            headers={'Authorization': 'Bearer T2'},
            status=200,
        )

        with RequestsTransport() as transport:
            response = transport.send(OutboundRequest('GET', URL, headers={'Accept': 'application/json'}))

        assert response.status_code == 200
        assert response.reason == 'OK'
        assert response.header('authorization') == 'Bearer T2'
        assert response.json() == {'success': True, 'data': []}
        assert responses.calls[0].request.headers['Accept'] == 'application/json'

    @responses.activate
    def test_error_status_is_not_raised(self):
        responses.add(responses.GET, URL, json={'error': {'code': 5}}, status=404)

        response = RequestsTransport().send(OutboundRequest('GET', URL))

        assert response.status_code == 404
        assert response.reason == 'Not Found'

    @responses.activate
    def test_body_is_sent(self):
        responses.add(responses.POST, URL, json={'success': True}, status=200)

        RequestsTransport().send(OutboundRequest(
            'POST', URL, headers={'Content-Type': 'application/json'}, body=b'{"a": 1}'
        ))

        assert responses.calls[0].request.body == b'{"a": 1}'

    @pytest.mark.parametrize('exception, prefix', [
        (requests.exceptions.ConnectionError("refused"), 'Connection error'),
        (requests.exceptions.ReadTimeout("too slow"), 'Request timed out'),
        (requests.exceptions.SSLError("bad certificate"), 'SSL error'),
        (requests.exceptions.InvalidURL("bad url"), 'Request failed'),
    ])
    def test_requests_exceptions_become_transport_errors(self, mock_responses, exception, prefix):
        mock_responses.add(responses.GET, URL, body=exception)

        with pytest.raises(TransportError) as exc_info:
            RequestsTransport().send(OutboundRequest('GET', URL))

        assert exc_info.value.message.startswith(prefix)
        assert exc_info.value.url == URL
        assert exc_info.value.__cause__ is exception

    def test_timeout_config(self):
        transport = RequestsTransport(timeout=TimeoutConfig(connect=2, read=7), verify_ssl=False)

        assert transport.timeout.as_tuple() == (2, 7)
        assert transport.verify_ssl is False

    def test_session_per_thread(self):
        transport = RequestsTransport()
        sessions = []

        def grab():
            sessions.append(transport.session)

        thread = threading.Thread(target=grab)
        thread.start()
        thread.join()
        grab()

        assert sessions[0] is not sessions[1]
        assert transport.session is sessions[1]

        transport.close()
        assert transport._session_manager.get_active_sessions_count() == 0
