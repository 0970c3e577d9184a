"""Convenience endpoints on top of PersonioApiClient."""

from typing import Any, Dict, Mapping, Optional, Union

from .core.api_client import PersonioApiClient
from .core.messages import InboundResponse

Id = Union[int, str]


class SimpleApi:
    """
    Thin wrapper decoding the JSON envelope of common endpoints.

    Example:
        >>> api = SimpleApi.with_api_client(PersonioApiClient.with_credentials("abc", "xyz"))
        >>> employees = api.get_employees()["data"]
    """

    def __init__(self, client: PersonioApiClient):
        self._client = client

    @classmethod
    def with_api_client(cls, client: PersonioApiClient) -> 'SimpleApi':
        return cls(client)

    def get_employees(self) -> Dict[str, Any]:
        return self._get('company/employees')

    def get_employee(self, employee_id: Id) -> Dict[str, Any]:
        return self._get(f'company/employees/{employee_id}')

    def get_attendances(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._get('company/attendances', params)

    def create_attendance(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return self._decode(self._client.post('company/attendances', data))

    def delete_attendance(self, attendance_id: Id) -> None:
        self._client.delete(f'company/attendances/{attendance_id}')

    def get_time_off_types(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._get('company/time-off-types', params)

    def get_time_offs(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._get('company/time-offs', params)

    def get_time_off(self, time_off_id: Id) -> Dict[str, Any]:
        return self._get(f'company/time-offs/{time_off_id}')

    def create_time_off(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return self._decode(self._client.post('company/time-offs', data))

    def delete_time_off(self, time_off_id: Id) -> None:
        self._client.delete(f'company/time-offs/{time_off_id}')

    def _get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self._decode(self._client.get(endpoint, params))

    @staticmethod
    def _decode(response: InboundResponse) -> Dict[str, Any]:
        # envelope was validated by the client, so the body is JSON here
        return response.json()
