"""
Basic Personio Client Usage Examples

Demonstrates authenticated GET, POST and DELETE requests.
"""

import os

from personio_client import ApiClientError, PersonioApiClient, SimpleApi


def list_employees(client: PersonioApiClient):
    """Raw GET request."""
    print("\n=== List employees ===")

    response = client.get("company/employees", {"limit": 5})
    print(f"Status: {response.status_code}")
    for employee in response.json()["data"]:
        print(f"  {employee['attributes']['id']['value']}")


def attendances_for_employees(api: SimpleApi):
    """GET with list parameters."""
    print("\n=== Attendances ===")

    data = api.get_attendances({
        "employees": [1, 2],
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
    })
    print(f"Attendances: {len(data['data'])}")


def create_and_delete_time_off(api: SimpleApi):
    """POST then DELETE."""
    print("\n=== Time-off round trip ===")

    created = api.create_time_off({
        "employee_id": 1,
        "time_off_type_id": 2,
        "start_date": "2024-02-01",
        "end_date": "2024-02-02",
        "half_day_start": False,
        "half_day_end": False,
    })
    period_id = created["data"]["attributes"]["id"]
    print(f"Created: {period_id}")

    api.delete_time_off(period_id)
    print("Deleted")


def error_handling(client: PersonioApiClient):
    """ApiClientError carries code, message and the response."""
    print("\n=== Error handling ===")

    try:
        client.get("company/employees/0")
    except ApiClientError as e:
        print(f"Code: {e.code}, message: {e.message}, has response: {e.has_response}")


if __name__ == "__main__":
    with PersonioApiClient.with_credentials(
        os.environ["PERSONIO_CLIENT_ID"],
        os.environ["PERSONIO_CLIENT_SECRET"],
    ) as client:
        api = SimpleApi(client)

        list_employees(client)
        attendances_for_employees(api)
        create_and_delete_time_off(api)
        error_handling(client)
