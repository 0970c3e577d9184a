"""
Environment Configuration Examples.

Demonstrates loading client configuration from .env files and PERSONIO_* variables.
"""

from personio_client import ConfigurationError, SimpleApi, client_from_env, load_from_env


def show_config():
    """Load config only."""
    print("\n=== Config from environment ===")

    config = load_from_env(timeout_read=15)
    print(f"Base URL: {config.base_url}")
    print(f"Timeouts: {config.timeout.as_tuple()}")
    print(f"Logging: {config.logging}")


def client_with_json_logs():
    """Client with JSON logging, as configured by PERSONIO_LOG_* variables."""
    print("\n=== Client from environment ===")

    try:
        client = client_from_env(log_enabled=True, log_format="json", log_level="DEBUG")
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return

    with client:
        employees = SimpleApi(client).get_employees()
        print(f"Employees: {len(employees['data'])}")


if __name__ == "__main__":
    show_config()
    client_with_json_logs()
