"""
Environment-based configuration.

Example:
    >>> from personio_client.core.env_config import client_from_env
    >>> client = client_from_env(env_file=".env.production")
"""

from .settings import PersonioSettings
from .loader import load_settings, load_from_env, config_from_settings, client_from_env

__all__ = [
    "PersonioSettings",
    "load_settings",
    "load_from_env",
    "config_from_settings",
    "client_from_env",
]
