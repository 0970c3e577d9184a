# src/personio_client/utils/sanitizer.py
"""
Маскирование чувствительных данных для логов и сообщений об ошибках.

Клиент передает client_secret в query string запроса авторизации и токен
в заголовке Authorization: ни то, ни другое не должно попадать в логи.
"""

import re
from typing import Any, Dict
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

MASK = "***REDACTED***"

# Чувствительные ключи (case-insensitive, частичное совпадение)
SENSITIVE_KEYS = {
    'password', 'secret', 'token', 'authorization', 'auth', 'api_key',
    'apikey', 'credentials', 'cookie', 'session',
}

# Чувствительные query параметры (точное совпадение)
SENSITIVE_URL_PARAMS = {
    'client_id', 'client_secret', 'token', 'access_token', 'api_key', 'password',
}

SENSITIVE_PATTERNS = [
    # Bearer токены
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    # client_secret=value / token=value в строках
    (re.compile(r'((?:client_secret|token)=)([^\s&,;]+)', re.IGNORECASE), r'\1' + MASK),
]


def mask_sensitive_data(data: Any, mask: str = MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования
        mask: Строка-заменитель

    Returns:
        Копия данных с замаскированными полями

    Examples:
        >>> mask_sensitive_data({"Authorization": "Bearer abc", "Accept": "application/json"})
        {'Authorization': '***REDACTED***', 'Accept': 'application/json'}

        >>> mask_sensitive_data("POST https://api.personio.de/v1/auth?client_secret=xyz")
        'POST https://api.personio.de/v1/auth?client_secret=***REDACTED***'
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        return _mask_string(data, mask)

    if isinstance(data, dict):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def _mask_dict(data: Dict[Any, Any], mask: str) -> Dict[Any, Any]:
    result = {}
    for key, value in data.items():
        if _is_sensitive_key(str(key).lower()):
            result[key] = mask
        else:
            result[key] = mask_sensitive_data(value, mask)
    return result


def _mask_string(text: str, mask: str) -> str:
    result = text
    for pattern, replacement in SENSITIVE_PATTERNS:
        result = pattern.sub(replacement.replace(MASK, mask), result)
    return result


def _is_sensitive_key(key: str) -> bool:
    return any(sensitive in key for sensitive in SENSITIVE_KEYS)


def mask_url(url: str, mask: str = MASK) -> str:
    """
    Маскирует чувствительные query параметры в URL.

    Examples:
        >>> mask_url("https://api.personio.de/v1/auth?client_id=abc&client_secret=xyz")
        'https://api.personio.de/v1/auth?client_id=***REDACTED***&client_secret=***REDACTED***'
    """
    if not url:
        return url

    parts = urlsplit(url)
    if not parts.query:
        return url

    pairs = []
    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        if name.lower() in SENSITIVE_URL_PARAMS:
            value = mask
        pairs.append(f"{quote(name, safe='[]')}={quote(value, safe='*')}")

    return urlunsplit(parts._replace(query='&'.join(pairs)))
