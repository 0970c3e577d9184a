"""
Система конфигурации для Personio Client.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, TYPE_CHECKING

import requests

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig

BASE_URL = "https://api.personio.de/v1/"

USER_AGENT = "personio-client (https://pypi.org/project/personio-client/)"


def default_user_agent() -> str:
    """Product token + python-requests token."""
    return " ".join([USER_AGENT, requests.utils.default_user_agent()])


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов транспорта.

    Клиент сам таймауты не применяет: их использует RequestsTransport.

    Args:
        connect: Таймаут подключения (сек)
        read: Таймаут чтения данных (сек)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5.0
    read: float = 30.0

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ConfigurationError("connect timeout must be positive")
        if self.read <= 0:
            raise ConfigurationError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class PersonioClientConfig:
    """
    Главная конфигурация клиента.

    Args:
        base_url: Базовый URL API (должен заканчиваться на "/")
        timeout: Таймауты транспорта по умолчанию
        verify_ssl: Проверять SSL сертификаты
        user_agent: Значение заголовка User-Agent
        logging: Конфигурация логирования (None = модульный логгер)

    Examples:
        >>> PersonioClientConfig()
        >>> PersonioClientConfig.create(timeout=10, verify_ssl=False)
    """
    base_url: str = BASE_URL
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    verify_ssl: bool = True
    user_agent: str = field(default_factory=default_user_agent)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация."""
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        if not self.base_url.endswith("/"):
            raise ConfigurationError(
                f"base_url must end with '/', got {self.base_url!r}"
            )
        if not self.user_agent:
            raise ConfigurationError("user_agent must not be empty")

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'PersonioClientConfig':
        """
        Создать конфиг из простых значений.

        Args:
            base_url: Базовый URL (по умолчанию BASE_URL)
            timeout: Таймаут чтения (сек)
            connect_timeout: Таймаут подключения (сек)
            verify_ssl: Проверять SSL
            user_agent: Переопределить User-Agent
            logging: LoggingConfig

        Examples:
            >>> PersonioClientConfig.create(timeout=10)
        """
        defaults = TimeoutConfig()
        timeout_config = TimeoutConfig(
            connect=connect_timeout if connect_timeout is not None else defaults.connect,
            read=timeout if timeout is not None else defaults.read,
        )

        return cls(
            base_url=base_url or BASE_URL,
            timeout=timeout_config,
            verify_ssl=verify_ssl,
            user_agent=user_agent or default_user_agent(),
            logging=logging,
        )
