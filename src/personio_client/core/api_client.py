# src/personio_client/core/api_client.py
from typing import Any, Mapping, Optional

from .authenticator import Authenticator, Credentials
from .config import PersonioClientConfig
from .error_handler import ErrorHandler
from .exceptions import ApiClientError, TransportError
from .logging import PersonioLogger
from .messages import InboundResponse, OutboundRequest
from .request_builder import build_request, build_url
from .token_cache import TokenCache
from .transport import RequestsTransport, Transport
from ..utils.sanitizer import mask_url


class PersonioApiClient:
    """
    Клиент Personio API.

    Каждый метод - это композиция:
        URL → запрос → аутентификация → отправка → классификация → обновление токена

    Features:
        - Ленивый обмен client credentials на токен (один раз на клиент)
        - Обновление токена из заголовка Authorization успешного ответа
        - Потокобезопасный кеш токена
        - Ошибки: только ApiClientError или InvalidArgument

    Example:
        >>> with PersonioApiClient.with_credentials("abc", "xyz") as client:
        ...     response = client.get("company/employees", {"limit": 10})
        ...     employees = response.json()["data"]
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: Optional[Transport] = None,
        config: Optional[PersonioClientConfig] = None,
    ):
        """
        Args:
            credentials: Client credentials
            transport: HTTP транспорт (по умолчанию RequestsTransport)
            config: PersonioClientConfig
        """
        self._config = config or PersonioClientConfig()
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport(
            timeout=self._config.timeout,
            verify_ssl=self._config.verify_ssl,
        )
        self._logger = PersonioLogger(self._config.logging)
        self._token_cache = TokenCache()
        self._authenticator = Authenticator(
            credentials,
            self._token_cache,
            send=self._send,
            base_url=self._config.base_url,
            user_agent=self._config.user_agent,
            logger=self._logger,
        )

    @classmethod
    def with_credentials(
        cls,
        client_id: str,
        client_secret: str,
        transport: Optional[Transport] = None,
        config: Optional[PersonioClientConfig] = None,
    ) -> 'PersonioApiClient':
        """
        Создать клиент из client_id и client_secret.

        Raises:
            InvalidArgument: Пустые или нестроковые credentials
        """
        return cls(Credentials(client_id, client_secret), transport=transport, config=config)

    @property
    def config(self) -> PersonioClientConfig:
        return self._config

    @property
    def token_cache(self) -> TokenCache:
        return self._token_cache

    # ==================== HTTP методы ====================

    def head(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> InboundResponse:
        """HEAD запрос с опциональными query параметрами."""
        return self.request('HEAD', endpoint, params=params)

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> InboundResponse:
        """GET запрос с опциональными query параметрами."""
        return self.request('GET', endpoint, params=params)

    def post(self, endpoint: str, data: Optional[Any] = None) -> InboundResponse:
        """POST запрос с опциональным JSON телом."""
        return self.request('POST', endpoint, data=data)

    def patch(self, endpoint: str, data: Optional[Any] = None) -> InboundResponse:
        """PATCH запрос с опциональным JSON телом."""
        return self.request('PATCH', endpoint, data=data)

    def delete(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> InboundResponse:
        """DELETE запрос с опциональными query параметрами."""
        return self.request('DELETE', endpoint, params=params)

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Any] = None,
    ) -> InboundResponse:
        """
        Выполнить аутентифицированный запрос.

        Args:
            method: HTTP метод
            endpoint: Путь относительно base_url
            params: Query параметры
            data: Данные для JSON тела

        Returns:
            Успешный ответ без изменений

        Raises:
            ApiClientError: Ошибка транспорта, HTTP ошибка или success = false
            InvalidArgument: Параметры или данные нельзя закодировать
        """
        url = build_url(endpoint, params, base_url=self._config.base_url)
        request = build_request(method, url, data=data, user_agent=self._config.user_agent)
        request = self._authenticator.authenticate(request)

        response = self._send(request)

        try:
            ErrorHandler.classify(request, response)
        except ApiClientError as e:
            self._logger.warning(
                "Request failed",
                method=request.method,
                url=mask_url(request.url),
                status_code=response.status_code,
                error_code=e.code,
                error_message=e.message,
            )
            raise

        # Токен обновляется только после успешной классификации
        if self._token_cache.refresh(response.header('Authorization')):
            self._logger.debug("Authorization token rotated", method=request.method, url=mask_url(request.url))

        return response

    def _send(self, request: OutboundRequest) -> InboundResponse:
        """Отправка без аутентификации; ошибки транспорта → ApiClientError."""
        self._logger.debug("Sending request", method=request.method, url=mask_url(request.url))

        try:
            response = self._transport.send(request)
        except TransportError as e:
            error = ErrorHandler.handle_transport_error(request, e)
            self._logger.warning(
                "Unable to reach API", method=request.method, url=mask_url(request.url), error_message=str(e)
            )
            raise error from e

        self._logger.debug(
            "Response received",
            method=request.method,
            url=mask_url(request.url),
            status_code=response.status_code,
        )
        return response

    # ==================== Управление жизненным циклом ====================

    def close(self):
        """Закрывает транспорт (если клиент его создал) и логгер."""
        if self._owns_transport:
            self._transport.close()
        self._logger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return (
            f"PersonioApiClient(base_url={self._config.base_url!r}, token={self._token_cache.state.value})"
        )
