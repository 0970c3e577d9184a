# src/personio_client/core/error_handler.py

from typing import Any

from .exceptions import ApiClientError, InvalidResponseError, TransportError
from .messages import InboundResponse, OutboundRequest
from ..utils.sanitizer import mask_url


class ErrorHandler:
    """
    Классификатор результатов отправки запроса.

    Порядок проверок важен:
        1. Ошибка транспорта (ответа нет)
        2. HTTP статус >= 400
        3. Флаг success в envelope (API может вернуть ошибку со статусом 2xx)
        4. Успех - ответ возвращается без изменений
    """

    @staticmethod
    def handle_transport_error(request: OutboundRequest, error: TransportError) -> ApiClientError:
        """Оборачивает ошибку транспорта в ApiClientError без ответа"""
        reason = (
            f"Unable to send {request.method} request to {mask_url(request.url)}: "
            f"{error.message}"
        )
        return ApiClientError.from_request_and_reason(request, reason, error)

    @staticmethod
    def classify(request: OutboundRequest, response: InboundResponse) -> InboundResponse:
        """
        Проверяет ответ и возвращает его, если запрос успешен.

        Raises:
            ApiClientError: HTTP ошибка или бизнес-ошибка из envelope
        """
        if response.status_code >= 400:
            raise ApiClientError.from_request_and_response(request, response)

        # HEAD ответы не имеют тела
        if request.method == 'HEAD':
            return response

        if not ErrorHandler.is_successful(response):
            raise ApiClientError.from_request_and_response(request, response)

        return response

    @staticmethod
    def is_successful(response: InboundResponse) -> bool:
        """Envelope содержит success = true"""
        try:
            data: Any = response.json()
        except InvalidResponseError:
            return False

        return isinstance(data, dict) and bool(data.get('success', False))
