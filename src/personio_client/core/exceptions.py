"""
Иерархия исключений Personio Client.

Классификация:
- InvalidArgument - некорректные входные данные, обнаружены до любого I/O
- ApiClientError - запрос ушел (или пытался уйти) к API и завершился неудачей
- ConfigurationError - некорректная конфигурация клиента
- TransportError - ошибка уровня соединения, поднимается только транспортом
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .messages import InboundResponse, OutboundRequest

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

DEFAULT_ERROR_MESSAGE = "An API error occurred"


class PersonioException(Exception):
    """Базовое исключение Personio Client."""

    def __init__(self, message: str, code: int = 0):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidArgument(PersonioException, ValueError):
    """
    Некорректный аргумент вызывающей стороны.

    Поднимается до отправки запроса: запрос не уходит в сеть.
    """

    @classmethod
    def because(cls, reason: str, cause: Optional[BaseException] = None) -> "InvalidArgument":
        error = cls(reason, _code_of(cause) if cause is not None else 0)
        error.__cause__ = cause
        return error


class ConfigurationError(PersonioException, ValueError):
    """Ошибка конфигурации."""


class TransportError(PersonioException):
    """
    Ошибка транспорта: соединение, таймаут, DNS, SSL.

    Ответа от сервера нет. Клиент никогда не отдает это исключение
    наружу, а оборачивает его в ApiClientError.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
    """

    def __init__(self, message: str, url: Optional[str] = None, code: int = 0):
        self.url = url
        super().__init__(message, code)


class InvalidResponseError(PersonioException):
    """Тело ответа не является валидным JSON."""


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# API ERROR
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ApiClientError(PersonioException):
    """
    Ошибка обращения к API.

    Один тип для всех неудач: наличие ответа отличает "сервер отклонил
    запрос" от "запрос не дошел до сервера".

    Args:
        request: Исходный запрос
        response: Ответ сервера (None для ошибок транспорта)
        message: Сообщение (по умолчанию из ответа или причины)
        code: Код ошибки (по умолчанию из ответа или причины)
        cause: Исходное исключение

    Defaults:
        - есть ответ: reason phrase и HTTP статус
        - есть только причина: str(cause) и код причины
        - иначе: "An API error occurred" и 0

    Examples:
        >>> error = ApiClientError.from_request_and_response(request, response)
        >>> error.has_response
        True
        >>> error.code
        5
    """

    def __init__(
        self,
        request: "OutboundRequest",
        response: Optional["InboundResponse"] = None,
        message: Optional[str] = None,
        code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        self.request = request
        self.response = response
        self.cause = cause

        if response is not None:
            message = message or response.reason
            code = code or response.status_code
        elif cause is not None:
            message = message or str(cause)
            code = code or _code_of(cause)
        else:
            message = message or DEFAULT_ERROR_MESSAGE
            code = 0

        super().__init__(message or DEFAULT_ERROR_MESSAGE, code or 0)
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def from_request_and_reason(
        cls,
        request: "OutboundRequest",
        reason: str,
        cause: Optional[BaseException] = None,
    ) -> "ApiClientError":
        """Ошибка без ответа сервера (транспорт, токен)."""
        return cls(request, None, reason, None, cause)

    @classmethod
    def from_request_and_response(
        cls,
        request: "OutboundRequest",
        response: "InboundResponse",
        cause: Optional[BaseException] = None,
    ) -> "ApiClientError":
        """
        Ошибка с ответом сервера.

        Тело разбирается защищенно: битый JSON дает пустой envelope.
        """
        envelope = _error_envelope(response)
        message = envelope.get("message")
        code = envelope.get("code")

        return cls(
            request,
            response,
            message if isinstance(message, str) else None,
            code if isinstance(code, int) and not isinstance(code, bool) else None,
            cause,
        )

    @property
    def has_response(self) -> bool:
        return self.response is not None

    def __repr__(self) -> str:
        status = self.response.status_code if self.response is not None else None
        return (
            f"{self.__class__.__name__}(message={self.message!r}, code={self.code}, "
            f"method={self.request.method!r}, status={status})"
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _code_of(cause: BaseException) -> int:
    """Числовой код исключения: code, errno или 0."""
    for attr in ("code", "errno"):
        value = getattr(cause, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


def _error_envelope(response: "InboundResponse") -> Dict[str, Any]:
    try:
        data = response.json()
    except InvalidResponseError:
        return {}

    if not isinstance(data, dict):
        return {}

    error = data.get("error")
    return error if isinstance(error, dict) else {}
