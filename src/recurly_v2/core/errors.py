"""Jerarquía de errores del cliente.

Por qué un módulo propio:
- El llamador captura tipos distintos (configuración, red, 404, 422, 5xx) sin
  inspeccionar códigos HTTP a mano.
- El transporte traduce el cuerpo de error del servidor a un objeto estructurado.
"""

from __future__ import annotations

from typing import Any


class RecurlyError(Exception):
    """Raíz de todos los errores del cliente."""


class ConfigurationError(RecurlyError):
    """Raised when the client has not been configured (or was configured wrong)."""


class TransportError(RecurlyError):
    """La petición no llegó a obtener respuesta (DNS, conexión, timeout)."""


class ImmutableAttributeError(RecurlyError, AttributeError):
    """Assignment to an identifier that can no longer change."""


class APIError(RecurlyError):
    """Respuesta HTTP no exitosa de la API."""

    status: int | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        symbol: str | None = None,
        description: str | None = None,
        details: str | None = None,
        body: bytes | str | None = None,
    ) -> None:
        if status is not None:
            self.status = status
        self.symbol = symbol
        self.description = description
        self.details = details
        self.body = body
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        if self.symbol and self.description:
            text = f"{self.symbol}: {self.description}"
        else:
            text = self.description or self.symbol or f"HTTP {self.status}"
        if self.details:
            text = f"{text} {self.details}"
        return text


class ClientError(APIError):
    """Errores 4xx: el problema está en la petición."""


class BadRequestError(ClientError):
    status = 400


class UnauthorizedError(ClientError):
    status = 401


class PaymentRequiredError(ClientError):
    status = 402


class ForbiddenError(ClientError):
    status = 403


class NotFoundError(ClientError):
    status = 404


class NotAcceptableError(ClientError):
    status = 406


class PreconditionFailedError(ClientError):
    status = 412


class UnsupportedMediaTypeError(ClientError):
    status = 415


class ValidationError(ClientError):
    """422: el servidor rechazó uno o más campos.

    `errors` mapea nombre de campo -> lista de mensajes legibles.
    """

    status = 422

    def __init__(
        self,
        message: str | None = None,
        *,
        errors: dict[str, list[str]] | None = None,
        transaction_error: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        self.errors = dict(errors or {})
        self.transaction_error = dict(transaction_error or {})
        super().__init__(message, **kwargs)

    def _default_message(self) -> str:
        if not self.errors:
            return super()._default_message()
        parts = []
        for field, messages in self.errors.items():
            for msg in messages:
                parts.append(f"{field} {msg}")
        return "; ".join(parts)


class ServerError(APIError):
    """Errores 5xx."""


class InternalServerError(ServerError):
    status = 500


class BadGatewayError(ServerError):
    status = 502


class ServiceUnavailableError(ServerError):
    status = 503


class GatewayTimeoutError(ServerError):
    status = 504


class UnexpectedStatusError(APIError):
    """Código de estado fuera de la tabla conocida."""


class InvalidResourceError(RecurlyError):
    """Raised by the strict save/create variants when the record is invalid."""

    def __init__(self, record: Any) -> None:
        self.record = record
        self.errors: dict[str, list[str]] = dict(getattr(record, "errors", {}) or {})
        detail = "; ".join(f"{k} {m}" for k, msgs in self.errors.items() for m in msgs)
        super().__init__(f"{type(record).__name__} is invalid: {detail}" if detail else f"{type(record).__name__} is invalid")


ERROR_CLASSES: dict[int, type[APIError]] = {
    cls.status: cls
    for cls in (
        BadRequestError,
        UnauthorizedError,
        PaymentRequiredError,
        ForbiddenError,
        NotFoundError,
        NotAcceptableError,
        PreconditionFailedError,
        UnsupportedMediaTypeError,
        ValidationError,
        InternalServerError,
        BadGatewayError,
        ServiceUnavailableError,
        GatewayTimeoutError,
    )
}


def error_class_for_status(status: int) -> type[APIError]:
    """Clase de error para un código HTTP (fallback por rango)."""

    if status in ERROR_CLASSES:
        return ERROR_CLASSES[status]
    if 400 <= status < 500:
        return ClientError
    if 500 <= status < 600:
        return ServerError
    return UnexpectedStatusError
