"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers, autenticación y logging en un único punto.
- Traduce respuestas no exitosas a la jerarquía de `core.errors`.
- Facilita testeo: el builder acepta un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping
from xml.etree import ElementTree

import httpx

from recurly_v2.adapters.codecs import get_codec
from recurly_v2.core import config
from recurly_v2.core.config import AppSettings
from recurly_v2.core.errors import (
    APIError,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
    error_class_for_status,
)
from recurly_v2.core.interfaces.codec import Codec, Payload
from recurly_v2.core.log import get_logger, log

SENSITIVE_FIELDS = frozenset(
    {
        "number",
        "verification_value",
        "account_number",
        "routing_number",
        "iban",
        "password",
    }
)
REDACTED = "[REDACTED]"


def build_client(
    settings: AppSettings | None = None,
    *,
    base_url: str,
    api_key: str,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers/auth para que todas las llamadas se comporten igual.
    - Punto único para inyectar un transporte en tests.
    """

    settings = settings or config.get_settings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "X-Api-Version": settings.api_version,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=base_url,
        # La API key viaja como usuario de Basic auth, con password vacío.
        auth=httpx.BasicAuth(api_key, ""),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


def redact(payload: Any, sensitive: frozenset[str] = SENSITIVE_FIELDS) -> Any:
    if isinstance(payload, Mapping):
        return {
            key: (REDACTED if key in sensitive and value is not None else redact(value, sensitive))
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact(item, sensitive) for item in payload]
    return payload


class ApiClient:
    """Cliente HTTP de la API v2.

    Los valores explícitos (`subdomain`, `api_key`) ganan; el resto se resuelve
    en cada petición contra `core.config`, así los overrides por hilo aplican.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        subdomain: str | None = None,
        api_key: str | None = None,
        content_format: str | None = None,
    ) -> None:
        self._settings = settings
        self._subdomain = subdomain
        self._api_key = api_key
        self._content_format = content_format

    @property
    def settings(self) -> AppSettings:
        return self._settings or config.get_settings()

    @property
    def codec(self) -> Codec:
        return get_codec(self._content_format or self.settings.content_format)

    @property
    def subdomain(self) -> str:
        return self._subdomain or config.subdomain()

    @property
    def base_url(self) -> str:
        return f"https://{self.subdomain}.{self.settings.api_domain}/v2/"

    def request(
        self,
        method: str,
        path: str,
        *,
        body: Payload | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        method = method.upper()
        api_key = self._api_key or config.api_key()
        codec = self.codec

        headers = {"Accept": codec.media_type}
        content: bytes | None = None
        if body is not None:
            content = codec.encode(body.nodename, body.to_payload())
            headers["Content-Type"] = f"{codec.media_type}; charset=utf-8"
        query = {k: _query_value(v) for k, v in (params or {}).items() if v is not None}

        self._log_request(method, path, query, body, codec)
        started = time.perf_counter()
        try:
            with build_client(
                self.settings,
                base_url=self.base_url,
                api_key=api_key,
                extra_headers=headers,
            ) as client:
                response = client.request(method, path, content=content, params=query or None)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        self._log_response(response, (time.perf_counter() - started) * 1000)

        if response.is_success:
            return response
        raise self._error_for(response)

    def get(self, path: str, **params: Any) -> httpx.Response:
        return self.request("GET", path, params=params)

    def head(self, path: str, **params: Any) -> httpx.Response:
        return self.request("HEAD", path, params=params)

    def post(self, path: str, body: Payload | None = None, **params: Any) -> httpx.Response:
        return self.request("POST", path, body=body, params=params)

    def put(self, path: str, body: Payload | None = None, **params: Any) -> httpx.Response:
        return self.request("PUT", path, body=body, params=params)

    def delete(self, path: str, **params: Any) -> httpx.Response:
        return self.request("DELETE", path, params=params)

    def codec_for(self, response: httpx.Response) -> Codec:
        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            return get_codec("json")
        if "xml" in content_type:
            return get_codec("xml")
        return self.codec

    def decode(self, response: httpx.Response) -> tuple[str | None, Any]:
        # Un 2xx con cuerpo ilegible (página de mantenimiento de un proxy, etc.)
        # también se reporta dentro de la jerarquía de `core.errors`.
        try:
            return self.codec_for(response).decode(response.content)
        except (ElementTree.ParseError, ValueError) as exc:
            raise UnexpectedStatusError(
                f"HTTP {response.status_code} with an unreadable body: {exc}",
                status=response.status_code,
                body=response.content,
            ) from exc

    def _error_for(self, response: httpx.Response) -> APIError:
        details = self.codec_for(response).decode_errors(response.content)
        error_class = error_class_for_status(response.status_code)
        kwargs: dict[str, Any] = {
            "status": response.status_code,
            "symbol": details.symbol,
            "description": details.description,
            "details": details.details,
            "body": response.content,
        }
        if issubclass(error_class, ValidationError):
            return error_class(
                errors=details.field_errors,
                transaction_error=details.transaction_error,
                **kwargs,
            )
        return error_class(**kwargs)

    def _log_request(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any],
        body: Payload | None,
        codec: Codec,
    ) -> None:
        if get_logger() is None:
            return
        log(logging.INFO, "===> %s %s%s", method, path, f" {dict(query)}" if query else "")
        if body is not None:
            sensitive = SENSITIVE_FIELDS | frozenset(getattr(body, "sensitive", ()) or ())
            redacted = codec.encode(body.nodename, redact(body.to_payload(), sensitive))
            log(logging.DEBUG, "%s", redacted.decode("utf-8", errors="replace"))

    def _log_response(self, response: httpx.Response, elapsed_ms: float) -> None:
        if get_logger() is None:
            return
        log(
            logging.INFO,
            "<=== %d %s (%.2fms)",
            response.status_code,
            response.reason_phrase,
            elapsed_ms,
        )
        if not response.content:
            return
        codec = self.codec_for(response)
        try:
            nodename, value = codec.decode(response.content)
        except (ElementTree.ParseError, ValueError):
            log(logging.DEBUG, "<%d bytes, unreadable body>", len(response.content))
            return
        if nodename is None or not isinstance(value, (Mapping, list)):
            log(logging.DEBUG, "%s", redact(value))
            return
        redacted = codec.encode(nodename, redact(value))
        log(logging.DEBUG, "%s", redacted.decode("utf-8", errors="replace"))


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value
