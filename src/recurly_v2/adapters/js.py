"""Firma de parámetros para Recurly.js.

Por qué en adapters:
- Es un formato de intercambio con el navegador (query string + HMAC), no un
  recurso de la API; no hace peticiones HTTP.

Formato de la firma: `<hmac_sha1_hex>|<query>`, donde `query` incluye siempre
`timestamp` y `nonce` y se codifica con claves anidadas (`a[b][]=x`).
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time
from typing import Any, Mapping
from urllib.parse import parse_qsl, quote_plus

from recurly_v2.core import config
from recurly_v2.core.errors import ConfigurationError, RecurlyError
from recurly_v2.core.interfaces.codec import Payload
from recurly_v2.resources.base import Resource


class RequestForgeryError(RecurlyError):
    """Firma de Recurly.js inválida o caducada."""


def private_key() -> str:
    key = config.get_settings().js_private_key
    if not key:
        raise ConfigurationError("js_private_key not configured (set RECURLY_JS_PRIVATE_KEY)")
    return key


def public_key() -> str:
    key = config.get_settings().js_public_key
    if not key:
        raise ConfigurationError("js_public_key not configured (set RECURLY_JS_PUBLIC_KEY)")
    return key


def to_query(obj: Any, key: str | None = None) -> str:
    """Serializa `obj` como query string con claves anidadas, ordenadas."""

    if isinstance(obj, Mapping):
        parts = [to_query(value, f"{key}[{name}]" if key else str(name)) for name, value in obj.items()]
        return "&".join(sorted(parts))
    if isinstance(obj, (list, tuple)):
        return "&".join(to_query(item, f"{key}[]") for item in obj)
    if isinstance(obj, bool):
        obj = "true" if obj else "false"
    return f"{quote_plus(str(key))}={quote_plus('' if obj is None else str(obj))}"


def sign(*records: Payload, key: str | None = None, **data: Any) -> str:
    """Firma `data` más los atributos de cada registro (bajo su nodename).

    Ejemplo:
        sign(Account(account_code="a1"), transaction={"amount_in_cents": 500})
    """

    signable: dict[str, Any] = {str(name): value for name, value in data.items()}
    for record in records:
        signable[record.nodename] = _signable_attributes(record)
    signable.setdefault("timestamp", int(time.time()))
    signable.setdefault("nonce", secrets.token_hex(16))

    unsigned = to_query(signable)
    digest = hmac.new((key or private_key()).encode("utf-8"), unsigned.encode("utf-8"), hashlib.sha1)
    return f"{digest.hexdigest()}|{unsigned}"


def _signable_attributes(record: Payload) -> Any:
    if isinstance(record, Resource):
        return record.to_payload(changed_only=False)
    return record.to_payload()


def verify(signature: str, *, key: str | None = None, max_age: int = 3600) -> dict[str, str]:
    """Comprueba una firma emitida por `sign` y devuelve sus parámetros planos.

    Lanza `RequestForgeryError` si el HMAC no coincide o si `timestamp` es más
    antiguo que `max_age` segundos.
    """

    digest, sep, unsigned = signature.partition("|")
    if not sep:
        raise RequestForgeryError("signature is malformed")
    expected = hmac.new((key or private_key()).encode("utf-8"), unsigned.encode("utf-8"), hashlib.sha1)
    if not hmac.compare_digest(expected.hexdigest(), digest):
        raise RequestForgeryError("signature does not match")

    params = dict(parse_qsl(unsigned, keep_blank_values=True))
    try:
        timestamp = int(params.get("timestamp", ""))
    except ValueError:
        raise RequestForgeryError("signature has no valid timestamp") from None
    if time.time() - timestamp > max_age:
        raise RequestForgeryError("signature has expired")
    return params
