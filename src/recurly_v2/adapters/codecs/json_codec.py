"""Codec JSON.

Mismo modelo que el XML: `{"<nodename>": {...}}` para recursos, listas para
colecciones y `{"href": "..."}` como referencia a otro recurso.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic_core import to_jsonable_python

from recurly_v2.core.domain.models import HREF_KEY, NODE_KEY, ErrorDetails, Link


def _to_wire(value: Any) -> Any:
    if isinstance(value, Link):
        return {"href": value.href}
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for key, sub_value in value.items():
            if key == NODE_KEY:
                continue
            out["href" if key == HREF_KEY else key] = _to_wire(sub_value)
        return out
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    return value


def _from_wire(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value) == {"href"}:
            return Link(href=value["href"])
        out: dict[str, Any] = {}
        for key, sub_value in value.items():
            out[HREF_KEY if key == "href" else key] = _from_wire(sub_value)
        return out
    if isinstance(value, list):
        return [_from_wire(item) for item in value]
    return value


class JSONCodec:
    media_type = "application/json"

    def encode(self, nodename: str, payload: Any) -> bytes:
        data = to_jsonable_python(_to_wire(payload))
        if nodename:
            data = {nodename: data}
        return json.dumps(data, ensure_ascii=False).encode("utf-8")

    def decode(self, body: bytes) -> tuple[str | None, Any]:
        if not body or not body.strip():
            return None, None
        data = json.loads(body)
        if isinstance(data, dict) and len(data) == 1:
            (key, value), = data.items()
            if isinstance(value, (dict, list)):
                return key, _from_wire(value)
        return None, _from_wire(data)

    def decode_errors(self, body: bytes) -> ErrorDetails:
        if not body or not body.strip():
            return ErrorDetails()
        try:
            data = json.loads(body)
        except ValueError:
            return ErrorDetails(description=body.decode("utf-8", errors="replace").strip()[:500] or None)
        if not isinstance(data, dict):
            return ErrorDetails()

        details = ErrorDetails()
        error = data.get("error")
        if isinstance(error, dict):
            details.symbol = error.get("symbol")
            details.description = error.get("description")
            details.details = error.get("details")

        for item in data.get("errors") or []:
            if not isinstance(item, dict):
                continue
            field = item.get("field")
            message = str(item.get("message") or "")
            if field:
                details.field_errors.setdefault(str(field), []).append(message)
                details.symbol = details.symbol or item.get("symbol")
            elif details.description is None:
                details.description = message or None

        transaction_error = data.get("transaction_error")
        if isinstance(transaction_error, dict):
            details.transaction_error = transaction_error
        return details
