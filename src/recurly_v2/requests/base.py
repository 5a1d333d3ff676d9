"""Base de payloads salientes.

Por qué separado de Resource:
- Un Request no tiene identidad persistida ni dirty-tracking; solo un esquema
  fijo de atributos (escalares o listas tipadas) que se serializa al enviarse.
- La validación real la hace el servidor; aquí solo se rechazan atributos no
  declarados.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from recurly_v2.core.domain.models import NODE_KEY
from recurly_v2.core.domain.money import Money


def _payload_value(value: Any) -> Any:
    if isinstance(value, Request):
        return value.to_payload()
    if isinstance(value, Money):
        return dict(value.root)
    if isinstance(value, (list, tuple)):
        return [_list_item(item) for item in value]
    return value


def _list_item(value: Any) -> Any:
    # `line_items` lleva elementos `<adjustment>`: cada Request conserva su nodename.
    if isinstance(value, Request):
        return {NODE_KEY: value.nodename, **value.to_payload()}
    return _payload_value(value)


class Request(BaseModel):
    """An outbound-only payload object."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    nodename: ClassVar[str] = "request"
    sensitive: ClassVar[frozenset[str]] = frozenset()

    def to_payload(self) -> dict[str, Any]:
        return {
            name: _payload_value(getattr(self, name))
            for name in type(self).model_fields
            if name in self.model_fields_set
        }
