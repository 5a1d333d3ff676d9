"""Contratos del formato de cable.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- XML y JSON son intercambiables para el transporte y testeables por separado.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from recurly_v2.core.domain.models import ErrorDetails


@runtime_checkable
class Payload(Protocol):
    """Algo que se puede enviar como cuerpo: un Resource o un Request."""

    nodename: str

    def to_payload(self) -> Any:
        """Valores serializables (dict/list/escalares/Money) listos para el codec."""

        ...


@runtime_checkable
class Codec(Protocol):
    """Contrato mínimo de un formato de cable.

    Reglas de diseño:
    - `decode` devuelve el nombre del nodo raíz y su valor en tipos Python planos.
    - `decode_errors` nunca lanza: un cuerpo ilegible produce un `ErrorDetails` vacío.
    """

    media_type: str

    def encode(self, nodename: str, payload: Any) -> bytes:
        ...

    def decode(self, body: bytes) -> tuple[str | None, Any]:
        ...

    def decode_errors(self, body: bytes) -> ErrorDetails:
        ...
