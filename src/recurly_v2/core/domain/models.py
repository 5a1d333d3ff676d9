"""Modelos de transporte (Pydantic v2).

Por qué Pydantic aquí:
- Validación estricta y documentación autocontenida (Field) sin acoplar el Core
  a httpx ni a un formato de cable concreto.

Nota:
- Estos modelos describen *qué* devuelve la API (referencias, errores), no *cómo*
  se obtiene.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

HREF_KEY = "@href"
# Tag propio de un elemento de lista cuando no es el singular del contenedor.
NODE_KEY = "@node"


class Link(BaseModel):
    """Referencia a otro recurso (o a una acción) encontrada en una respuesta.

    En XML llega como `<account href="..."/>` o `<a name="cancel" href="..." method="put"/>`.
    """

    model_config = ConfigDict(frozen=True)

    href: str = Field(
        ...,
        min_length=1,
        description="URL absoluta del recurso o acción enlazada.",
    )
    method: str | None = Field(
        default=None,
        description="Verbo HTTP para enlaces de acción (anchors `<a>`).",
    )


class ErrorDetails(BaseModel):
    """Cuerpo de error normalizado, independiente de XML/JSON."""

    symbol: str | None = Field(
        default=None,
        description="Identificador máquina del error (p.ej. 'not_found').",
    )
    description: str | None = Field(
        default=None,
        description="Descripción legible del error.",
    )
    details: str | None = Field(
        default=None,
        description="Elaboración adicional, si el servidor la envía.",
    )
    field_errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Errores por campo (422): campo -> mensajes.",
    )
    transaction_error: dict[str, Any] = Field(
        default_factory=dict,
        description="Detalle de `<transaction_error>` en fallos de cobro.",
    )
