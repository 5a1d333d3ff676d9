"""Modelos y tipos del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP ni formatos de cable: solo conceptos del problema.
"""

from recurly_v2.core.domain.models import HREF_KEY, NODE_KEY, ErrorDetails, Link
from recurly_v2.core.domain.money import Money

__all__ = [
    "HREF_KEY",
    "ErrorDetails",
    "Link",
    "Money",
    "NODE_KEY",
]
