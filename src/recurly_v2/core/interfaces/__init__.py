"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el transporte depende de abstracciones, no de
  Resource/Request ni de un codec concreto.
"""

from recurly_v2.core.interfaces.codec import Codec, Payload

__all__ = ["Codec", "Payload"]
