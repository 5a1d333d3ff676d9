"""Formatos de cable (XML/JSON).

Cada módulo implementa `recurly_v2.core.interfaces.codec.Codec`.
"""

from recurly_v2.adapters.codecs.json_codec import JSONCodec
from recurly_v2.adapters.codecs.xml_codec import XMLCodec, singularize
from recurly_v2.core.errors import ConfigurationError
from recurly_v2.core.interfaces.codec import Codec

_CODECS: dict[str, Codec] = {
    "xml": XMLCodec(),
    "json": JSONCodec(),
}


def get_codec(content_format: str) -> Codec:
    try:
        return _CODECS[content_format.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Unsupported content format: {content_format!r}") from None


__all__ = [
    "JSONCodec",
    "XMLCodec",
    "get_codec",
    "singularize",
]
