"""Logger opcional de peticiones/respuestas.

Por qué un gate:
- Los cuerpos de la API contienen PII (emails, direcciones, datos de tarjeta).
- Solo se permite instalar un logger si `RECURLY_INSECURE_DEBUG=true`; fuera de
  eso la librería no emite nada (NullHandler).
"""

from __future__ import annotations

import logging
import os

from rich.console import Console

LOGGER_NAME = "recurly_v2"
DEBUG_ENV_VAR = "RECURLY_INSECURE_DEBUG"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

_console = Console(stderr=True)
_logger: logging.Logger | None = None


def insecure_debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() == "true"


def set_logger(logger: logging.Logger | None) -> bool:
    """Instala `logger` para peticiones/respuestas; devuelve si quedó activo.

    `None` siempre desactiva el logging.
    """

    global _logger
    if logger is None:
        _logger = None
        return False

    if insecure_debug_enabled():
        _logger = logger
        _console.print(
            "[yellow]Warning:[/yellow] Recurly logger enabled. The logger has the potential to leak "
            "PII and should never be used in production environments."
        )
        return True

    _console.print(
        "[yellow]Warning:[/yellow] Recurly logger has been disabled. If you wish to use it, "
        "only do so in a non-production environment and make sure "
        f"the `{DEBUG_ENV_VAR}` environment variable is set to `true`."
    )
    return False


def get_logger() -> logging.Logger | None:
    return _logger


def log(level: int, message: str, *args: object) -> None:
    if _logger is None:
        return
    _logger.log(level, message, *args)
