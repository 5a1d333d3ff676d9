"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar recursos ni transporte.
- Mantiene los defaults de proceso (subdomain, api_key, default_currency) y el
  override por hilo, para que hilos distintos puedan hablar con cuentas distintas.
"""

from __future__ import annotations

import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Literal, Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from recurly_v2.core.errors import ConfigurationError

CONFIG_KEYS = ("subdomain", "api_key", "default_currency")


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "recurly-v2"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "recurly-v2"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "recurly-v2"
    return Path.home() / ".config" / "recurly-v2"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# recurly-v2 user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars).
    - Un único contrato de configuración para transporte, recursos y CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECURLY_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key privada de Recurly (se envía como usuario de HTTP Basic).",
    )
    subdomain: str = Field(
        default="api",
        min_length=1,
        description="Subdominio del sitio Recurly (<subdomain>.recurly.com).",
    )
    default_currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="Moneda por defecto para importes sin moneda explícita.",
    )
    api_domain: str = Field(
        default="recurly.com",
        min_length=3,
        description="Dominio base de la API.",
    )
    api_version: str = Field(
        default="2.29",
        min_length=1,
        description="Versión enviada en la cabecera X-Api-Version.",
    )
    content_format: Literal["xml", "json"] = Field(
        default="xml",
        description="Formato de los cuerpos de petición/respuesta.",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="recurly-v2-python/0.3.0",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    js_public_key: str | None = Field(
        default=None,
        description="Clave pública de Recurly.js (se expone al navegador).",
    )
    js_private_key: str | None = Field(
        default=None,
        description="Clave privada de Recurly.js para firmar parámetros de formularios.",
    )
    insecure_debug: bool = Field(
        default=False,
        description="Permite instalar un logger de peticiones/respuestas (puede filtrar PII).",
    )


@dataclass(frozen=True)
class ResolvedConfig:
    """Valores efectivos para el hilo actual."""

    subdomain: str
    api_key: str | None
    default_currency: str


_lock = threading.Lock()
_settings: AppSettings | None = None
_defaults: dict[str, Any] = {}
_local = threading.local()


def get_settings() -> AppSettings:
    global _settings
    with _lock:
        if _settings is None:
            _settings = AppSettings()
        return _settings


def _validate_keys(params: Mapping[str, Any]) -> None:
    unknown = sorted(set(params) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")


def configure(**params: Any) -> None:
    """Fija los defaults de proceso (se escriben al arrancar, se leen siempre)."""

    _validate_keys(params)
    with _lock:
        _defaults.update(params)


def config(params: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
    """Fija (o limpia, sin argumentos) el override del hilo actual.

    Los valores no indicados siguen resolviéndose contra los defaults de proceso.
    """

    merged = {**(params or {}), **kwargs}
    _validate_keys(merged)
    _local.config = merged or None


def thread_config() -> dict[str, Any] | None:
    return getattr(_local, "config", None)


@contextmanager
def scoped_config(**params: Any) -> Iterator[ResolvedConfig]:
    """Aplica un override de hilo durante el bloque y restaura el anterior."""

    previous = thread_config()
    config(params)
    try:
        yield current()
    finally:
        _local.config = previous


def reset() -> None:
    """Vuelve a los valores de entorno y limpia el override del hilo actual."""

    global _settings
    with _lock:
        _settings = None
        _defaults.clear()
    _local.config = None


def _lookup(key: str) -> Any:
    override = thread_config()
    if override and override.get(key):
        return override[key]
    value = _defaults.get(key)
    if value:
        return value
    return getattr(get_settings(), key)


def subdomain() -> str:
    return _lookup("subdomain") or "api"


def api_key() -> str:
    value = _lookup("api_key")
    if not value:
        raise ConfigurationError("RecurlyV2.api_key not configured")
    return value


def default_currency() -> str:
    return _lookup("default_currency") or "USD"


def current() -> ResolvedConfig:
    return ResolvedConfig(
        subdomain=subdomain(),
        api_key=_lookup("api_key") or None,
        default_currency=default_currency(),
    )
