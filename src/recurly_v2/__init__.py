"""Cliente Python para la API v2 de Recurly.

Uso mínimo:

    import recurly_v2
    from recurly_v2.resources import Account

    recurly_v2.configure(subdomain="mi-sitio", api_key="...")
    account = Account.find("cliente-1")
"""

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.core.config import (
    api_key,
    config,
    configure,
    current,
    default_currency,
    reset,
    scoped_config,
    subdomain,
)
from recurly_v2.core.domain.money import Money
from recurly_v2.core.errors import (
    APIError,
    ConfigurationError,
    ImmutableAttributeError,
    InvalidResourceError,
    NotFoundError,
    RecurlyError,
    TransportError,
    ValidationError,
)
from recurly_v2.core.log import set_logger

__version__ = "0.3.0"

__all__ = [
    "APIError",
    "ApiClient",
    "ConfigurationError",
    "ImmutableAttributeError",
    "InvalidResourceError",
    "Money",
    "NotFoundError",
    "RecurlyError",
    "TransportError",
    "ValidationError",
    "__version__",
    "api_key",
    "config",
    "configure",
    "current",
    "default_currency",
    "reset",
    "scoped_config",
    "set_logger",
    "subdomain",
]
