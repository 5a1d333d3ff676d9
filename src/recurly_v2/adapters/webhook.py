"""Parseo de notificaciones push (webhooks).

Recurly envía un POST con XML cuyo tag raíz es el tipo de evento, p.ej.
`<new_account_notification>`, y dentro los recursos afectados. La verificación de
origen (IP/credenciales) queda a cargo de la aplicación que recibe el POST.
"""

from __future__ import annotations

from typing import Any
from xml.etree.ElementTree import ParseError

from pydantic import BaseModel, ConfigDict, Field

from recurly_v2.adapters.codecs import get_codec
from recurly_v2.core.errors import RecurlyError
from recurly_v2.resources import Account, CreditPayment, GiftCard, Invoice, Subscription, Transaction

NOTIFICATION_SUFFIX = "_notification"


class InvalidNotificationError(RecurlyError):
    """El cuerpo no es una notificación reconocible."""


class Notification(BaseModel):
    """Evento de webhook con los recursos que trae adjuntos (los ausentes son `None`)."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., description="Tipo de evento, p.ej. 'new_account'.")
    account: Account | None = None
    subscription: Subscription | None = None
    transaction: Transaction | None = None
    invoice: Invoice | None = None
    credit_payment: CreditPayment | None = None
    gift_card: GiftCard | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @property
    def name(self) -> str:
        return f"{self.type}{NOTIFICATION_SUFFIX}"


def parse_notification(body: bytes | str) -> Notification:
    if isinstance(body, str):
        body = body.encode("utf-8")
    try:
        tag, value = get_codec("xml").decode(body)
    except ParseError as exc:
        raise InvalidNotificationError(f"notification body is not valid XML: {exc}") from exc

    if not tag or not tag.endswith(NOTIFICATION_SUFFIX):
        raise InvalidNotificationError(f"unexpected notification root element {tag!r}")

    data = value if isinstance(value, dict) else {}
    notification = Notification.model_validate({**data, "type": tag[: -len(NOTIFICATION_SUFFIX)], "raw": data})
    for name in ("account", "subscription", "transaction", "invoice", "credit_payment", "gift_card"):
        record = getattr(notification, name)
        if record is not None:
            record._mark_loaded(None)
    return notification
