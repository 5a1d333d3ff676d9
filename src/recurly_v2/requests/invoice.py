from __future__ import annotations

from typing import Literal

from pydantic import Field

from recurly_v2.requests.base import Request


class LineItemRefund(Request):
    nodename = "adjustment"

    uuid: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)
    prorate: bool | None = None


class InvoiceRefund(Request):
    """Body for `POST /invoices/<number>/refund`.

    Either `amount_in_cents` (open amount refund) or `line_items` is sent.
    """

    nodename = "invoice"

    amount_in_cents: int | None = Field(default=None, ge=1)
    line_items: list[LineItemRefund] | None = None
    refund_method: Literal["credit_first", "transaction_first", "all_credit", "all_transaction"] | None = None
    external_refund: bool | None = None
    credit_customer_notes: str | None = None
    description: str | None = None
