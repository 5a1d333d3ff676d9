"""Facturación: facturas, ajustes, transacciones, tarjetas regalo y compras."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.requests.invoice import InvoiceRefund
from recurly_v2.resources.accounts import Account, Address, ShippingAddress
from recurly_v2.resources.base import Resource
from recurly_v2.resources.subscriptions import Subscription


class JurisDetail(Resource):
    embedded = True

    jurisdiction: str | None = None
    tax_in_cents: int | None = None


class TaxType(Resource):
    embedded = True

    type: str | None = None
    tax_in_cents: int | None = None
    juris_details: list[JurisDetail] | None = None


class TaxDetail(Resource):
    embedded = True

    name: str | None = None
    type: str | None = None
    tax_rate: Decimal | None = None
    tax_in_cents: int | None = None
    level: str | None = None
    billable: bool | None = None


class Adjustment(Resource):
    """Cargo o crédito de una cuenta. Se crea con `Account.add_adjustment`."""

    collection_path = "adjustments"
    identifier = "uuid"
    read_only = frozenset(
        {"state", "origin", "discount_in_cents", "tax_in_cents", "total_in_cents", "tax_details", "tax_types"}
    )
    has_one = {"account": "Account", "invoice": "Invoice", "subscription": "Subscription"}

    uuid: str | None = None
    state: str | None = None
    description: str | None = None
    accounting_code: str | None = None
    product_code: str | None = None
    item_code: str | None = None
    external_sku: str | None = None
    origin: str | None = None
    currency: str | None = None
    unit_amount_in_cents: int | None = None
    quantity: int | None = None
    quantity_remaining: int | None = None
    discount_in_cents: int | None = None
    tax_in_cents: int | None = None
    total_in_cents: int | None = None
    tax_exempt: bool | None = None
    tax_code: str | None = None
    tax_type: str | None = None
    tax_region: str | None = None
    tax_rate: Decimal | None = None
    tax_details: list[TaxDetail] | None = None
    tax_types: list[TaxType] | None = None
    revenue_schedule_type: str | None = None
    credit_reason_code: str | None = None
    original_adjustment_uuid: str | None = None
    shipping_address: ShippingAddress | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def _create_path(self) -> str:
        # La colección raíz solo se lee; se crean colgando de una cuenta.
        raise NotImplementedError("Adjustment is created through Account.add_adjustment")


class Transaction(Resource):
    collection_path = "transactions"
    identifier = "uuid"
    sensitive = frozenset({"number", "verification_value"})
    read_only = frozenset(
        {
            "action",
            "status",
            "reference",
            "source",
            "recurring",
            "test",
            "voidable",
            "refundable",
            "cvv_result",
            "avs_result",
            "avs_result_street",
            "avs_result_postal",
            "transaction_error",
            "details",
            "collected_at",
        }
    )
    has_one = {"account": "Account", "invoice": "Invoice", "subscription": "Subscription"}

    uuid: str | None = None
    action: str | None = None
    account: Account | None = None
    amount_in_cents: int | None = None
    tax_in_cents: int | None = None
    currency: str | None = None
    status: str | None = None
    payment_method: str | None = None
    reference: str | None = None
    source: str | None = None
    description: str | None = None
    origin: str | None = None
    gateway_type: str | None = None
    ip_address: str | None = None
    recurring: bool | None = None
    test: bool | None = None
    voidable: bool | None = None
    refundable: bool | None = None
    cvv_result: Any = None
    avs_result: Any = None
    avs_result_street: str | None = None
    avs_result_postal: str | None = None
    transaction_error: dict[str, Any] | None = None
    details: dict[str, Any] | None = None
    collected_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def refund(self, amount_in_cents: int | None = None, *, client: ApiClient | None = None) -> Transaction:
        """Anula (sin importe) o reembolsa parcialmente.

        Una anulación actualiza esta transacción y la devuelve; un reembolso
        crea una transacción nueva, que es la que se devuelve.
        """

        api = self._resolve_client(client)
        link = self.links.get("refund")
        path = link.href if link else self._require_uri("refund")
        method = (link.method if link and link.method else "DELETE")
        response = api.request(method, path, params={"amount_in_cents": amount_in_cents})
        refund = Transaction.from_response(response, api)
        if refund.uuid == self.uuid:
            self._replace_state(refund, api)
            return self
        return refund


class CreditPayment(Resource):
    collection_path = "credit_payments"
    identifier = "uuid"
    has_one = {"account": "Account", "original_invoice": "Invoice", "applied_to_invoice": "Invoice"}

    uuid: str | None = None
    action: str | None = None
    currency: str | None = None
    amount_in_cents: int | None = None
    voided_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Invoice(Resource):
    """Factura. Se identifica por número (sin prefijo) en la URI."""

    collection_path = "invoices"
    identifier = "invoice_number"
    read_only = frozenset(
        {
            "uuid",
            "state",
            "invoice_number",
            "invoice_number_prefix",
            "subtotal_in_cents",
            "subtotal_before_discount_in_cents",
            "discount_in_cents",
            "tax_in_cents",
            "total_in_cents",
            "balance_in_cents",
            "refundable_total_in_cents",
            "closed_at",
            "paid_at",
            "line_items",
            "transactions",
            "credit_payments",
            "tax_details",
        }
    )
    has_one = {"account": "Account", "subscription": "Subscription", "original_invoice": "Invoice"}
    has_many = {"subscriptions": "Subscription", "redemptions": "Redemption"}

    uuid: str | None = None
    state: str | None = None
    invoice_number: int | None = None
    invoice_number_prefix: str | None = None
    type: str | None = None
    origin: str | None = None
    currency: str | None = None
    po_number: str | None = None
    vat_number: str | None = None
    collection_method: str | None = None
    net_terms: int | None = None
    gateway_code: str | None = None
    customer_notes: str | None = None
    terms_and_conditions: str | None = None
    vat_reverse_charge_notes: str | None = None
    recovery_reason: str | None = None
    dunning_campaign_id: str | None = None
    subtotal_in_cents: int | None = None
    subtotal_before_discount_in_cents: int | None = None
    discount_in_cents: int | None = None
    tax_in_cents: int | None = None
    total_in_cents: int | None = None
    balance_in_cents: int | None = None
    refundable_total_in_cents: int | None = None
    tax_type: str | None = None
    tax_region: str | None = None
    tax_rate: Decimal | None = None
    tax_details: list[TaxDetail] | None = None
    line_items: list[Adjustment] | None = None
    transactions: list[Transaction] | None = None
    credit_payments: list[CreditPayment] | None = None
    address: Address | None = None
    shipping_address: ShippingAddress | None = None
    due_on: datetime | None = None
    attempt_next_collection_at: datetime | None = None
    closed_at: datetime | None = None
    paid_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def invoice_number_with_prefix(self) -> str:
        return f"{self.invoice_number_prefix or ''}{self.invoice_number}"

    def mark_successful(self, *, client: ApiClient | None = None) -> bool:
        self._action("PUT", "mark_successful", client=client)
        return True

    def mark_failed(self, *, client: ApiClient | None = None) -> bool:
        self._action("PUT", "mark_failed", client=client)
        return True

    def refund(self, request: InvoiceRefund, *, client: ApiClient | None = None) -> Invoice:
        """Emite una factura de reembolso (importe abierto o por líneas)."""

        api = self._resolve_client(client)
        link = self.links.get("refund")
        path = link.href if link else f"{self._require_uri('refund')}/refund"
        response = api.post(path, request)
        return Invoice.from_response(response, api)


class InvoiceCollection(Resource):
    """Resultado de una compra: factura de cargo más facturas de crédito."""

    embedded = True

    charge_invoice: Invoice | None = None
    credit_invoices: list[Invoice] | None = None


class Delivery(Resource):
    embedded = True

    method: str | None = None
    email_address: str | None = None
    deliver_at: datetime | None = None
    first_name: str | None = None
    last_name: str | None = None
    address: Address | None = None
    gifter_name: str | None = None
    personal_message: str | None = None


class GiftCard(Resource):
    collection_path = "gift_cards"
    identifier = "id"
    read_only = frozenset(
        {"redemption_code", "balance_in_cents", "purchase_invoice_id", "redemption_invoice_id", "canceled_at"}
    )

    id: int | None = None
    redemption_code: str | None = None
    product_code: str | None = None
    currency: str | None = None
    unit_amount_in_cents: int | None = None
    balance_in_cents: int | None = None
    gifter_account: Account | None = None
    recipient_account: Account | None = None
    delivery: Delivery | None = None
    purchase_invoice_id: str | None = None
    redemption_invoice_id: str | None = None
    canceled_at: datetime | None = None
    delivered_at: datetime | None = None
    redeemed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def preview(cls, gift_card: GiftCard, *, client: ApiClient | None = None) -> GiftCard:
        """Valida una tarjeta regalo sin crearla ni cobrarla."""

        api = client or ApiClient()
        response = api.post(f"{cls.collection_path}/preview", gift_card)
        return cls.from_response(response, api)


class ShippingFee(Resource):
    embedded = True

    shipping_method_code: str | None = None
    shipping_amount_in_cents: int | None = None
    shipping_address_id: int | None = None
    shipping_address: ShippingAddress | None = None


class Purchase(Resource):
    """Compra compuesta (cuenta, suscripciones y ajustes) facturada en una sola llamada."""

    embedded = True
    has_one = {"account": "Account"}

    account: Account | None = None
    adjustments: list[Adjustment] | None = None
    subscriptions: list[Subscription] | None = None
    shipping_fees: list[ShippingFee] | None = None
    gift_card: GiftCard | None = None
    coupon_codes: list[str] | None = None
    currency: str | None = None
    collection_method: str | None = None
    po_number: str | None = None
    net_terms: int | None = None
    customer_notes: str | None = None
    terms_and_conditions: str | None = None
    vat_reverse_charge_notes: str | None = None
    shipping_address_id: int | None = None
    gateway_code: str | None = None
    transaction_type: str | None = None

    @classmethod
    def invoice(cls, purchase: Purchase, *, client: ApiClient | None = None) -> InvoiceCollection:
        return cls._post(purchase, "purchases", InvoiceCollection, client)

    @classmethod
    def preview(cls, purchase: Purchase, *, client: ApiClient | None = None) -> InvoiceCollection:
        return cls._post(purchase, "purchases/preview", InvoiceCollection, client)

    @classmethod
    def authorize(cls, purchase: Purchase, *, client: ApiClient | None = None) -> Purchase:
        return cls._post(purchase, "purchases/authorize", Purchase, client)

    @classmethod
    def _post(cls, purchase: Purchase, path: str, result: type[Resource], client: ApiClient | None) -> Any:
        api = client or ApiClient()
        return result.from_response(api.post(path, purchase), api)

