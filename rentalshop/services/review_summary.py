"""Read-only summary shown on the wizard's review step."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from rentalshop.core.config import get_config
from rentalshop.core.enums import (
    CONTRACT_STATUS_LABELS,
    PAYMENT_METHOD_LABELS,
    ContractStatus,
    DiscountType,
    PaymentMethod,
)
from rentalshop.models.draft import ContractDraft
from rentalshop.services.reference_data import ReferenceData
from rentalshop.utils.validators import as_float


def format_currency(value: float, symbol: str | None = None) -> str:
    """Format as ``R$ 1.234,56`` (dot thousands, comma decimals)."""
    symbol = symbol or get_config().CURRENCY_SYMBOL
    text = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{symbol} {text}"


def format_date(value: date | str | None) -> str:
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    return value or "-"


def status_label(status: ContractStatus | str | None) -> str:
    try:
        return CONTRACT_STATUS_LABELS[ContractStatus(status)]
    except ValueError:
        return str(status or "")


def payment_method_label(method: PaymentMethod | str | None) -> str:
    try:
        return PAYMENT_METHOD_LABELS[PaymentMethod(method)]
    except ValueError:
        return str(method or "")


@dataclass(frozen=True)
class ItemLine:
    product: str
    quantity: int
    unit_value: str
    line_total: str


@dataclass(frozen=True)
class PaymentLine:
    method: str
    total_value: str
    discount: str | None
    final_value: str
    notes: str | None


@dataclass(frozen=True)
class ReviewSummary:
    client: str
    event: str | None
    location: str | None
    status: str
    fitting_date: str
    pickup_date: str
    return_date: str
    needs_adjustment: bool
    observations: str | None
    items: tuple[ItemLine, ...]
    payments: tuple[PaymentLine, ...]
    items_total: str
    payments_total: str


def _discount_label(discount_type: DiscountType | None, discount_value, symbol: str) -> str | None:
    if discount_type is None or discount_value is None:
        return None
    if discount_type is DiscountType.PERCENTAGE:
        return f"{as_float(discount_value):g}%"
    return format_currency(as_float(discount_value), symbol)


def _product_name(reference: ReferenceData, product_id: str) -> str:
    product = reference.product(product_id)
    return product.name if product else product_id


def build_review_summary(
    draft: ContractDraft,
    reference: ReferenceData,
    items_total: float,
    payments_total: float,
) -> ReviewSummary:
    symbol = get_config().CURRENCY_SYMBOL
    items = tuple(
        ItemLine(
            product=_product_name(reference, item.product_id),
            quantity=int(as_float(item.quantity)),
            unit_value=format_currency(as_float(item.unit_value), symbol),
            line_total=format_currency(as_float(item.quantity) * as_float(item.unit_value), symbol),
        )
        for item in draft.items
    )
    payments = tuple(
        PaymentLine(
            method=payment_method_label(payment.method),
            total_value=format_currency(as_float(payment.total_value), symbol),
            discount=_discount_label(payment.discount_type, payment.discount_value, symbol),
            final_value=format_currency(as_float(payment.final_value), symbol),
            notes=payment.notes,
        )
        for payment in draft.payments
    )
    return ReviewSummary(
        client=reference.client_name(draft.client_id) or draft.client_id,
        event=reference.event_name(draft.event_id),
        location=reference.location_name(draft.location_id),
        status=status_label(draft.status),
        fitting_date=format_date(draft.fitting_date),
        pickup_date=format_date(draft.pickup_date),
        return_date=format_date(draft.return_date),
        needs_adjustment=draft.needs_adjustment,
        observations=draft.observations,
        items=items,
        payments=payments,
        items_total=format_currency(items_total, symbol),
        payments_total=format_currency(payments_total, symbol),
    )
