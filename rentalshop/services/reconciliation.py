"""Payments-step validation: per-payment checks plus items/payments reconciliation."""

from __future__ import annotations

import logging

from rentalshop.core.config import get_config
from rentalshop.core.enums import DiscountType
from rentalshop.models.draft import PaymentDraft
from rentalshop.utils.validators import FieldErrors, add_error, error_key, is_number

logger = logging.getLogger(__name__)


def _money(value: float, symbol: str) -> str:
    return f"{symbol} {value:.2f}"


def validate_payment(payment: PaymentDraft, index: int, errors: FieldErrors) -> None:
    """Field checks and discount pairing for one payment."""

    def key(field: str) -> str:
        return error_key("payments", index, field)

    if not payment.method:
        add_error(errors, key("method"), "Select a payment method")

    if not is_number(payment.total_value):
        add_error(errors, key("totalValue"), "Total value must be a number")
    elif payment.total_value <= 0:
        add_error(errors, key("totalValue"), "Total value must be greater than zero")

    if not is_number(payment.final_value):
        add_error(errors, key("finalValue"), "Final value must be a number")
    elif payment.final_value <= 0:
        add_error(errors, key("finalValue"), "Final value must be greater than zero")

    has_type = payment.discount_type is not None
    has_value = payment.discount_value is not None
    if has_type and not has_value:
        add_error(errors, key("discountValue"), "Enter the discount value")
    if has_value and not has_type:
        add_error(errors, key("discountType"), "Select the discount type")
    if not (has_type and has_value):
        return

    if not is_number(payment.discount_value):
        add_error(errors, key("discountValue"), "Discount value must be a number")
    elif payment.discount_value < 0:
        add_error(errors, key("discountValue"), "Discount cannot be negative")
    elif payment.discount_type is DiscountType.PERCENTAGE and payment.discount_value > 100:
        add_error(errors, key("discountValue"), "Percentage must be between 0 and 100")
    elif (
        payment.discount_type is DiscountType.FIXED
        and is_number(payment.total_value)
        and payment.discount_value > payment.total_value
    ):
        add_error(errors, key("discountValue"), "Discount cannot exceed the total value")


class ReconciliationValidator:
    """Checks that payments plausibly pay for the rented items.

    The accepted band ``[lower_ratio * items, upper_ratio * items]`` allows
    discounts up to 50% and a 10% surcharge by default; both ratios are policy
    constants taken from configuration.
    """

    def __init__(
        self,
        lower_ratio: float | None = None,
        upper_ratio: float | None = None,
        currency_symbol: str | None = None,
    ) -> None:
        config = get_config()
        self.lower_ratio = config.RECONCILIATION_LOWER_RATIO if lower_ratio is None else lower_ratio
        self.upper_ratio = config.RECONCILIATION_UPPER_RATIO if upper_ratio is None else upper_ratio
        self.currency_symbol = currency_symbol or config.CURRENCY_SYMBOL

    def reconcile(self, items_total: float, payments_total: float) -> str | None:
        """Return the ``paymentTotal`` message when totals fall outside the band."""
        # Bounds rounded to cents so float noise (100 * 1.1) does not move the edge.
        upper = round(items_total * self.upper_ratio, 2)
        lower = round(items_total * self.lower_ratio, 2)
        paid = round(payments_total, 2)
        symbol = self.currency_symbol
        if paid > upper:
            return (
                f"Payments total ({_money(paid, symbol)}) exceeds the items total "
                f"({_money(items_total, symbol)}) by more than {round((self.upper_ratio - 1) * 100)}%"
            )
        if paid < lower:
            return (
                f"Payments total ({_money(paid, symbol)}) is less than "
                f"{round(self.lower_ratio * 100)}% of the items total ({_money(items_total, symbol)})"
            )
        return None

    def validate(self, payments: list[PaymentDraft], items_total: float, payments_total: float) -> FieldErrors:
        errors: FieldErrors = {}
        if not payments:
            add_error(errors, "payments", "Add at least one payment")
            return errors

        for index, payment in enumerate(payments):
            validate_payment(payment, index, errors)
        if errors:
            return errors

        message = self.reconcile(items_total, payments_total)
        if message:
            add_error(errors, "paymentTotal", message)
            logger.info(
                "reconciliation.failed",
                extra={"event": "reconciliation.failed", "totals": {"items_total": items_total, "payments_total": payments_total}},
            )
        return errors
