"""Payments ledger: the ordered list of payments inside a draft.

Every derived ``final_value`` goes through ``discount_calculator.calculate``;
``final_value`` itself is stored so the user can override it directly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from rentalshop.core.enums import DiscountType, PaymentMethod
from rentalshop.models.draft import PaymentDraft
from rentalshop.services.discount_calculator import calculate
from rentalshop.utils.validators import as_float, check_index, is_number, parse_number

logger = logging.getLogger(__name__)
EnumT = TypeVar("EnumT", bound=Enum)

PAYMENT_FIELDS = ("method", "total_value", "discount_type", "discount_value", "final_value", "notes")


def _coerce_enum(enum_cls: type[EnumT], value: Any) -> EnumT | None:
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValueError(f"Invalid {enum_cls.__name__}: {value!r}") from exc


class PaymentsLedger:
    """Position-addressed collection of payments.

    ``items_total`` returns the current items ledger total and seeds new
    payments with the full amount still to be paid.
    """

    def __init__(self, payments: list[PaymentDraft], items_total: Callable[[], float]) -> None:
        self._payments = payments
        self._items_total = items_total

    def __len__(self) -> int:
        return len(self._payments)

    def __getitem__(self, index: int) -> PaymentDraft:
        check_index(self._payments, index, "payment")
        return self._payments[index]

    @property
    def payments(self) -> list[PaymentDraft]:
        return self._payments

    def add_payment(self) -> int:
        amount = round(self._items_total(), 2)
        self._payments.append(
            PaymentDraft(method=PaymentMethod.PIX, total_value=amount, final_value=amount)
        )
        return len(self._payments) - 1

    def set_payment(self, index: int, field: str, value: Any) -> PaymentDraft:
        check_index(self._payments, index, "payment")
        if field not in PAYMENT_FIELDS:
            raise ValueError(f"Unknown payment field: {field}")

        payment = self._payments[index]
        if field == "discount_type":
            payment.discount_type = _coerce_enum(DiscountType, value)
            if payment.discount_type is None:
                payment.discount_value = None
            self._recompute(payment)
        elif field == "discount_value":
            payment.discount_value = parse_number(value)
            self._recompute(payment)
        elif field == "total_value":
            payment.total_value = parse_number(value)
            self._recompute(payment)
        elif field == "final_value":
            payment.final_value = parse_number(value)
        elif field == "method":
            payment.method = _coerce_enum(PaymentMethod, value)
        else:
            payment.notes = value if value else None
        return payment

    def _recompute(self, payment: PaymentDraft) -> None:
        # Unparseable inputs are left for the validator; final_value keeps its last good value.
        if not is_number(payment.total_value):
            return
        discount_value = payment.discount_value if is_number(payment.discount_value) else None
        if payment.discount_value is not None and discount_value is None:
            return
        payment.final_value = calculate(payment.total_value, payment.discount_type, discount_value)

    def remove_payment(self, index: int) -> PaymentDraft:
        check_index(self._payments, index, "payment")
        removed = self._payments.pop(index)
        logger.debug("payments.removed", extra={"event": "payments.removed", "path": f"payments[{index}]"})
        return removed

    def total(self) -> float:
        return sum(as_float(payment.final_value) for payment in self._payments)
