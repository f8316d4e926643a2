"""Discount calculator: the only place a payment's final value is derived."""

from __future__ import annotations

from rentalshop.core.enums import DiscountType


def calculate(
    total_value: float,
    discount_type: DiscountType | str | None = None,
    discount_value: float | None = None,
) -> float:
    """Return the final value of a payment after its discount.

    PERCENTAGE takes ``discount_value`` percent off, FIXED subtracts it, and no
    discount (missing type or value) leaves ``total_value`` unchanged. The
    result is never negative, is rounded to cents and never exceeds ``total_value``.
    """
    final_value = float(total_value)
    if discount_type and discount_value is not None:
        kind = DiscountType(discount_type)
        if kind is DiscountType.PERCENTAGE:
            final_value = final_value * (1 - float(discount_value) / 100)
        else:
            final_value = final_value - float(discount_value)
    # Rounding to cents must never lift the result above the undiscounted total.
    return max(0.0, min(float(total_value), round(final_value, 2)))
