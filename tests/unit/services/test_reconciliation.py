from __future__ import annotations

import pytest

from rentalshop.core.enums import DiscountType, PaymentMethod
from rentalshop.models.draft import PaymentDraft
from rentalshop.services.reconciliation import ReconciliationValidator


def _validator():
    return ReconciliationValidator(lower_ratio=0.5, upper_ratio=1.1, currency_symbol="R$")


def _payment(**overrides):
    fields = dict(method=PaymentMethod.PIX, total_value=100, final_value=100)
    fields.update(overrides)
    return PaymentDraft(**fields)


@pytest.mark.parametrize(
    "payments_total,passes",
    [(110, True), (111, False), (50, True), (49.99, False), (100, True)],
)
def test_reconciliation_band(payments_total, passes):
    assert (_validator().reconcile(100, payments_total) is None) is passes


def test_over_and_under_messages():
    validator = _validator()
    assert "exceeds" in validator.reconcile(100, 111)
    assert "less than 50%" in validator.reconcile(100, 40)


def test_aggregate_error_keyed_as_payment_total():
    payments = [_payment(total_value=200, final_value=200)]
    errors = _validator().validate(payments, items_total=100, payments_total=200)
    assert list(errors) == ["paymentTotal"]


def test_percentage_scenario_passes():
    payments = [_payment(discount_type=DiscountType.PERCENTAGE, discount_value=10, final_value=90)]
    assert _validator().validate(payments, items_total=100, payments_total=90) == {}


def test_fixed_discount_above_total_fails_before_reconciliation():
    payments = [_payment(discount_type=DiscountType.FIXED, discount_value=150, final_value=0)]
    errors = _validator().validate(payments, items_total=100, payments_total=0)
    assert errors["payments[0].discountValue"] == "Discount cannot exceed the total value"
    assert "paymentTotal" not in errors


def test_discount_type_without_value_fails():
    payments = [_payment(discount_type=DiscountType.PERCENTAGE)]
    errors = _validator().validate(payments, items_total=100, payments_total=100)
    assert "payments[0].discountValue" in errors


def test_discount_value_without_type_fails():
    payments = [_payment(discount_value=5)]
    errors = _validator().validate(payments, items_total=100, payments_total=100)
    assert "payments[0].discountType" in errors


def test_percentage_above_hundred_fails():
    payments = [_payment(discount_type=DiscountType.PERCENTAGE, discount_value=120, final_value=60)]
    errors = _validator().validate(payments, items_total=100, payments_total=60)
    assert errors["payments[0].discountValue"] == "Percentage must be between 0 and 100"


def test_field_checks_are_keyed_by_index():
    payments = [_payment(), _payment(method=None, total_value=0, final_value="x")]
    errors = _validator().validate(payments, items_total=100, payments_total=100)
    assert set(errors) == {"payments[1].method", "payments[1].totalValue", "payments[1].finalValue"}


def test_empty_payments():
    assert _validator().validate([], items_total=100, payments_total=0) == {"payments": "Add at least one payment"}


def test_ratios_default_from_config():
    validator = ReconciliationValidator()
    assert validator.lower_ratio == 0.5
    assert validator.upper_ratio == 1.1


def test_non_finite_payment_values_are_field_errors():
    payment = _payment(total_value=float("nan"), final_value=float("inf"))
    errors = _validator().validate([payment], items_total=100, payments_total=0)
    assert errors["payments[0].totalValue"] == "Total value must be a number"
    assert errors["payments[0].finalValue"] == "Final value must be a number"
    assert "paymentTotal" not in errors
