"""Contract request/response schemas for the REST API."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from rentalshop.core.enums import ContractStatus, DiscountType, PaymentMethod
from rentalshop.schemas.common import WireModel


class ContractItemPayload(WireModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    unit_value: float = Field(gt=0)


class PaymentPayload(WireModel):
    method: PaymentMethod
    total_value: float = Field(gt=0)
    final_value: float = Field(gt=0)
    discount_type: DiscountType | None = None
    discount_value: float | None = Field(default=None, ge=0)
    notes: str | None = None


class CreateContractRequest(WireModel):
    client_id: str = Field(min_length=1)
    event_id: str | None = None
    location_id: str | None = None
    status: ContractStatus | None = None
    fitting_date: date | None = None
    pickup_date: date
    return_date: date
    needs_adjustment: bool | None = None
    observations: str | None = None
    items: list[ContractItemPayload]
    payments: list[PaymentPayload]


class UpdateContractRequest(WireModel):
    client_id: str | None = Field(default=None, min_length=1)
    event_id: str | None = None
    location_id: str | None = None
    status: ContractStatus | None = None
    fitting_date: date | None = None
    pickup_date: date | None = None
    return_date: date | None = None
    needs_adjustment: bool | None = None
    observations: str | None = None
    items: list[ContractItemPayload] | None = None
    payments: list[PaymentPayload] | None = None


class ContractItemResponse(WireModel):
    id: str | None = None
    product_id: str
    quantity: int
    unit_value: float


class PaymentResponse(WireModel):
    id: str | None = None
    method: PaymentMethod
    total_value: float
    discount_type: DiscountType | None = None
    discount_value: float | None = None
    final_value: float | None = None
    notes: str | None = None


class ContractResponse(WireModel):
    """Persisted contract as returned by the API (dates kept as raw ISO strings)."""

    id: str
    client_id: str
    event_id: str | None = None
    location_id: str | None = None
    status: ContractStatus = ContractStatus.ACTIVE
    fitting_date: str | None = None
    pickup_date: str
    return_date: str
    needs_adjustment: bool = False
    observations: str | None = None
    items: list[ContractItemResponse] = []
    payments: list[PaymentResponse] = []
    created_at: str | None = None
    updated_at: str | None = None


def contract_total(contract: ContractResponse) -> float:
    """Total charged on a persisted contract (sum of payment final values)."""
    return sum(payment.final_value or 0 for payment in contract.payments)
