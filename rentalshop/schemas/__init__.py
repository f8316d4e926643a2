"""Pydantic schema package for REST API contracts."""

from rentalshop.schemas.common import WireModel
from rentalshop.schemas.contracts import (
    ContractItemPayload,
    ContractItemResponse,
    ContractResponse,
    CreateContractRequest,
    PaymentPayload,
    PaymentResponse,
    UpdateContractRequest,
    contract_total,
)
from rentalshop.schemas.directory import ClientRecord, EventRecord, LocationRecord, ProductRecord

__all__ = [
    "ClientRecord",
    "ContractItemPayload",
    "ContractItemResponse",
    "ContractResponse",
    "CreateContractRequest",
    "EventRecord",
    "LocationRecord",
    "PaymentPayload",
    "PaymentResponse",
    "ProductRecord",
    "UpdateContractRequest",
    "WireModel",
    "contract_total",
]
