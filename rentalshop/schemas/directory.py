"""Read-only reference records served by the client/product/event/location directories."""

from __future__ import annotations

from pydantic import Field

from rentalshop.core.enums import ProductStatus
from rentalshop.schemas.common import WireModel


class ClientRecord(WireModel):
    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    cpf_cnpj: str | None = None


class ProductRecord(WireModel):
    id: str
    name: str
    code: str | None = None
    status: ProductStatus
    size: str | None = None
    quantity: int | None = None
    rental_value: float = Field(default=0, ge=0)


class EventRecord(WireModel):
    id: str
    name: str
    date: str | None = None
    time: str | None = None


class LocationRecord(WireModel):
    id: str
    name: str
