from __future__ import annotations

from datetime import date

import pytest

from rentalshop.core.enums import ProductStatus
from rentalshop.core.exceptions import TransportError
from rentalshop.models.draft import ContractDraft, ContractItemDraft, PaymentDraft
from rentalshop.orchestration.contract_session import ContractSession
from rentalshop.schemas.contracts import ContractResponse
from rentalshop.schemas.directory import ClientRecord, EventRecord, LocationRecord, ProductRecord


class FakeDirectory:
    def __init__(self, products=None, fail: bool = False) -> None:
        self.calls: list[str] = []
        self.fail = fail
        self.products = products or [
            ProductRecord(id="P1", name="Gala dress", status=ProductStatus.AVAILABLE, rental_value=50),
            ProductRecord(id="P2", name="Tuxedo", status=ProductStatus.AVAILABLE, rental_value=120.5),
            ProductRecord(id="P3", name="Veil", status=ProductStatus.RENTED, rental_value=30),
        ]

    def get_clients(self):
        self.calls.append("clients")
        if self.fail:
            raise TransportError("API Error 503: unavailable", status_code=503)
        return [ClientRecord(id="C1", name="Maria Silva")]

    def get_products(self):
        self.calls.append("products")
        return list(self.products)

    def get_events(self):
        self.calls.append("events")
        return [EventRecord(id="E1", name="Spring wedding")]

    def get_locations(self):
        self.calls.append("locations")
        return [LocationRecord(id="L1", name="Main hall")]


class FakeContracts:
    def __init__(self, fail: bool = False, stored: ContractResponse | None = None) -> None:
        self.fail = fail
        self.stored = stored
        self.created = []
        self.updated = []

    def get_by_id(self, contract_id):
        return self.stored

    def _response(self, payload, contract_id="K1"):
        body = payload.to_wire()
        body["id"] = contract_id
        return ContractResponse.model_validate(body)

    def create(self, payload):
        if self.fail:
            raise TransportError("API Error 500: boom", status_code=500)
        self.created.append(payload)
        return self._response(payload)

    def update(self, contract_id, payload):
        if self.fail:
            raise TransportError("API Error 500: boom", status_code=500)
        self.updated.append((contract_id, payload))
        return self._response(payload, contract_id)


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def contracts():
    return FakeContracts()


@pytest.fixture
def session(directory, contracts):
    draft = ContractDraft.new(today=date(2025, 3, 10))
    session = ContractSession(directory, contracts, draft=draft)
    session.start()
    return session


@pytest.fixture
def valid_draft():
    return ContractDraft(
        client_id="C1",
        pickup_date=date(2025, 3, 10),
        return_date=date(2025, 3, 11),
        items=[ContractItemDraft(product_id="P1", quantity=2, unit_value=50)],
        payments=[PaymentDraft(total_value=100, final_value=100)],
    )


@pytest.fixture
def failing_directory():
    return FakeDirectory(fail=True)


@pytest.fixture
def failing_contracts():
    return FakeContracts(fail=True)


@pytest.fixture
def stored_contract():
    return ContractResponse.model_validate(
        {
            "id": "K5",
            "clientId": "C1",
            "status": "ACTIVE",
            "pickupDate": "2025-03-10T00:00:00.000Z",
            "returnDate": "2025-03-12T00:00:00.000Z",
            "items": [{"id": "I1", "productId": "P3", "quantity": 1, "unitValue": 30}],
            "payments": [
                {"method": "CASH", "totalValue": 30, "discountType": "FIXED", "discountValue": 5, "finalValue": 25}
            ],
        }
    )
