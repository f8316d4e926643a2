from __future__ import annotations

from rentalshop.core.enums import ProductStatus
from rentalshop.schemas.directory import ProductRecord
from rentalshop.services.reference_data import load_reference_data, selectable_products


def test_load_fetches_every_directory_once(directory):
    data = load_reference_data(directory)
    assert sorted(directory.calls) == ["clients", "events", "locations", "products"]
    assert [c.name for c in data.clients] == ["Maria Silva"]
    assert data.event_name("E1") == "Spring wedding"
    assert data.location_name("L1") == "Main hall"


def test_new_contract_sees_only_available_products(directory):
    data = load_reference_data(directory)
    assert data.product_ids() == {"P1", "P2"}
    assert data.rental_value_of("P2") == 120.5
    assert data.rental_value_of("P3") is None


def test_edit_mode_keeps_attached_products():
    products = [
        ProductRecord(id="P1", name="a", status=ProductStatus.AVAILABLE),
        ProductRecord(id="P3", name="b", status=ProductStatus.RENTED),
        ProductRecord(id="P4", name="c", status=ProductStatus.MAINTENANCE),
    ]
    selected = selectable_products(products, attached_product_ids=["P3"])
    assert [p.id for p in selected] == ["P1", "P3"]
