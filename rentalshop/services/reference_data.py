"""Session-scoped reference data (clients, products, events, locations).

Fetched once, in parallel, when a wizard session starts; never re-fetched or
mutated afterward.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from rentalshop.core.enums import ProductStatus
from rentalshop.schemas.directory import ClientRecord, EventRecord, LocationRecord, ProductRecord
from rentalshop.services.api_client import DirectoryClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceData:
    clients: tuple[ClientRecord, ...] = ()
    products: tuple[ProductRecord, ...] = ()
    events: tuple[EventRecord, ...] = ()
    locations: tuple[LocationRecord, ...] = ()

    def product(self, product_id: str) -> ProductRecord | None:
        return next((p for p in self.products if p.id == product_id), None)

    def rental_value_of(self, product_id: str) -> float | None:
        product = self.product(product_id)
        return product.rental_value if product else None

    def product_ids(self) -> set[str]:
        return {p.id for p in self.products}

    def client_name(self, client_id: str | None) -> str | None:
        return next((c.name for c in self.clients if c.id == client_id), None)

    def event_name(self, event_id: str | None) -> str | None:
        return next((e.name for e in self.events if e.id == event_id), None)

    def location_name(self, location_id: str | None) -> str | None:
        return next((loc.name for loc in self.locations if loc.id == location_id), None)


def selectable_products(
    products: Iterable[ProductRecord],
    attached_product_ids: Iterable[str] = (),
) -> tuple[ProductRecord, ...]:
    """Available products, plus any already attached to the contract being edited."""
    attached = set(attached_product_ids)
    return tuple(p for p in products if p.status is ProductStatus.AVAILABLE or p.id in attached)


def load_reference_data(
    directory: DirectoryClient,
    attached_product_ids: Iterable[str] = (),
) -> ReferenceData:
    """Fetch all four directories concurrently and build the session snapshot."""
    with ThreadPoolExecutor(max_workers=4, thread_name_prefix="reference-data") as pool:
        clients = pool.submit(directory.get_clients)
        products = pool.submit(directory.get_products)
        events = pool.submit(directory.get_events)
        locations = pool.submit(directory.get_locations)
        data = ReferenceData(
            clients=tuple(clients.result()),
            products=selectable_products(products.result(), attached_product_ids),
            events=tuple(events.result()),
            locations=tuple(locations.result()),
        )

    logger.info(
        "reference_data.loaded",
        extra={
            "event": "reference_data.loaded",
            "counts": {
                "clients": len(data.clients),
                "products": len(data.products),
                "events": len(data.events),
                "locations": len(data.locations),
            },
        },
    )
    return data
