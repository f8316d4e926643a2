"""Items ledger: the ordered list of rented items inside a draft."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from rentalshop.models.draft import ContractItemDraft
from rentalshop.utils.validators import as_float, check_index, parse_number

logger = logging.getLogger(__name__)

ITEM_FIELDS = ("product_id", "quantity", "unit_value")


class ItemsLedger:
    """Position-addressed collection of rented items.

    ``rental_value_of`` resolves a product id to its current rental value; it is
    consulted whenever an item's product changes.
    """

    def __init__(
        self,
        items: list[ContractItemDraft],
        rental_value_of: Callable[[str], float | None],
    ) -> None:
        self._items = items
        self._rental_value_of = rental_value_of

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> ContractItemDraft:
        check_index(self._items, index, "item")
        return self._items[index]

    @property
    def items(self) -> list[ContractItemDraft]:
        return self._items

    def add_item(self) -> int:
        self._items.append(ContractItemDraft())
        return len(self._items) - 1

    def set_item(self, index: int, field: str, value: Any) -> ContractItemDraft:
        check_index(self._items, index, "item")
        if field not in ITEM_FIELDS:
            raise ValueError(f"Unknown item field: {field}")

        item = self._items[index]
        if field == "product_id":
            item.product_id = value or ""
            rental_value = self._rental_value_of(item.product_id) if item.product_id else None
            item.unit_value = rental_value if rental_value is not None else 0
        elif field == "quantity":
            item.quantity = parse_number(value, integer=True)
        else:
            item.unit_value = parse_number(value)
        return item

    def remove_item(self, index: int) -> ContractItemDraft:
        check_index(self._items, index, "item")
        removed = self._items.pop(index)
        logger.debug("items.removed", extra={"event": "items.removed", "path": f"items[{index}]"})
        return removed

    def line_total(self, index: int) -> float:
        item = self[index]
        return as_float(item.quantity) * as_float(item.unit_value)

    def total(self) -> float:
        return sum(as_float(item.quantity) * as_float(item.unit_value) for item in self._items)
