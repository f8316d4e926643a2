"""Draft model module.

A draft is the unpersisted contract the wizard is assembling. Field values may
still hold raw form input (e.g. ``"12,5"`` typed into a price box) until
validation flags them; numeric coercion happens in the ledgers and again in the
assembler.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from rentalshop.core.enums import ContractStatus, DiscountType, PaymentMethod


@dataclass
class ContractItemDraft:
    product_id: str = ""
    quantity: Any = 1
    unit_value: Any = 0


@dataclass
class PaymentDraft:
    method: PaymentMethod | None = PaymentMethod.PIX
    total_value: Any = 0
    discount_type: DiscountType | None = None
    discount_value: Any = None
    final_value: Any = 0
    notes: str | None = None


@dataclass
class ContractDraft:
    client_id: str = ""
    event_id: str | None = None
    location_id: str | None = None
    status: ContractStatus = ContractStatus.ACTIVE
    fitting_date: date | str | None = None
    pickup_date: date | str | None = None
    return_date: date | str | None = None
    needs_adjustment: bool = False
    observations: str | None = None
    items: list[ContractItemDraft] = field(default_factory=list)
    payments: list[PaymentDraft] = field(default_factory=list)
    contract_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.contract_id is not None

    @classmethod
    def new(cls, today: date | None = None, rental_days: int = 7) -> "ContractDraft":
        """Blank draft: pickup today, return after the default rental period."""
        start = today or date.today()
        return cls(pickup_date=start, return_date=start + timedelta(days=rental_days))

    def snapshot(self) -> "ContractDraft":
        return copy.deepcopy(self)

    def restore(self, snapshot: "ContractDraft") -> None:
        """Overwrite every field in place from a previous snapshot."""
        restored = copy.deepcopy(snapshot)
        for name in self.__dataclass_fields__:
            value = getattr(restored, name)
            if isinstance(value, list):
                # Keep list identity: ledgers hold references to these lists.
                getattr(self, name)[:] = value
            else:
                setattr(self, name, value)
