"""Deterministic field parsers and per-step validators for the contract wizard.

Validators never raise for user input. They return a mapping of error key to
message where keys address the offending control: ``clientId``,
``items[2].quantity``, ``payments[0].discountValue`` or a section-level key
such as ``items``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from rentalshop.models.draft import ContractDraft

FieldErrors = dict[str, str]

_INDEXED_KEY_RE = re.compile(r"^(?P<collection>\w+)\[(?P<index>\d+)\]\.(?P<field>\w+)$")


def add_error(errors: FieldErrors, field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def error_key(collection: str, index: int, field: str) -> str:
    return f"{collection}[{index}].{field}"


def shift_indexed_errors(errors: FieldErrors, collection: str, removed_index: int) -> FieldErrors:
    """Drop errors of a removed row and move later rows' errors down by one."""
    shifted: FieldErrors = {}
    for key, message in errors.items():
        match = _INDEXED_KEY_RE.match(key)
        if not match or match.group("collection") != collection:
            shifted[key] = message
            continue
        index = int(match.group("index"))
        if index == removed_index:
            continue
        if index > removed_index:
            index -= 1
        shifted[error_key(collection, index, match.group("field"))] = message
    return shifted


def parse_number(value: Any, integer: bool = False) -> Any:
    """Parse form input into a number.

    Blank input becomes ``None``. Unparseable input is returned unchanged so the
    step validator can flag it.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return int(value) if integer and float(value).is_integer() else value
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return value
    if integer and number.is_integer():
        return int(number)
    return number


def is_number(value: Any) -> bool:
    """Finite int or float; nan and infinities count as unparseable input."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def as_float(value: Any) -> float:
    """Numeric value of a field for totals; anything non-numeric counts as zero."""
    parsed = parse_number(value)
    return float(parsed) if is_number(parsed) else 0.0


def parse_date(value: Any) -> Any:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a date.

    Blank input becomes ``None``; unparseable input is returned unchanged.
    """
    if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
        return value
    if isinstance(value, datetime):
        return value.date()
    text = str(value).strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            return datetime.strptime(text, "%Y-%m-%d").date()
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return value


def _check_date(errors: FieldErrors, field: str, value: Any, label: str, required: bool) -> date | None:
    if value is None or value == "":
        if required:
            add_error(errors, field, f"{label} is required")
        return None
    if not isinstance(value, date):
        add_error(errors, field, f"{label} must be a valid date (YYYY-MM-DD)")
        return None
    return value


def validate_basic_info(draft: ContractDraft) -> FieldErrors:
    """Client reference and date ordering."""
    errors: FieldErrors = {}
    if not (draft.client_id or "").strip():
        add_error(errors, "clientId", "Client is required")

    pickup = _check_date(errors, "pickupDate", draft.pickup_date, "Pickup date", required=True)
    returned = _check_date(errors, "returnDate", draft.return_date, "Return date", required=True)
    fitting = _check_date(errors, "fittingDate", draft.fitting_date, "Fitting date", required=False)

    if pickup and returned and returned <= pickup:
        add_error(errors, "returnDate", "Return date must be after the pickup date")
    if fitting and pickup and fitting > pickup:
        add_error(errors, "fittingDate", "Fitting date must be on or before the pickup date")
    return errors


def validate_items(draft: ContractDraft, allowed_product_ids: Iterable[str] | None = None) -> FieldErrors:
    """Non-empty item list where every row is complete and positive."""
    errors: FieldErrors = {}
    if not draft.items:
        add_error(errors, "items", "Add at least one item to the contract")
        return errors

    allowed = set(allowed_product_ids) if allowed_product_ids is not None else None
    for index, item in enumerate(draft.items):
        if not item.product_id:
            add_error(errors, error_key("items", index, "productId"), "Select a product")
        elif allowed is not None and item.product_id not in allowed:
            add_error(errors, error_key("items", index, "productId"), "Product is not available for rental")

        quantity = item.quantity
        if not is_number(quantity) or not float(quantity).is_integer():
            add_error(errors, error_key("items", index, "quantity"), "Quantity must be a whole number")
        elif quantity <= 0:
            add_error(errors, error_key("items", index, "quantity"), "Quantity must be greater than zero")

        if not is_number(item.unit_value):
            add_error(errors, error_key("items", index, "unitValue"), "Unit value must be a number")
        elif item.unit_value <= 0:
            add_error(errors, error_key("items", index, "unitValue"), "Unit value must be greater than zero")
    return errors


def check_index(rows: list, index: int, kind: str) -> None:
    """Fail fast on a row index that does not address an existing row."""
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(rows):
        raise IndexError(f"{kind} index out of range: {index!r} (size {len(rows)})")
