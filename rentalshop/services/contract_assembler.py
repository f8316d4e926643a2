"""Contract assembler: turns a validated draft into a REST payload, and back.

Assembly order: full-form validation, numeric coercion, normalization of
absent optionals (omitted, never ``null`` or ``""``), then the create or update
request model.
"""

from __future__ import annotations

import logging

from rentalshop.models.draft import ContractDraft, ContractItemDraft, PaymentDraft
from rentalshop.orchestration.wizard import WizardController
from rentalshop.schemas.contracts import (
    ContractItemPayload,
    ContractResponse,
    CreateContractRequest,
    PaymentPayload,
    UpdateContractRequest,
)
from rentalshop.services.discount_calculator import calculate
from rentalshop.utils.validators import parse_date

logger = logging.getLogger(__name__)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _item_payload(item: ContractItemDraft) -> ContractItemPayload:
    return ContractItemPayload(
        product_id=item.product_id,
        quantity=int(float(item.quantity)),
        unit_value=float(item.unit_value),
    )


def _payment_payload(payment: PaymentDraft) -> PaymentPayload:
    has_discount = payment.discount_type is not None and payment.discount_value is not None
    return PaymentPayload(
        method=payment.method,
        total_value=float(payment.total_value),
        final_value=float(payment.final_value),
        discount_type=payment.discount_type if has_discount else None,
        discount_value=float(payment.discount_value) if has_discount else None,
        notes=_blank_to_none(payment.notes),
    )


class ContractAssembler:
    """Builds ``CreateContractRequest``/``UpdateContractRequest`` from a draft."""

    def build_payload(self, draft: ContractDraft) -> CreateContractRequest | UpdateContractRequest:
        """Coerce and normalize a draft that already passed validation."""
        fields = dict(
            client_id=draft.client_id,
            event_id=_blank_to_none(draft.event_id),
            location_id=_blank_to_none(draft.location_id),
            status=draft.status,
            fitting_date=parse_date(draft.fitting_date),
            pickup_date=parse_date(draft.pickup_date),
            return_date=parse_date(draft.return_date),
            needs_adjustment=bool(draft.needs_adjustment),
            observations=_blank_to_none(draft.observations),
            items=[_item_payload(item) for item in draft.items],
            payments=[_payment_payload(payment) for payment in draft.payments],
        )
        if draft.is_editing:
            return UpdateContractRequest(**fields)
        return CreateContractRequest(**fields)

    def assemble(self, wizard: WizardController) -> CreateContractRequest | UpdateContractRequest | None:
        """Validate every wizard step, then build the payload.

        Returns ``None`` when validation fails; the errors are left on
        ``wizard.errors`` and the wizard is parked on the first failing step.
        """
        if not wizard.submit():
            return None
        payload = self.build_payload(wizard.draft)
        logger.info(
            "contract.payload.assembled",
            extra={"event": "contract.payload.assembled", "contract_id": wizard.draft.contract_id},
        )
        return payload


def draft_from_contract(contract: ContractResponse) -> ContractDraft:
    """Hydrate an edit-mode draft from a persisted contract.

    Stored final values are kept as-is; when a payment carries no stored final
    value the calculator derives it from the stored discount.
    """
    payments = []
    for payment in contract.payments:
        final_value = payment.final_value
        if final_value is None:
            final_value = calculate(payment.total_value, payment.discount_type, payment.discount_value)
        payments.append(
            PaymentDraft(
                method=payment.method,
                total_value=payment.total_value,
                discount_type=payment.discount_type if payment.discount_value is not None else None,
                discount_value=payment.discount_value if payment.discount_type is not None else None,
                final_value=final_value,
                notes=payment.notes,
            )
        )

    return ContractDraft(
        client_id=contract.client_id,
        event_id=contract.event_id or None,
        location_id=contract.location_id or None,
        status=contract.status,
        fitting_date=parse_date(contract.fitting_date),
        pickup_date=parse_date(contract.pickup_date),
        return_date=parse_date(contract.return_date),
        needs_adjustment=contract.needs_adjustment,
        observations=contract.observations,
        items=[
            ContractItemDraft(product_id=item.product_id, quantity=item.quantity, unit_value=item.unit_value)
            for item in contract.items
        ],
        payments=payments,
        contract_id=contract.id,
    )
