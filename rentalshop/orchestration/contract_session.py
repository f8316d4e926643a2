"""Contract wizard session: one exclusive draft, its ledgers, the wizard and submit."""

from __future__ import annotations

import logging
from typing import Any

from pydantic.alias_generators import to_camel

from rentalshop.core.config import Config, get_config
from rentalshop.core.enums import ContractStatus, SessionState, WizardStep
from rentalshop.core.exceptions import RentalShopException, SessionNotReadyError
from rentalshop.models.draft import ContractDraft
from rentalshop.orchestration.wizard import Step, WizardController
from rentalshop.schemas.contracts import ContractResponse
from rentalshop.services.api_client import ContractApiClient, DirectoryClient
from rentalshop.services.contract_assembler import ContractAssembler, draft_from_contract
from rentalshop.services.items_ledger import ItemsLedger
from rentalshop.services.payments_ledger import PaymentsLedger
from rentalshop.services.reconciliation import ReconciliationValidator
from rentalshop.services.reference_data import ReferenceData, load_reference_data
from rentalshop.services.review_summary import ReviewSummary, build_review_summary
from rentalshop.utils.validators import FieldErrors, parse_date, shift_indexed_errors, validate_basic_info, validate_items

logger = logging.getLogger(__name__)

HEADER_FIELDS = (
    "client_id",
    "event_id",
    "location_id",
    "status",
    "fitting_date",
    "pickup_date",
    "return_date",
    "needs_adjustment",
    "observations",
)
LOAD_ERROR_MESSAGE = "Failed to load the data needed by the form. Try again."
SAVE_ERROR_MESSAGE = "Failed to save the contract. Check the data and try again."


class ContractSession:
    """Owns a single contract draft from reference-data load to submit.

    The session is ``LOADING`` until ``start()`` has fetched the reference data;
    any mutation before that raises ``SessionNotReadyError``. During
    ``submit()`` it is ``SUBMITTING``; on a failed save the draft is restored
    to its pre-submit state and the session returns to ``READY``.
    """

    def __init__(
        self,
        directory: DirectoryClient,
        contracts: ContractApiClient,
        draft: ContractDraft | None = None,
        reconciliation: ReconciliationValidator | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = config or get_config()
        self.directory = directory
        self.contracts = contracts
        self.draft = draft or ContractDraft.new(rental_days=self.config.DEFAULT_RENTAL_DAYS)
        self.reconciliation = reconciliation or ReconciliationValidator(
            lower_ratio=self.config.RECONCILIATION_LOWER_RATIO,
            upper_ratio=self.config.RECONCILIATION_UPPER_RATIO,
            currency_symbol=self.config.CURRENCY_SYMBOL,
        )
        self.assembler = ContractAssembler()
        self.reference = ReferenceData()
        self.state = SessionState.LOADING
        self.items = ItemsLedger(self.draft.items, self.reference_rental_value)
        self.payments = PaymentsLedger(self.draft.payments, self.items.total)
        self.wizard = WizardController(
            self.draft,
            [
                Step(WizardStep.BASIC_INFO, validate_basic_info),
                Step(WizardStep.ITEMS, self._validate_items),
                Step(WizardStep.PAYMENTS, self._validate_payments),
                Step(WizardStep.REVIEW),
            ],
        )

    @classmethod
    def for_contract(
        cls,
        contract_id: str,
        directory: DirectoryClient,
        contracts: ContractApiClient,
        **kwargs: Any,
    ) -> "ContractSession":
        """Edit-mode session hydrated from the persisted contract."""
        draft = draft_from_contract(contracts.get_by_id(contract_id))
        return cls(directory, contracts, draft=draft, **kwargs)

    # -- lifecycle -------------------------------------------------------

    def start(self) -> None:
        attached = [item.product_id for item in self.draft.items] if self.draft.is_editing else []
        try:
            self.reference = load_reference_data(self.directory, attached)
        except RentalShopException:
            self.wizard.errors = {"form": LOAD_ERROR_MESSAGE}
            logger.exception("session.load.failed", extra={"event": "session.load.failed"})
            raise
        self.state = SessionState.READY

    def _require_ready(self) -> None:
        if self.state is not SessionState.READY:
            raise SessionNotReadyError(f"Draft cannot be changed while session is {self.state.value}.")

    @property
    def errors(self) -> FieldErrors:
        return self.wizard.errors

    def _clear_error(self, key: str) -> None:
        self.wizard.errors.pop(key, None)

    # -- step validators -------------------------------------------------

    def reference_rental_value(self, product_id: str) -> float | None:
        return self.reference.rental_value_of(product_id)

    def _validate_items(self, draft: ContractDraft) -> FieldErrors:
        return validate_items(draft, self.reference.product_ids())

    def _validate_payments(self, draft: ContractDraft) -> FieldErrors:
        return self.reconciliation.validate(draft.payments, self.items.total(), self.payments.total())

    # -- header ----------------------------------------------------------

    def set_field(self, field: str, value: Any) -> None:
        self._require_ready()
        if field not in HEADER_FIELDS:
            raise ValueError(f"Unknown contract field: {field}")

        if field in ("fitting_date", "pickup_date", "return_date"):
            value = parse_date(value)
        elif field == "status":
            value = ContractStatus(value)
        elif field == "needs_adjustment":
            value = bool(value)
        elif field == "client_id":
            value = value or ""
        else:
            value = value or None
        setattr(self.draft, field, value)
        self._clear_error(to_camel(field))

    # -- items -----------------------------------------------------------

    def add_item(self) -> int:
        self._require_ready()
        self._clear_error("items")
        return self.items.add_item()

    def set_item(self, index: int, field: str, value: Any) -> None:
        self._require_ready()
        self.items.set_item(index, field, value)
        self._clear_error(f"items[{index}].{to_camel(field)}")
        if field == "product_id":
            self._clear_error(f"items[{index}].unitValue")

    def remove_item(self, index: int) -> None:
        self._require_ready()
        self.items.remove_item(index)
        self.wizard.errors = shift_indexed_errors(self.wizard.errors, "items", index)

    # -- payments --------------------------------------------------------

    def add_payment(self) -> int:
        self._require_ready()
        self._clear_error("payments")
        return self.payments.add_payment()

    def set_payment(self, index: int, field: str, value: Any) -> None:
        self._require_ready()
        self.payments.set_payment(index, field, value)
        self._clear_error(f"payments[{index}].{to_camel(field)}")
        if field == "discount_type":
            self._clear_error(f"payments[{index}].discountValue")

    def remove_payment(self, index: int) -> None:
        self._require_ready()
        self.payments.remove_payment(index)
        self.wizard.errors = shift_indexed_errors(self.wizard.errors, "payments", index)

    # -- navigation ------------------------------------------------------

    def next(self) -> bool:
        self._require_ready()
        return self.wizard.next()

    def previous(self) -> None:
        self._require_ready()
        self.wizard.previous()

    def go_to(self, step: int) -> bool:
        self._require_ready()
        return self.wizard.go_to(step)

    def review_summary(self) -> ReviewSummary:
        return build_review_summary(self.draft, self.reference, self.items.total(), self.payments.total())

    # -- submit ----------------------------------------------------------

    def submit(self) -> ContractResponse | None:
        """Validate everything, assemble the payload and hand it to the API.

        Returns the persisted contract, or ``None`` when validation blocked the
        submit (see ``errors``). Transport errors propagate after the draft has
        been restored and a form-level error recorded.
        """
        self._require_ready()
        snapshot = self.draft.snapshot()
        payload = self.assembler.assemble(self.wizard)
        if payload is None:
            return None

        self.state = SessionState.SUBMITTING
        try:
            if self.draft.is_editing:
                contract = self.contracts.update(self.draft.contract_id, payload)
            else:
                contract = self.contracts.create(payload)
        except RentalShopException:
            self.draft.restore(snapshot)
            self.wizard.errors = {"form": SAVE_ERROR_MESSAGE}
            self.state = SessionState.READY
            logger.warning(
                "session.submit.failed",
                extra={"event": "session.submit.failed", "contract_id": self.draft.contract_id},
            )
            raise

        self.state = SessionState.CLOSED
        return contract
