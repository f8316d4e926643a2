from __future__ import annotations

import json
from datetime import date

import pytest
import requests

from rentalshop.core.enums import SessionState, WizardStep
from rentalshop.core.exceptions import SessionNotReadyError, TransportError
from rentalshop.models.draft import ContractDraft
from rentalshop.orchestration.contract_session import LOAD_ERROR_MESSAGE, SAVE_ERROR_MESSAGE, ContractSession
from rentalshop.services.api_client import DirectoryClient


def _fill(session):
    session.set_field("client_id", "C1")
    session.set_field("pickup_date", "2025-03-10")
    session.set_field("return_date", "2025-03-11")
    session.add_item()
    session.set_item(0, "product_id", "P1")
    session.set_item(0, "quantity", "2")
    session.add_payment()
    session.set_payment(0, "discount_type", "PERCENTAGE")
    session.set_payment(0, "discount_value", "10")


def test_mutation_blocked_until_reference_data_loaded(directory, contracts):
    session = ContractSession(directory, contracts)
    assert session.state is SessionState.LOADING
    with pytest.raises(SessionNotReadyError):
        session.add_item()
    session.start()
    assert session.state is SessionState.READY
    session.add_item()


def test_failed_load_records_form_error_and_stays_loading(failing_directory, contracts):
    session = ContractSession(failing_directory, contracts)
    with pytest.raises(TransportError):
        session.start()
    assert session.state is SessionState.LOADING
    assert "form" in session.errors


def test_full_scenario_submits_normalized_payload(session, contracts):
    _fill(session)
    assert session.items.total() == 100
    assert session.payments[0].final_value == 90
    assert session.payments.total() == 90

    assert session.next() is True
    assert session.next() is True
    assert session.next() is True
    assert session.wizard.step is WizardStep.REVIEW

    contract = session.submit()
    assert contract is not None
    assert session.state is SessionState.CLOSED
    wire = contracts.created[0].to_wire()
    assert wire["items"] == [{"productId": "P1", "quantity": 2, "unitValue": 50.0}]
    assert wire["payments"][0]["finalValue"] == 90.0
    assert wire["payments"][0]["discountValue"] == 10.0


def test_submit_with_missing_client_jumps_back_to_first_step(session, contracts):
    _fill(session)
    session.go_to(WizardStep.REVIEW)
    session.set_field("client_id", "")

    assert session.submit() is None
    assert session.wizard.current_step == 0
    assert "clientId" in session.errors
    assert contracts.created == []
    assert session.state is SessionState.READY


def test_payments_step_blocks_on_reconciliation(session):
    _fill(session)
    session.set_payment(0, "discount_value", "60")
    session.go_to(WizardStep.PAYMENTS)
    assert session.next() is False
    assert session.wizard.step is WizardStep.PAYMENTS
    assert "paymentTotal" in session.errors


def test_items_edited_after_payments_step_revalidated_at_submit(session):
    _fill(session)
    session.go_to(WizardStep.REVIEW)
    session.set_item(0, "quantity", 5)
    assert session.submit() is None
    assert session.wizard.step is WizardStep.PAYMENTS
    assert "paymentTotal" in session.errors


def test_discount_pairing_then_clearing_passes(session):
    _fill(session)
    session.set_payment(0, "discount_value", "")
    session.go_to(WizardStep.PAYMENTS)
    assert session.next() is False
    assert "payments[0].discountValue" in session.errors

    session.set_payment(0, "discount_type", None)
    assert session.payments[0].discount_value is None
    assert session.next() is True


def test_date_order_error(session):
    _fill(session)
    session.set_field("return_date", "2025-03-09")
    assert session.next() is False
    assert "returnDate" in session.errors
    session.set_field("return_date", "2025-03-11")
    assert "returnDate" not in session.errors
    assert session.next() is True


def test_removing_row_keeps_errors_in_lockstep(session):
    session.set_field("client_id", "C1")
    session.add_item()
    session.add_item()
    session.set_item(1, "product_id", "P2")
    session.add_item()
    session.go_to(WizardStep.ITEMS)
    assert session.next() is False
    assert "items[0].productId" in session.errors
    assert "items[2].productId" in session.errors

    session.remove_item(0)
    assert "items[1].productId" in session.errors
    assert "items[2].productId" not in session.errors
    assert "items[0].productId" not in session.errors


def test_transport_failure_restores_draft(directory, failing_contracts):
    session = ContractSession(directory, failing_contracts, draft=ContractDraft.new(today=date(2025, 3, 10)))
    session.start()
    _fill(session)
    before = session.draft.snapshot()

    with pytest.raises(TransportError):
        session.submit()

    assert session.state is SessionState.READY
    assert session.errors == {"form": SAVE_ERROR_MESSAGE}
    assert session.draft == before
    session.set_payment(0, "notes", "retry")
    assert session.payments[0].notes == "retry"


def test_edit_mode_updates_existing_contract(directory, contracts, stored_contract):
    contracts.stored = stored_contract
    session = ContractSession.for_contract("K5", directory, contracts)
    assert session.draft.is_editing
    session.start()

    # P3 is rented out but already on this contract, so it stays selectable.
    assert session.reference.product_ids() == {"P1", "P2", "P3"}
    assert session.payments[0].final_value == 25
    assert session.next() is True
    assert session.next() is True
    assert session.next() is True

    assert session.submit() is not None
    contract_id, payload = contracts.updated[0]
    assert contract_id == "K5"
    wire = payload.to_wire()
    assert wire["returnDate"] == "2025-03-12"
    assert wire["payments"][0] == {
        "method": "CASH",
        "totalValue": 30.0,
        "finalValue": 25.0,
        "discountType": "FIXED",
        "discountValue": 5.0,
    }


def test_review_summary_available_on_session(session):
    _fill(session)
    summary = session.review_summary()
    assert summary.items_total == "R$ 100,00"
    assert summary.payments_total == "R$ 90,00"


class _DirectorySession:
    def __init__(self, rows_by_path):
        self.rows_by_path = rows_by_path

    def request(self, method, url, **kwargs):
        response = requests.Response()
        response.status_code = 200
        response._content = json.dumps(self.rows_by_path.get(url.rsplit("/", 1)[-1], [])).encode()
        return response


def test_malformed_reference_row_records_form_error(contracts):
    http = _DirectorySession({"products": [{"id": "P1", "name": "Gala dress", "status": "LOST"}]})
    session = ContractSession(DirectoryClient(session=http), contracts)
    with pytest.raises(TransportError):
        session.start()
    assert session.state is SessionState.LOADING
    assert session.errors == {"form": LOAD_ERROR_MESSAGE}


def test_non_finite_unit_value_blocks_submit_without_raising(session, contracts):
    _fill(session)
    session.go_to(WizardStep.REVIEW)
    session.set_item(0, "unit_value", "nan")

    assert session.submit() is None
    assert session.wizard.step is WizardStep.ITEMS
    assert session.errors["items[0].unitValue"] == "Unit value must be a number"
    assert contracts.created == []
