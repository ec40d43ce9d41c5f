"""Tests for the persisting application controller."""

from decimal import Decimal

import pytest

from core.models.state import AddAgent, Login, Logout, RecordPayment
from core.services.app_controller import LoanCollectionApp
from db.database import DocumentStore
from utils.exceptions import InvalidPaymentException, StorageException


class TestLoanCollectionApp:
    """Tests for LoanCollectionApp load and dispatch."""

    def test_first_run_uses_seed_data(self, store: DocumentStore) -> None:
        app = LoanCollectionApp(store)

        assert len(app.agents) == 3
        assert len(app.loans) == 5
        assert app.current_user is None

    def test_dispatch_persists_all_documents(self, store: DocumentStore) -> None:
        app = LoanCollectionApp(store)

        app.dispatch(Login("johnc"))

        assert len(store.get_json("agents")) == 3
        assert len(store.get_json("loans")) == 5
        assert store.get_json("loggedInUser")["username"] == "johnc"

    def test_session_survives_restart(self, store: DocumentStore) -> None:
        LoanCollectionApp(store).dispatch(Login("SarahF"))

        restarted = LoanCollectionApp(store)

        assert restarted.current_user.username == "sarahf"

    def test_logout_removes_session_document(self, store: DocumentStore) -> None:
        app = LoanCollectionApp(store)
        app.dispatch(Login("admin"))
        app.dispatch(Logout())

        assert store.get("loggedInUser") is None

    def test_changes_survive_restart(self, store: DocumentStore) -> None:
        app = LoanCollectionApp(store)
        app.dispatch(AddAgent("Nina Field", "ninaf"))
        loan = next(l for l in app.loans if l.account_number == "LN003")
        app.dispatch(RecordPayment(loan.id, Decimal("500")))

        restarted = LoanCollectionApp(store)

        assert "ninaf" in [a.username for a in restarted.agents]
        restored = next(l for l in restarted.loans if l.account_number == "LN003")
        assert restored.outstanding_balance == Decimal("14500")
        assert len(restored.payment_history) == 1

    def test_rejected_action_changes_nothing(self, store: DocumentStore) -> None:
        app = LoanCollectionApp(store)
        loan = app.loans[0]

        with pytest.raises(InvalidPaymentException):
            app.dispatch(RecordPayment(loan.id, Decimal("999999")))

        assert app.loans[0] == loan
        assert store.get("loans") is None

    def test_failed_write_keeps_previous_state(self, store: DocumentStore, monkeypatch) -> None:
        app = LoanCollectionApp(store)
        before = app.state

        def fail(key, value):
            raise StorageException(f"Failed to store {key}: disk full")

        monkeypatch.setattr(store, "set", fail)

        with pytest.raises(StorageException):
            app.dispatch(Login("johnc"))

        assert app.state is before
        assert app.current_user is None
