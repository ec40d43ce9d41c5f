"""Tests for payment recording and loan mutations."""

from datetime import date
from decimal import Decimal

import pytest

from core.models.entities import CommunicationType, LoanStatus
from core.services.loan_service import LoanService
from utils.exceptions import InvalidPaymentException, LoanNotFoundException, ValidationException


@pytest.fixture
def service() -> LoanService:
    return LoanService()


class TestRecordPayment:
    """Tests for LoanService.record_payment."""

    def test_full_payment_pays_off(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="100", expected_repayment_date="2024-01-01", pass_due_date="2024-01-01")

        paid = service.record_payment(loan, Decimal("100"), today=today)

        assert paid.status == LoanStatus.PAID_OFF
        assert paid.outstanding_balance == Decimal("0")
        assert paid.pass_due_date is None
        assert paid.payment_history[-1].amount == Decimal("100")
        assert paid.payment_history[-1].date == "2024-06-01"

    def test_partial_payment(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="1000")

        paid = service.record_payment(loan, "250.50", today=today)

        assert paid.outstanding_balance == Decimal("749.50")
        assert paid.status == LoanStatus.OUTSTANDING
        assert len(paid.payment_history) == 1

    def test_original_loan_untouched(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="1000")

        service.record_payment(loan, Decimal("10"), today=today)

        assert loan.outstanding_balance == Decimal("1000")
        assert loan.payment_history == []

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), "abc", None, "NaN", "Infinity"])
    def test_invalid_amounts(self, service: LoanService, make_loan, today: date, amount) -> None:
        loan = make_loan(balance="100")

        with pytest.raises(InvalidPaymentException, match="valid positive amount"):
            service.record_payment(loan, amount, today=today)

    def test_overpayment_rejected(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="100")

        with pytest.raises(InvalidPaymentException, match="cannot exceed outstanding balance"):
            service.record_payment(loan, Decimal("100.01"), today=today)

        assert loan.outstanding_balance == Decimal("100")
        assert loan.payment_history == []

    def test_overdue_sets_pass_due_when_unset(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="1000", expected_repayment_date="2024-05-01")

        paid = service.record_payment(loan, Decimal("10"), today=today)

        assert paid.pass_due_date == "2024-05-01"

    def test_overdue_keeps_existing_pass_due(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="1000", expected_repayment_date="2024-05-01", pass_due_date="2024-04-01")

        paid = service.record_payment(loan, Decimal("10"), today=today)

        assert paid.pass_due_date == "2024-04-01"

    def test_not_yet_due_clears_pass_due(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="1000", expected_repayment_date="2024-06-01", pass_due_date="2024-05-01")

        paid = service.record_payment(loan, Decimal("10"), today=today)

        assert paid.pass_due_date is None

    def test_no_expected_date_clears_pass_due(self, service: LoanService, make_loan, today: date) -> None:
        loan = make_loan(balance="1000", pass_due_date="2024-05-01")

        assert service.record_payment(loan, Decimal("10"), today=today).pass_due_date is None


class TestRemarksAndCommunication:
    """Tests for remark and communication log updates."""

    def test_update_remark(self, service: LoanService, make_loan) -> None:
        loan = make_loan(remark="old")

        assert service.update_remark(loan, "new").remark == "new"
        assert service.update_remark(loan, None).remark == ""

    def test_communication_entry_is_prepended(self, service: LoanService, make_loan, agent_a, today: date) -> None:
        loan = make_loan()
        first = service.add_communication_log(loan, CommunicationType.CALL, "first", agent_a.id,
                                              agent=agent_a, today=today)

        second = service.add_communication_log(first, "Email", "  second  ", agent_a.id,
                                               agent=agent_a, today=today)

        assert [entry.notes for entry in second.communication_history] == ["second", "first"]
        entry = second.communication_history[0]
        assert entry.type == CommunicationType.EMAIL
        assert entry.agent_name == "Agent A"
        assert entry.date == "2024-06-01"
        assert entry.id != first.communication_history[0].id
        assert loan.communication_history == []

    def test_unknown_author(self, service: LoanService, make_loan) -> None:
        updated = service.add_communication_log(make_loan(), "Visit", "knocked", "ghost")

        assert updated.communication_history[0].agent_name == "Unknown Agent"

    def test_blank_notes_rejected(self, service: LoanService, make_loan) -> None:
        with pytest.raises(ValidationException, match="Notes cannot be empty"):
            service.add_communication_log(make_loan(), "Call", "   ", "agent-a")

    def test_invalid_type_rejected(self, service: LoanService, make_loan) -> None:
        with pytest.raises(ValidationException):
            service.add_communication_log(make_loan(), "Telegram", "hello", "agent-a")


class TestQueries:
    """Tests for lookup, search and deletion helpers."""

    def test_find_missing_loan(self, service: LoanService, make_loan) -> None:
        with pytest.raises(LoanNotFoundException):
            service.find_loan([make_loan("a")], "zzz")

    def test_search_fields(self, service: LoanService, make_loan) -> None:
        loans = [
            make_loan("1", client="Alice Wonderland", phone_number="555-0101"),
            make_loan("2", client="Bob", account_number="LN-ALI-9"),
            make_loan("3", client="Carol", phone_number=None),
        ]

        assert [l.id for l in service.search_loans(loans, "ali")] == ["1", "2"]
        assert [l.id for l in service.search_loans(loans, "0101")] == ["1"]
        assert len(service.search_loans(loans, "  ")) == 3

    def test_delete_and_unassign(self, service: LoanService, make_loan) -> None:
        loans = [make_loan("1", assigned_agent_id="x"), make_loan("2", assigned_agent_id="y")]

        assert [l.id for l in service.delete_loan(loans, "1")] == ["2"]
        released = service.unassign_agent_loans(loans, "x")
        assert [l.assigned_agent_id for l in released] == [None, "y"]
        assert [l.id for l in service.get_loans_for_agent(loans, "y")] == ["2"]

    def test_unassigned_excludes_assigned_and_paid_off(self, service: LoanService, make_loan) -> None:
        loans = [
            make_loan("1"),
            make_loan("2", assigned_agent_id="x"),
            make_loan("3", balance="0", status=LoanStatus.PAID_OFF),
        ]

        assert [l.id for l in service.get_unassigned_loans(loans)] == ["1"]
