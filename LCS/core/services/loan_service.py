"""
Loan Service — Business logic for payments, remarks, communication logs and loan queries.

Every operation returns new Loan objects; the inputs are left untouched so
the caller decides when a change becomes part of the application state.
"""
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional, Sequence
import logging

from core.models.entities import (
    Agent, Loan, LoanStatus, Payment, CommunicationLogEntry
)
from core.services.distribution_service import DistributionEngine
from utils.exceptions import LoanNotFoundException
from utils.helpers import DateUtils, StringUtils, LoggingUtils
from utils.validators import CollectionValidator

logger = logging.getLogger(__name__)


class LoanService:

    # ── Payments ───────────────────────────────────────────────────────────────
    def record_payment(self, loan: Loan, amount: Any, today: date = None) -> Loan:
        """Apply a repayment to a loan.

        Raises InvalidPaymentException for non-positive amounts and for
        amounts above the outstanding balance; the loan is not modified.
        """
        amount = CollectionValidator.validate_payment_amount(amount, loan.outstanding_balance)
        if today is None:
            today = DateUtils.today()

        new_balance = max(Decimal('0'), loan.outstanding_balance - amount)
        paid_off = new_balance <= 0

        updated = replace(
            loan,
            outstanding_balance=new_balance,
            status=LoanStatus.PAID_OFF if paid_off else LoanStatus.OUTSTANDING,
            payment_history=list(loan.payment_history) + [Payment(amount=amount, date=today.isoformat())],
            pass_due_date=self._pass_due_after_payment(loan, paid_off, today),
        )

        LoggingUtils.log_business_event(
            "PAYMENT_RECORDED", "loan", loan.id,
            user_id=loan.assigned_agent_id,
            details={'amount': str(amount), 'balance': str(new_balance), 'account': loan.account_number},
        )
        return updated

    @staticmethod
    def _pass_due_after_payment(loan: Loan, paid_off: bool, today: date) -> Optional[str]:
        if paid_off or not loan.expected_repayment_date:
            return None

        due = DateUtils.parse_iso(loan.expected_repayment_date)
        if due is None:
            return None
        if today > due and not loan.pass_due_date:
            return loan.expected_repayment_date
        if today <= due:
            return None
        return loan.pass_due_date

    # ── Remarks & Communication ────────────────────────────────────────────────
    def update_remark(self, loan: Loan, remark: Optional[str]) -> Loan:
        """Replace the loan remark (may be blank)"""
        return replace(loan, remark=remark or "")

    def add_communication_log(self, loan: Loan, comm_type: Any, notes: Any,
                              agent_id: str, agent: Optional[Agent] = None,
                              today: date = None) -> Loan:
        """Prepend a communication entry, snapshotting the author's name"""
        comm_type = CollectionValidator.validate_communication_type(comm_type)
        notes = CollectionValidator.validate_required_text(notes, "Notes")
        if today is None:
            today = DateUtils.today()

        entry = CommunicationLogEntry(
            id=StringUtils.generate_id(),
            date=today.isoformat(),
            type=comm_type,
            notes=notes,
            agent_id=agent_id,
            agent_name=agent.name if agent and agent.name else "Unknown Agent",
        )
        return replace(loan, communication_history=[entry] + list(loan.communication_history))

    # ── Loan Queries ───────────────────────────────────────────────────────────
    def find_loan(self, loans: Sequence[Loan], loan_id: str) -> Loan:
        """Return the loan with the given id"""
        for loan in loans:
            if loan.id == loan_id:
                return loan
        raise LoanNotFoundException(f"Loan {loan_id} not found")

    def replace_loan(self, loans: Sequence[Loan], updated: Loan) -> List[Loan]:
        """Swap in an updated loan, keeping list order"""
        self.find_loan(loans, updated.id)
        return [updated if loan.id == updated.id else loan for loan in loans]

    def delete_loan(self, loans: Sequence[Loan], loan_id: str) -> List[Loan]:
        """Remove a loan by id"""
        loan = self.find_loan(loans, loan_id)
        LoggingUtils.log_business_event("LOAN_DELETED", "loan", loan_id,
                                        details={'account': loan.account_number})
        return [l for l in loans if l.id != loan_id]

    def unassign_agent_loans(self, loans: Sequence[Loan], agent_id: str) -> List[Loan]:
        """Release every loan held by an agent back to the unassigned pool"""
        return [
            replace(loan, assigned_agent_id=None) if loan.assigned_agent_id == agent_id else loan
            for loan in loans
        ]

    def get_loans_for_agent(self, loans: Sequence[Loan], agent_id: str) -> List[Loan]:
        """Loans currently assigned to an agent"""
        return [loan for loan in loans if loan.assigned_agent_id == agent_id]

    def search_loans(self, loans: Sequence[Loan], term: Optional[str]) -> List[Loan]:
        """Filter by client, account number or phone (case-insensitive)"""
        if not term or not term.strip():
            return list(loans)

        needle = term.strip()
        return [
            loan for loan in loans
            if StringUtils.contains_ignore_case(loan.client, needle)
            or StringUtils.contains_ignore_case(loan.account_number, needle)
            or StringUtils.contains_ignore_case(loan.phone_number, needle)
        ]

    def get_unassigned_loans(self, loans: Sequence[Loan]) -> List[Loan]:
        """Outstanding loans with no agent"""
        return [loan for loan in loans if DistributionEngine.needs_assignment(loan)]
