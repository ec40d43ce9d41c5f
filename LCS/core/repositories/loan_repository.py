"""
Loan Repository
Handles persistence of the loan list document
"""

from typing import Optional, List, Dict, Any
from decimal import Decimal
import logging

from core.repositories.base_repository import BaseRepository
from core.models.entities import (
    Loan, LoanStatus, Payment, CommunicationLogEntry, CommunicationType
)
from db.database import LOANS_KEY, DocumentStore
from db.seed_data import seed_loans
from utils.helpers import NumberUtils

logger = logging.getLogger(__name__)

class LoanRepository(BaseRepository):
    """Repository for the ``loans`` document"""

    def __init__(self, store: DocumentStore = None):
        super().__init__(LOANS_KEY, store)

    def load_loans(self) -> List[Loan]:
        """Load stored loans, falling back to the seed portfolio"""
        loans = self.load()
        if loans is None:
            logger.info("No usable loan document found, using seed loans")
            return seed_loans()
        return loans

    def save_loans(self, loans: List[Loan]) -> None:
        self.save(loans)

    def from_document(self, document: Any) -> List[Loan]:
        if not isinstance(document, list):
            raise TypeError(f"Expected a list of loans, got {type(document).__name__}")
        return [self._dict_to_loan(loan_data) for loan_data in document]

    def to_document(self, loans: List[Loan]) -> List[Dict[str, Any]]:
        return [self._loan_to_dict(loan) for loan in loans]

    def _loan_to_dict(self, loan: Loan) -> Dict[str, Any]:
        """Convert Loan to its stored camelCase form"""
        money = NumberUtils.to_json_number
        return {
            'id': loan.id,
            'client': loan.client,
            'branch': loan.branch,
            'accountNumber': loan.account_number,
            'phoneNumber': loan.phone_number,
            'product': loan.product,
            'originalAmount': money(loan.original_amount),
            'totalLiab': money(loan.total_liab),
            'startDate': loan.start_date,
            'maturedOn': loan.matured_on,
            'expectedRepaymentDate': loan.expected_repayment_date,
            'repaymentAmount': money(loan.repayment_amount),
            'remark': loan.remark,
            'passDueDate': loan.pass_due_date,
            'interestRepaid': money(loan.interest_repaid),
            'outstandingBalance': money(loan.outstanding_balance),
            'interestOutstanding': money(loan.interest_outstanding),
            'status': loan.status.value if isinstance(loan.status, LoanStatus) else loan.status,
            'assignedAgentId': loan.assigned_agent_id,
            'paymentHistory': [
                {'amount': money(p.amount), 'date': p.date} for p in loan.payment_history
            ],
            'communicationHistory': [
                {
                    'id': entry.id,
                    'date': entry.date,
                    'type': entry.type.value if isinstance(entry.type, CommunicationType) else entry.type,
                    'notes': entry.notes,
                    'agentId': entry.agent_id,
                    'agentName': entry.agent_name,
                }
                for entry in loan.communication_history
            ],
            'term': loan.term,
            'interestRate': money(loan.interest_rate),
        }

    def _dict_to_loan(self, loan_data: Dict[str, Any]) -> Loan:
        """Convert stored dictionary to Loan object"""
        history = loan_data.get('communicationHistory')
        if not isinstance(history, list):
            history = []

        return Loan(
            id=loan_data['id'],
            account_number=str(loan_data['accountNumber']),
            client=loan_data.get('client'),
            branch=loan_data.get('branch'),
            phone_number=_optional_str(loan_data.get('phoneNumber')),
            product=loan_data.get('product') or "",
            original_amount=_to_decimal(loan_data['originalAmount']),
            total_liab=_optional_decimal(loan_data.get('totalLiab')),
            repayment_amount=_optional_decimal(loan_data.get('repaymentAmount')),
            interest_repaid=_optional_decimal(loan_data.get('interestRepaid')),
            interest_outstanding=_optional_decimal(loan_data.get('interestOutstanding')),
            start_date=loan_data.get('startDate'),
            expected_repayment_date=loan_data.get('expectedRepaymentDate'),
            matured_on=loan_data.get('maturedOn'),
            pass_due_date=loan_data.get('passDueDate'),
            remark=loan_data.get('remark'),
            status=LoanStatus(loan_data.get('status', LoanStatus.OUTSTANDING.value)),
            outstanding_balance=_to_decimal(loan_data['outstandingBalance']),
            assigned_agent_id=loan_data.get('assignedAgentId'),
            payment_history=[
                Payment(amount=_to_decimal(p['amount']), date=p['date'])
                for p in loan_data.get('paymentHistory') or []
            ],
            communication_history=[
                CommunicationLogEntry(
                    id=entry['id'],
                    date=entry['date'],
                    type=CommunicationType(entry['type']),
                    notes=entry['notes'],
                    agent_id=entry['agentId'],
                    agent_name=entry.get('agentName') or 'Unknown Agent',
                )
                for entry in history
            ],
            term=loan_data.get('term'),
            interest_rate=_optional_decimal(loan_data.get('interestRate')),
        )


def _to_decimal(value: Any) -> Decimal:
    amount = NumberUtils.parse_amount(value)
    if amount is None:
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def _optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return _to_decimal(value)


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
