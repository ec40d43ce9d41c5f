"""
Data Models for the Loan Collection System
Dataclasses representing persisted documents and spreadsheet cells
"""

import math
import numbers
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, List, Any
from enum import Enum

# Enums for persisted string values
class LoanStatus(Enum):
    OUTSTANDING = 'Outstanding'
    PAID_OFF = 'Paid Off'

class CommunicationType(Enum):
    CALL = 'Call'
    EMAIL = 'Email'
    VISIT = 'Visit'
    SMS = 'SMS'
    OTHER = 'Other'

class CellKind(Enum):
    TEXT = 'text'
    NUMBER = 'number'
    EMPTY = 'empty'

@dataclass(frozen=True)
class Payment:
    """Single repayment recorded against a loan"""
    amount: Decimal = Decimal('0.00')
    date: str = ""

@dataclass(frozen=True)
class CommunicationLogEntry:
    """Outreach event logged by an agent.

    ``agent_name`` is the creator's name at the time the entry was written.
    It is never refreshed, so renamed or deleted agents still show up as
    they were when the note was taken.
    """
    id: str = ""
    date: str = ""
    type: CommunicationType = CommunicationType.CALL
    notes: str = ""
    agent_id: str = ""
    agent_name: str = "Unknown Agent"

@dataclass
class Agent:
    """System user: collection agent or administrator"""
    id: str = ""
    name: str = ""
    username: str = ""
    is_admin: bool = False

@dataclass
class Loan:
    """Loan under collection"""
    id: str = ""
    account_number: str = ""
    client: Optional[str] = None
    branch: Optional[str] = None
    phone_number: Optional[str] = None
    product: str = ""
    original_amount: Decimal = Decimal('0.00')
    total_liab: Optional[Decimal] = None
    repayment_amount: Optional[Decimal] = None
    interest_repaid: Optional[Decimal] = None
    interest_outstanding: Optional[Decimal] = None
    start_date: Optional[str] = None
    expected_repayment_date: Optional[str] = None
    matured_on: Optional[str] = None
    pass_due_date: Optional[str] = None
    remark: Optional[str] = None
    status: LoanStatus = LoanStatus.OUTSTANDING
    outstanding_balance: Decimal = Decimal('0.00')
    assigned_agent_id: Optional[str] = None
    payment_history: List[Payment] = field(default_factory=list)
    communication_history: List[CommunicationLogEntry] = field(default_factory=list)
    term: Optional[int] = None
    interest_rate: Optional[Decimal] = None

    @property
    def is_paid_off(self) -> bool:
        return self.status == LoanStatus.PAID_OFF

    @property
    def is_unassigned(self) -> bool:
        return not self.assigned_agent_id

    @property
    def total_repaid(self) -> Decimal:
        return sum((p.amount for p in self.payment_history), Decimal('0.00'))

    @property
    def principal_repaid(self) -> Decimal:
        return self.original_amount - self.outstanding_balance

@dataclass
class AgentPerformance:
    """Collection figures for one agent"""
    agent_id: str = ""
    name: str = ""
    assigned_loans_count: int = 0
    total_original_assigned_amount: Decimal = Decimal('0.00')
    payments_collected_count: int = 0
    total_amount_collected: Decimal = Decimal('0.00')
    paid_off_loans_count: int = 0
    outstanding_loans_count: int = 0
    total_outstanding_amount: Decimal = Decimal('0.00')

@dataclass(frozen=True)
class Cell:
    """One spreadsheet cell: text, number or empty.

    Numbers keep their display text so that identifiers such as account
    numbers survive unchanged (``"00123"`` stays ``"00123"``).
    """
    kind: CellKind = CellKind.EMPTY
    text: str = ""
    number: Optional[float] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "Cell":
        """Type a raw value coming out of the spreadsheet engine"""
        if raw is None or isinstance(raw, bool):
            return cls() if raw is None else cls(CellKind.TEXT, str(raw))
        if isinstance(raw, numbers.Real):
            if isinstance(raw, float) and math.isnan(raw):
                return cls()
            value = float(raw)
            text = str(int(value)) if value.is_integer() else str(value)
            return cls(CellKind.NUMBER, text, value)
        if isinstance(raw, datetime):
            return cls(CellKind.TEXT, raw.date().isoformat())
        if isinstance(raw, date):
            return cls(CellKind.TEXT, raw.isoformat())

        text = str(raw).strip()
        if not text:
            return cls()
        try:
            number = Decimal(text)
        except InvalidOperation:
            return cls(CellKind.TEXT, text)
        if not number.is_finite():
            return cls(CellKind.TEXT, text)
        return cls(CellKind.NUMBER, text, float(number))

    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def value(self) -> Any:
        """Number for numeric cells, text otherwise"""
        return self.number if self.kind == CellKind.NUMBER else self.text
