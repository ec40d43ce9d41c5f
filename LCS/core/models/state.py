"""
Application State and Actions
Whole-app state snapshot and the actions that transform it
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from core.models.entities import Agent, Loan, CommunicationType

@dataclass(frozen=True)
class AppState:
    """Everything the application persists: roster, loans and session"""
    agents: Tuple[Agent, ...] = field(default_factory=tuple)
    loans: Tuple[Loan, ...] = field(default_factory=tuple)
    current_user: Optional[Agent] = None

    @property
    def is_admin(self) -> bool:
        return self.current_user is not None and self.current_user.is_admin

# Actions

@dataclass(frozen=True)
class Login:
    username: str

@dataclass(frozen=True)
class Logout:
    pass

@dataclass(frozen=True)
class ImportLoans:
    """Add freshly imported loans, optionally distributing them right away"""
    loans: Tuple[Loan, ...]
    distribute: bool = True

@dataclass(frozen=True)
class DistributeUnassigned:
    pass

@dataclass(frozen=True)
class RecordPayment:
    loan_id: str
    amount: Any

@dataclass(frozen=True)
class UpdateRemark:
    loan_id: str
    remark: str

@dataclass(frozen=True)
class AddCommunicationLog:
    loan_id: str
    type: CommunicationType
    notes: str
    agent_id: str

@dataclass(frozen=True)
class AddAgent:
    name: str
    username: str

@dataclass(frozen=True)
class DeleteAgent:
    agent_id: str

@dataclass(frozen=True)
class DeleteLoan:
    loan_id: str
