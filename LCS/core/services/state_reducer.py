"""
State Reducer
Pure transitions from one AppState to the next
"""

from dataclasses import replace
from datetime import date
from typing import Callable, Dict, Optional
import logging

from core.models.entities import Agent
from core.models.state import (
    AppState, Login, Logout, ImportLoans, DistributeUnassigned, RecordPayment,
    UpdateRemark, AddCommunicationLog, AddAgent, DeleteAgent, DeleteLoan
)
from core.services.agent_service import AgentService
from core.services.authentication_service import AuthenticationService
from core.services.distribution_service import DistributionEngine
from core.services.loan_service import LoanService
from utils.exceptions import LoanCollectionException

logger = logging.getLogger(__name__)

auth_svc = AuthenticationService()
agent_svc = AgentService()
loan_svc = LoanService()
engine = DistributionEngine()


def _login(state: AppState, action: Login, today: date) -> AppState:
    agent = auth_svc.login(state.agents, action.username)
    return replace(state, current_user=agent)


def _logout(state: AppState, action: Logout, today: date) -> AppState:
    auth_svc.logout(state.current_user)
    return replace(state, current_user=None)


def _import_loans(state: AppState, action: ImportLoans, today: date) -> AppState:
    if action.distribute:
        loans = engine.distribute(action.loans, state.loans, state.agents)
    else:
        loans = list(state.loans) + [replace(loan, assigned_agent_id=None) for loan in action.loans]
    return replace(state, loans=tuple(loans))


def _distribute_unassigned(state: AppState, action: DistributeUnassigned, today: date) -> AppState:
    return replace(state, loans=tuple(engine.distribute([], state.loans, state.agents)))


def _record_payment(state: AppState, action: RecordPayment, today: date) -> AppState:
    loan = loan_svc.find_loan(state.loans, action.loan_id)
    updated = loan_svc.record_payment(loan, action.amount, today=today)
    return replace(state, loans=tuple(loan_svc.replace_loan(state.loans, updated)))


def _update_remark(state: AppState, action: UpdateRemark, today: date) -> AppState:
    loan = loan_svc.find_loan(state.loans, action.loan_id)
    updated = loan_svc.update_remark(loan, action.remark)
    return replace(state, loans=tuple(loan_svc.replace_loan(state.loans, updated)))


def _add_communication_log(state: AppState, action: AddCommunicationLog, today: date) -> AppState:
    loan = loan_svc.find_loan(state.loans, action.loan_id)
    author = _agent_or_none(state, action.agent_id)
    updated = loan_svc.add_communication_log(
        loan, action.type, action.notes, action.agent_id, agent=author, today=today
    )
    return replace(state, loans=tuple(loan_svc.replace_loan(state.loans, updated)))


def _add_agent(state: AppState, action: AddAgent, today: date) -> AppState:
    return replace(state, agents=tuple(agent_svc.add_agent(state.agents, action.name, action.username)))


def _delete_agent(state: AppState, action: DeleteAgent, today: date) -> AppState:
    agents, loans = agent_svc.delete_agent(state.agents, state.loans, action.agent_id)
    current_user = state.current_user
    if current_user is not None and current_user.id == action.agent_id:
        current_user = None
    return AppState(agents=tuple(agents), loans=tuple(loans), current_user=current_user)


def _delete_loan(state: AppState, action: DeleteLoan, today: date) -> AppState:
    return replace(state, loans=tuple(loan_svc.delete_loan(state.loans, action.loan_id)))


def _agent_or_none(state: AppState, agent_id: str) -> Optional[Agent]:
    for agent in state.agents:
        if agent.id == agent_id:
            return agent
    return None


_HANDLERS: Dict[type, Callable[[AppState, object, date], AppState]] = {
    Login: _login,
    Logout: _logout,
    ImportLoans: _import_loans,
    DistributeUnassigned: _distribute_unassigned,
    RecordPayment: _record_payment,
    UpdateRemark: _update_remark,
    AddCommunicationLog: _add_communication_log,
    AddAgent: _add_agent,
    DeleteAgent: _delete_agent,
    DeleteLoan: _delete_loan,
}


def reduce(state: AppState, action, today: date = None) -> AppState:
    """Apply one action, returning a new state.

    Raises a LoanCollectionException subclass when the action is rejected;
    ``state`` is never modified.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise LoanCollectionException(f"Unknown action: {type(action).__name__}", "UNKNOWN_ACTION")
    return handler(state, action, today)
