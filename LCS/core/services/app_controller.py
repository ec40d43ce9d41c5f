"""
Application Controller
Owns the AppState, applies actions and mirrors every change to the document store
"""

from datetime import date
from typing import List, Optional
import logging

from core.models.entities import Agent, Loan
from core.models.state import AppState
from core.repositories.agent_repository import AgentRepository, SessionRepository
from core.repositories.loan_repository import LoanRepository
from core.services import state_reducer
from db.database import DocumentStore

logger = logging.getLogger(__name__)

class LoanCollectionApp:
    """Single owner of application state.

    State is loaded once at construction. After each successful
    ``dispatch`` the agents, loans and logged-in user documents are all
    written back; a rejected action leaves both state and store untouched.
    """

    def __init__(self, store: DocumentStore = None):
        self.agent_repo = AgentRepository(store)
        self.loan_repo = LoanRepository(store)
        self.session_repo = SessionRepository(store)
        self.state = self.load_state()

    def load_state(self) -> AppState:
        agents = self.agent_repo.load_agents()
        loans = self.loan_repo.load_loans()
        current_user = self.session_repo.load_current_user(agents)
        logger.info(f"Loaded {len(agents)} agent(s) and {len(loans)} loan(s)")
        return AppState(agents=tuple(agents), loans=tuple(loans), current_user=current_user)

    def dispatch(self, action, today: date = None) -> AppState:
        """Apply an action and persist the resulting state.

        The in-memory state only advances once every document is written,
        so a StorageException leaves ``self.state`` at the previous value.
        """
        new_state = state_reducer.reduce(self.state, action, today=today)
        self.persist(new_state)
        self.state = new_state
        return new_state

    def persist(self, state: AppState = None) -> None:
        if state is None:
            state = self.state
        self.agent_repo.save_agents(list(state.agents))
        self.loan_repo.save_loans(list(state.loans))
        self.session_repo.save_current_user(state.current_user)

    # Convenience accessors for pages

    @property
    def agents(self) -> List[Agent]:
        return list(self.state.agents)

    @property
    def loans(self) -> List[Loan]:
        return list(self.state.loans)

    @property
    def current_user(self) -> Optional[Agent]:
        return self.state.current_user
