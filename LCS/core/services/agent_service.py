"""
Agent Service
Roster management: adding and removing collection agents
"""

from typing import List, Sequence, Tuple
import logging

from core.models.entities import Agent, Loan
from core.services.loan_service import LoanService
from utils.exceptions import AgentNotFoundException, ValidationException
from utils.helpers import StringUtils, LoggingUtils
from utils.validators import CollectionValidator

logger = logging.getLogger(__name__)

class AgentService:
    """Service class for agent operations"""

    def __init__(self):
        self.loan_svc = LoanService()

    def find_agent(self, agents: Sequence[Agent], agent_id: str) -> Agent:
        for agent in agents:
            if agent.id == agent_id:
                return agent
        raise AgentNotFoundException(f"Agent {agent_id} not found")

    def add_agent(self, agents: Sequence[Agent], name, username) -> List[Agent]:
        """Append a new non-admin agent to the roster"""
        name, username = CollectionValidator.validate_agent_fields(name, username)

        if any(agent.username.lower() == username.lower() for agent in agents):
            raise ValidationException(f"Username '{username}' is already taken.")

        agent = Agent(id=StringUtils.generate_id(), name=name, username=username, is_admin=False)
        LoggingUtils.log_business_event("AGENT_ADDED", "agent", agent.id,
                                        details={'username': username})
        return list(agents) + [agent]

    def delete_agent(self, agents: Sequence[Agent], loans: Sequence[Loan],
                     agent_id: str) -> Tuple[List[Agent], List[Loan]]:
        """Remove an agent and release their loans to the unassigned pool.

        Administrator accounts cannot be deleted.
        """
        agent = self.find_agent(agents, agent_id)
        if agent.is_admin:
            raise ValidationException("Admin accounts cannot be deleted.")

        remaining = [a for a in agents if a.id != agent_id]
        released = self.loan_svc.unassign_agent_loans(loans, agent_id)

        LoggingUtils.log_business_event(
            "AGENT_DELETED", "agent", agent_id,
            details={'username': agent.username,
                     'released_loans': len(self.loan_svc.get_loans_for_agent(loans, agent_id))}
        )
        return remaining, released
