"""
Agent Repository
Handles persistence of the agent roster and the logged-in user documents
"""

from typing import Optional, List, Dict, Any
import logging

from core.repositories.base_repository import BaseRepository
from core.models.entities import Agent
from db.database import AGENTS_KEY, CURRENT_USER_KEY, DocumentStore
from db.seed_data import seed_agents

logger = logging.getLogger(__name__)


def agent_to_dict(agent: Agent) -> Dict[str, Any]:
    return {
        'id': agent.id,
        'name': agent.name,
        'username': agent.username,
        'isAdmin': bool(agent.is_admin),
    }


def dict_to_agent(agent_data: Dict[str, Any]) -> Agent:
    return Agent(
        id=agent_data['id'],
        name=agent_data.get('name') or "",
        username=agent_data['username'],
        is_admin=bool(agent_data.get('isAdmin', False)),
    )


class AgentRepository(BaseRepository):
    """Repository for the ``agents`` document"""

    def __init__(self, store: DocumentStore = None):
        super().__init__(AGENTS_KEY, store)

    def load_agents(self) -> List[Agent]:
        """Load the roster, falling back to the seed accounts"""
        agents = self.load()
        if agents is None:
            logger.info("No usable agent document found, using seed agents")
            return seed_agents()
        return agents

    def save_agents(self, agents: List[Agent]) -> None:
        self.save(agents)

    def from_document(self, document: Any) -> List[Agent]:
        if not isinstance(document, list):
            raise TypeError(f"Expected a list of agents, got {type(document).__name__}")
        return [dict_to_agent(agent_data) for agent_data in document]

    def to_document(self, agents: List[Agent]) -> List[Dict[str, Any]]:
        return [agent_to_dict(agent) for agent in agents]


class SessionRepository(BaseRepository):
    """Repository for the ``loggedInUser`` document"""

    def __init__(self, store: DocumentStore = None):
        super().__init__(CURRENT_USER_KEY, store)

    def load_current_user(self, agents: List[Agent]) -> Optional[Agent]:
        """Restore the stored user if that agent still exists in the roster"""
        stored = self.load()
        if stored is None:
            return None

        for agent in agents:
            if agent.id == stored.id and agent.username == stored.username:
                return agent

        logger.info(f"Stored user '{stored.username}' no longer exists, ignoring session")
        return None

    def save_current_user(self, agent: Optional[Agent]) -> None:
        """Store the logged-in user, or remove the document on logout"""
        if agent is None:
            self.clear()
        else:
            self.save(agent)

    def from_document(self, document: Any) -> Agent:
        if not isinstance(document, dict):
            raise TypeError(f"Expected an agent object, got {type(document).__name__}")
        return dict_to_agent(document)

    def to_document(self, agent: Agent) -> Dict[str, Any]:
        return agent_to_dict(agent)
