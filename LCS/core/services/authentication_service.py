"""
Authentication Service
Username-only login against the agent roster
"""

from typing import Optional, Sequence

from core.models.entities import Agent
from utils.exceptions import (
    AuthenticationException, ValidationException
)
from utils.helpers import LoggingUtils

class AuthenticationService:
    """Service class for login and logout"""

    def login(self, agents: Sequence[Agent], username: Optional[str]) -> Agent:
        """Authenticate a user by username (case-insensitive)"""
        if not username or not username.strip():
            raise ValidationException("Please enter a username.")

        wanted = username.strip().lower()
        for agent in agents:
            if agent.username.lower() == wanted:
                LoggingUtils.log_security_event(
                    "login_success",
                    user_id=agent.id,
                    details={'username': agent.username, 'admin': agent.is_admin}
                )
                return agent

        LoggingUtils.log_security_event("login_failed", details={'username': username.strip()})
        raise AuthenticationException("Invalid username. Please try again.")

    def logout(self, agent: Optional[Agent]) -> None:
        if agent is not None:
            LoggingUtils.log_security_event("logout", user_id=agent.id,
                                            details={'username': agent.username})
