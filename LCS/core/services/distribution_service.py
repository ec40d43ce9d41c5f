"""
Distribution Service
Round-robin assignment of unassigned loans to collection agents
"""

from dataclasses import replace
from typing import List, Sequence
import logging

from core.models.entities import Agent, Loan, LoanStatus
from utils.helpers import LoggingUtils

logger = logging.getLogger(__name__)


class DistributionEngine:
    """Assigns every unassigned outstanding loan to exactly one agent"""

    @staticmethod
    def collection_roster(agents: Sequence[Agent]) -> List[Agent]:
        """Agents eligible to collect, in roster order"""
        return [agent for agent in agents if not agent.is_admin]

    @staticmethod
    def needs_assignment(loan: Loan) -> bool:
        return not loan.assigned_agent_id and loan.status == LoanStatus.OUTSTANDING

    def distribute(self, new_loans: Sequence[Loan], existing_loans: Sequence[Loan],
                   roster: Sequence[Agent]) -> List[Loan]:
        """Assign pooled loans round-robin across the roster.

        The pool is the existing unassigned outstanding loans followed by
        ``new_loans``, each in their original order; ``pool[i]`` goes to
        ``roster[i % len(roster)]``. Assigned or paid-off loans are returned
        first, untouched and in their original order, then the pool. With no
        eligible agents nothing is assigned and ``existing + new`` is
        returned as is.
        """
        agents = self.collection_roster(roster)
        if not agents:
            logger.warning("No collection agents available, loans left unassigned")
            return list(existing_loans) + list(new_loans)

        untouched = [loan for loan in existing_loans if not self.needs_assignment(loan)]
        pool = [loan for loan in existing_loans if self.needs_assignment(loan)] + list(new_loans)

        assigned = [
            replace(loan, assigned_agent_id=agents[index % len(agents)].id)
            for index, loan in enumerate(pool)
        ]

        if assigned:
            LoggingUtils.log_business_event(
                "LOANS_DISTRIBUTED", "loan_pool", f"{len(assigned)} loans",
                details={'agents': len(agents), 'new': len(new_loans)},
            )
        return untouched + assigned
