"""
Report Service
Agent performance, portfolio snapshot and loan tables for the dashboards
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Sequence

import pandas as pd

from core.models.entities import Agent, AgentPerformance, Loan, LoanStatus
from core.services.distribution_service import DistributionEngine
from core.services.loan_service import LoanService


@dataclass
class PortfolioShare:
    """Outstanding amount held by one agent relative to the largest book"""
    agent_id: str
    name: str
    outstanding: Decimal
    percent_of_max: float


class ReportService:
    """Service class for collection reporting"""

    def __init__(self):
        self.loan_svc = LoanService()

    def agent_performance(self, agents: Sequence[Agent], loans: Sequence[Loan]) -> List[AgentPerformance]:
        """Per-agent collection figures, one row per non-admin agent in roster order"""
        results = []
        for agent in DistributionEngine.collection_roster(agents):
            agent_loans = [loan for loan in loans if loan.assigned_agent_id == agent.id]
            results.append(AgentPerformance(
                agent_id=agent.id,
                name=agent.name,
                assigned_loans_count=len(agent_loans),
                total_original_assigned_amount=sum((l.original_amount for l in agent_loans), Decimal('0')),
                payments_collected_count=sum(len(l.payment_history) for l in agent_loans),
                total_amount_collected=sum((l.total_repaid for l in agent_loans), Decimal('0')),
                paid_off_loans_count=sum(1 for l in agent_loans if l.status == LoanStatus.PAID_OFF),
                outstanding_loans_count=sum(1 for l in agent_loans if l.status == LoanStatus.OUTSTANDING),
                total_outstanding_amount=sum((l.outstanding_balance for l in agent_loans), Decimal('0')),
            ))
        return results

    def portfolio_snapshot(self, performance: Sequence[AgentPerformance]) -> List[PortfolioShare]:
        """Outstanding balance per agent as a share of the largest balance.

        Empty when there are no agents or nothing is outstanding.
        """
        largest = max((p.total_outstanding_amount for p in performance), default=Decimal('0'))
        if largest <= 0:
            return []

        return [
            PortfolioShare(
                agent_id=p.agent_id,
                name=p.name,
                outstanding=p.total_outstanding_amount,
                percent_of_max=float(p.total_outstanding_amount / largest * 100),
            )
            for p in performance
        ]

    def loan_summary(self, loan: Loan) -> Dict[str, Decimal]:
        return {
            'original_amount': loan.original_amount,
            'outstanding_balance': loan.outstanding_balance,
            'total_repaid': loan.total_repaid,
            'principal_repaid': loan.principal_repaid,
        }

    def portfolio_totals(self, loans: Sequence[Loan]) -> Dict[str, object]:
        """Headline figures for the admin dashboard"""
        return {
            'total_loans': len(loans),
            'outstanding_loans': sum(1 for l in loans if l.status == LoanStatus.OUTSTANDING),
            'unassigned_loans': len(self.loan_svc.get_unassigned_loans(loans)),
            'total_outstanding': sum((l.outstanding_balance for l in loans), Decimal('0')),
            'total_collected': sum((l.total_repaid for l in loans), Decimal('0')),
        }

    def performance_frame(self, performance: Sequence[AgentPerformance]) -> pd.DataFrame:
        rows = [{
            "Agent": p.name,
            "Assigned Loans": p.assigned_loans_count,
            "Total Assigned": float(p.total_original_assigned_amount),
            "Payments": p.payments_collected_count,
            "Collected": float(p.total_amount_collected),
            "Paid Off": p.paid_off_loans_count,
            "Outstanding Loans": p.outstanding_loans_count,
            "Outstanding Amount": float(p.total_outstanding_amount),
        } for p in performance]
        return pd.DataFrame(rows)

    def loans_frame(self, loans: Sequence[Loan], agents: Sequence[Agent]) -> pd.DataFrame:
        """Tabular view of loans, used for display and CSV export"""
        names = {agent.id: agent.name for agent in agents}
        rows = [{
            "Account #": loan.account_number,
            "Client": loan.client or "",
            "Branch": loan.branch or "",
            "Phone": loan.phone_number or "",
            "Product": loan.product,
            "Original Amount": float(loan.original_amount),
            "Outstanding": float(loan.outstanding_balance),
            "Expected Repayment": loan.expected_repayment_date or "",
            "Past Due Since": loan.pass_due_date or "",
            "Status": loan.status.value,
            "Agent": names.get(loan.assigned_agent_id, "Unassigned") if loan.assigned_agent_id else "Unassigned",
        } for loan in loans]
        return pd.DataFrame(rows)
