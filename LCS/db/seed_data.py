"""
Seed Data
Initial agents and sample loans used on first run or when stored data is unreadable
"""

from decimal import Decimal
from typing import List

from core.models.entities import (
    Agent, Loan, LoanStatus, Payment, CommunicationLogEntry, CommunicationType
)
from utils.helpers import StringUtils

# Fixed IDs so seeded loans can reference seeded agents
ADMIN_ID = '00000000-0000-0000-0000-000000000001'
AGENT_JOHN_ID = '00000000-0000-0000-0000-000000000002'
AGENT_SARAH_ID = '00000000-0000-0000-0000-000000000003'


def seed_agents() -> List[Agent]:
    """Admin account plus two collection agents"""
    return [
        Agent(id=ADMIN_ID, name='Admin User', username='admin', is_admin=True),
        Agent(id=AGENT_JOHN_ID, name='John Collector', username='johnc', is_admin=False),
        Agent(id=AGENT_SARAH_ID, name='Sarah Field', username='sarahf', is_admin=False),
    ]


def seed_loans() -> List[Loan]:
    """Five sample loans covering assigned, unassigned, overdue and paid-off states"""
    john_logs = [
        CommunicationLogEntry(
            id=StringUtils.generate_id(),
            date='2024-04-22',
            type=CommunicationType.SMS,
            notes='Sent reminder SMS about upcoming payment.',
            agent_id=AGENT_JOHN_ID,
            agent_name='John Collector',
        ),
        CommunicationLogEntry(
            id=StringUtils.generate_id(),
            date='2024-04-20',
            type=CommunicationType.CALL,
            notes='Called client, discussed payment plan. Client agreed to pay $500 next week.',
            agent_id=AGENT_JOHN_ID,
            agent_name='John Collector',
        ),
    ]

    return [
        Loan(
            id=StringUtils.generate_id(),
            client='Alice Wonderland',
            branch='Main Street Branch',
            account_number='LN001',
            phone_number='555-0101',
            product='Small Enterprise',
            original_amount=Decimal('5000'),
            total_liab=Decimal('5500'),
            start_date='2024-01-15',
            matured_on='2024-05-15',
            expected_repayment_date='2024-05-15',
            repayment_amount=Decimal('5500'),
            remark='Client is responsive. Follow up on payment plan.',
            interest_repaid=Decimal('100'),
            outstanding_balance=Decimal('2000'),
            interest_outstanding=Decimal('50'),
            status=LoanStatus.OUTSTANDING,
            assigned_agent_id=AGENT_JOHN_ID,
            payment_history=[
                Payment(amount=Decimal('1000'), date='2024-02-15'),
                Payment(amount=Decimal('1000'), date='2024-03-15'),
                Payment(amount=Decimal('1000'), date='2024-04-15'),
            ],
            communication_history=john_logs,
            term=4,
        ),
        Loan(
            id=StringUtils.generate_id(),
            client='Bob The Builder',
            branch='Downtown Office',
            account_number='LN002',
            phone_number='555-0202',
            product='Lease Financing',
            original_amount=Decimal('25000'),
            total_liab=Decimal('28000'),
            start_date='2022-06-01',
            matured_on='2024-12-01',
            expected_repayment_date='2024-12-01',
            repayment_amount=Decimal('28000'),
            remark='Paid off ahead of schedule.',
            interest_repaid=Decimal('3000'),
            outstanding_balance=Decimal('0'),
            interest_outstanding=Decimal('0'),
            status=LoanStatus.PAID_OFF,
            assigned_agent_id=AGENT_SARAH_ID,
            payment_history=[
                Payment(amount=Decimal('10000'), date='2023-01-01'),
                Payment(amount=Decimal('10000'), date='2023-07-01'),
                Payment(amount=Decimal('5000'), date='2024-01-01'),
            ],
            term=30,
        ),
        Loan(
            id=StringUtils.generate_id(),
            client='Charlie Brown',
            branch='Westside Center',
            account_number='LN003',
            phone_number='555-0303',
            product='Commercial Product One',
            original_amount=Decimal('15000'),
            total_liab=Decimal('17000'),
            start_date='2023-11-01',
            matured_on='2025-05-01',
            expected_repayment_date='2025-05-01',
            repayment_amount=Decimal('17000'),
            remark='New client, monitor closely.',
            interest_repaid=Decimal('0'),
            outstanding_balance=Decimal('15000'),
            interest_outstanding=Decimal('2000'),
            status=LoanStatus.OUTSTANDING,
            term=18,
        ),
        Loan(
            id=StringUtils.generate_id(),
            client='Diana Prince',
            branch='Metropolis HQ',
            account_number='LN004',
            phone_number='555-0404',
            product='Small Enterprise',
            original_amount=Decimal('7000'),
            total_liab=Decimal('7700'),
            start_date='2023-12-01',
            matured_on='2024-04-01',
            expected_repayment_date='2024-04-01',
            repayment_amount=Decimal('7700'),
            remark='Payment overdue. Follow up required.',
            pass_due_date='2024-04-01',
            interest_repaid=Decimal('0'),
            outstanding_balance=Decimal('7000'),
            interest_outstanding=Decimal('700'),
            status=LoanStatus.OUTSTANDING,
            assigned_agent_id=AGENT_JOHN_ID,
            term=4,
        ),
        Loan(
            id=StringUtils.generate_id(),
            client='Edward Scissorhands',
            branch='Suburban Outlet',
            account_number='LN005',
            phone_number='555-0505',
            product='Medium Enterprise Capital Expenditure',
            original_amount=Decimal('50000'),
            total_liab=Decimal('58000'),
            start_date='2024-03-01',
            matured_on='2026-09-01',
            expected_repayment_date='2026-09-01',
            repayment_amount=Decimal('58000'),
            remark='',
            interest_repaid=Decimal('0'),
            outstanding_balance=Decimal('50000'),
            interest_outstanding=Decimal('8000'),
            status=LoanStatus.OUTSTANDING,
            term=30,
        ),
    ]
