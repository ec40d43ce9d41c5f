"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from core.models.entities import Agent, Loan, LoanStatus
from db.database import DocumentStore, StorageConfig


@pytest.fixture
def today() -> date:
    """Fixed reference date for date-sensitive rules."""
    return date(2024, 6, 1)


@pytest.fixture
def store(tmp_path) -> DocumentStore:
    """Document store writing into a temporary directory."""
    return DocumentStore(StorageConfig(data_dir=str(tmp_path / "data")))


@pytest.fixture
def admin() -> Agent:
    return Agent(id="admin-1", name="Admin User", username="admin", is_admin=True)


@pytest.fixture
def agent_a() -> Agent:
    return Agent(id="agent-a", name="Agent A", username="agenta")


@pytest.fixture
def agent_b() -> Agent:
    return Agent(id="agent-b", name="Agent B", username="agentb")


@pytest.fixture
def roster(admin, agent_a, agent_b) -> list:
    """Admin followed by two collection agents."""
    return [admin, agent_a, agent_b]


@pytest.fixture
def make_loan():
    """Factory for outstanding loans with a given balance."""
    def _make(loan_id: str = "loan-1", balance: str = "1000", **overrides) -> Loan:
        fields = dict(
            id=loan_id,
            account_number=f"ACC-{loan_id}",
            client=f"Client {loan_id}",
            phone_number="555-0100",
            original_amount=Decimal(balance),
            outstanding_balance=Decimal(balance),
            status=LoanStatus.OUTSTANDING,
        )
        fields.update(overrides)
        return Loan(**fields)
    return _make
