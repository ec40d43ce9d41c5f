"""Tests for round-robin loan distribution."""

from core.models.entities import LoanStatus
from core.services.distribution_service import DistributionEngine


class TestDistribute:
    """Tests for DistributionEngine.distribute."""

    def test_empty_roster_returns_existing_unchanged(self, make_loan) -> None:
        existing = [make_loan("a"), make_loan("b", assigned_agent_id="x")]

        assert DistributionEngine().distribute([], existing, []) == existing

    def test_admin_only_roster_assigns_nothing(self, make_loan, admin) -> None:
        new = [make_loan("n1")]

        result = DistributionEngine().distribute(new, [], [admin])

        assert result == new
        assert result[0].assigned_agent_id is None

    def test_round_robin_five_loans_two_agents(self, make_loan, roster, agent_a, agent_b) -> None:
        new = [make_loan(f"n{i}") for i in range(5)]

        result = DistributionEngine().distribute(new, [], roster)

        assert [loan.id for loan in result] == ["n0", "n1", "n2", "n3", "n4"]
        assert [loan.assigned_agent_id for loan in result] == [
            agent_a.id, agent_b.id, agent_a.id, agent_b.id, agent_a.id
        ]

    def test_existing_unassigned_pooled_before_new(self, make_loan, roster, agent_a, agent_b) -> None:
        existing = [
            make_loan("held", assigned_agent_id=agent_b.id),
            make_loan("orphan"),
            make_loan("paid", status=LoanStatus.PAID_OFF),
        ]
        new = [make_loan("fresh")]

        result = DistributionEngine().distribute(new, existing, roster)

        assert [loan.id for loan in result] == ["held", "paid", "orphan", "fresh"]
        by_id = {loan.id: loan for loan in result}
        assert by_id["held"].assigned_agent_id == agent_b.id
        assert by_id["paid"].assigned_agent_id is None
        assert by_id["orphan"].assigned_agent_id == agent_a.id
        assert by_id["fresh"].assigned_agent_id == agent_b.id

    def test_single_agent_gets_everything(self, make_loan, agent_a) -> None:
        new = [make_loan(f"n{i}") for i in range(3)]

        result = DistributionEngine().distribute(new, [], [agent_a])

        assert {loan.assigned_agent_id for loan in result} == {agent_a.id}

    def test_idempotent_on_assigned_set(self, make_loan, roster) -> None:
        engine = DistributionEngine()
        once = engine.distribute([make_loan(f"n{i}") for i in range(4)], [], roster)

        twice = engine.distribute([], once, roster)

        assert twice == once

    def test_inputs_not_mutated(self, make_loan, roster) -> None:
        new = [make_loan("n1")]
        existing = [make_loan("e1")]

        DistributionEngine().distribute(new, existing, roster)

        assert new[0].assigned_agent_id is None
        assert existing[0].assigned_agent_id is None

    def test_every_loan_kept_exactly_once(self, make_loan, roster) -> None:
        existing = [make_loan(f"e{i}", assigned_agent_id="agent-a" if i % 2 else None) for i in range(6)]
        new = [make_loan(f"n{i}") for i in range(3)]

        result = DistributionEngine().distribute(new, existing, roster)

        assert sorted(loan.id for loan in result) == sorted(l.id for l in existing + new)
        assert all(loan.assigned_agent_id for loan in result)


class TestRoster:
    """Tests for roster helpers."""

    def test_collection_roster_excludes_admins(self, roster, agent_a, agent_b) -> None:
        assert DistributionEngine.collection_roster(roster) == [agent_a, agent_b]

    def test_needs_assignment(self, make_loan) -> None:
        assert DistributionEngine.needs_assignment(make_loan())
        assert not DistributionEngine.needs_assignment(make_loan(assigned_agent_id="x"))
        assert not DistributionEngine.needs_assignment(make_loan(status=LoanStatus.PAID_OFF))
