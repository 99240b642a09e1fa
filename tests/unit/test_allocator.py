"""Unit tests for risk profiles, filtering and the allocation engine."""

import pytest

from src.core.models import Protocol
from src.sandbox.engine import AllocationEngine, filter_protocols_by_risk, resolve_risk_profile
from src.sandbox.models import AGGRESSIVE, CONSERVATIVE, MODERATE
from src.sandbox.random_source import NumpyRandomSource


class TestRiskProfiles:
    """Tests for tolerance -> profile mapping and risk filtering."""

    @pytest.mark.parametrize("tolerance,expected", [
        (1, CONSERVATIVE),
        (3, CONSERVATIVE),
        (4, MODERATE),
        (7, MODERATE),
        (8, AGGRESSIVE),
        (10, AGGRESSIVE),
    ])
    def test_resolve(self, tolerance, expected):
        """Test threshold boundaries."""
        assert resolve_risk_profile(tolerance) is expected

    def test_profile_constants(self):
        """Test the three fixed profiles."""
        assert (CONSERVATIVE.max_risk, CONSERVATIVE.diversification_factor) == (3, 0.8)
        assert (MODERATE.max_risk, MODERATE.diversification_factor) == (6, 0.6)
        assert (AGGRESSIVE.max_risk, AGGRESSIVE.diversification_factor) == (10, 0.4)

    def test_filter_preserves_order_and_records(self, catalog):
        """Test filtering keeps catalog order and the same record objects."""
        filtered = filter_protocols_by_risk(catalog.protocols, 3)

        assert list(filtered) == ["CoreDAO Staking", "Bitcoin Bridge", "Lightning Yield"]
        assert filtered["Bitcoin Bridge"] is catalog.get("Bitcoin Bridge")

    def test_filter_builds_new_collection(self, catalog):
        """Test filtering never touches the source."""
        filtered = filter_protocols_by_risk(catalog.protocols, 10)
        filtered.pop("Lightning Yield")

        assert len(catalog) == 5


class TestAllocationEngine:
    """Tests for AllocationEngine."""

    def test_score(self, midpoint_random, catalog):
        """Test (apy - 2) / max(1, risk)."""
        engine = AllocationEngine(midpoint_random)

        assert engine.score(catalog.get("Lightning Yield")) == pytest.approx(4.8)
        assert engine.score(catalog.get("CoreDAO Staking")) == pytest.approx(3.6)
        assert engine.score(catalog.get("Cross-Chain Pool")) == pytest.approx(16.5 / 9)

    def test_rank_order(self, midpoint_random, catalog):
        """Test protocols are ranked best score first."""
        engine = AllocationEngine(midpoint_random)
        ranked = [r.protocol.name for r in engine.rank(catalog.protocols)]

        assert ranked == [
            "Lightning Yield",
            "CoreDAO Staking",
            "Bitcoin Bridge",
            "CORE-BTC LP",
            "Cross-Chain Pool",
        ]

    def test_rank_ties_keep_input_order(self, midpoint_random):
        """Test equal scores keep their original relative order."""
        a = Protocol(name="A", apy=4.0, risk_score=1, tvl=0)   # score 2.0
        b = Protocol(name="B", apy=6.0, risk_score=2, tvl=0)   # score 2.0
        engine = AllocationEngine(midpoint_random)

        assert [r.protocol.name for r in engine.rank({"A": a, "B": b})] == ["A", "B"]
        assert [r.protocol.name for r in engine.rank({"B": b, "A": a})] == ["B", "A"]

    def test_rank_weight(self):
        """Test positional weighting with the diversification penalty."""
        assert AllocationEngine.rank_weight(0, 3, 0.8) == pytest.approx(1 * (1 - 0.8 / 3))
        assert AllocationEngine.rank_weight(1, 3, 0.8) == pytest.approx((2 / 3) * (1 - 1.6 / 3))
        # Base weight never drops below 0.1
        assert AllocationEngine.rank_weight(19, 20, 0.0) == pytest.approx(0.1)

    def test_conservative_allocation(self, midpoint_random, catalog):
        """Test a fully determined conservative allocation."""
        engine = AllocationEngine(midpoint_random)
        protocols = filter_protocols_by_risk(catalog.protocols, CONSERVATIVE.max_risk)

        allocation = engine.allocate(1000, protocols, CONSERVATIVE)

        # Bitcoin Bridge lands at 6.67% -> $66.67, below the minimum lot
        assert list(allocation) == ["Lightning Yield", "CoreDAO Staking"]
        assert allocation["Lightning Yield"].amount == 658.54
        assert allocation["Lightning Yield"].percentage == 65.85
        assert allocation["CoreDAO Staking"].amount == 341.46
        assert allocation["CoreDAO Staking"].percentage == 34.15

    def test_budget_gate_skips_then_admits_smaller_positions(self, midpoint_random, catalog):
        """Test the remaining-budget check only applies at assignment time."""
        engine = AllocationEngine(midpoint_random)

        allocation = engine.allocate(100_000, dict(catalog.protocols), AGGRESSIVE)

        # CoreDAO and Bitcoin Bridge exceed the remaining $40k after the first
        # 60% position; the two smaller positions behind them still fit.
        assert list(allocation) == ["Lightning Yield", "CORE-BTC LP", "Cross-Chain Pool"]
        assert allocation["Lightning Yield"].amount == 60483.87
        assert allocation["CORE-BTC LP"].amount == 27419.35
        assert allocation["Cross-Chain Pool"].amount == 12096.77
        assert allocation["Cross-Chain Pool"].percentage == 12.10

    def test_entry_snapshot_fields(self, midpoint_random, catalog):
        """Test entries copy the protocol's fields."""
        engine = AllocationEngine(midpoint_random)
        allocation = engine.allocate(1000, filter_protocols_by_risk(catalog.protocols, 3), CONSERVATIVE)

        entry = allocation["CoreDAO Staking"]
        source = catalog.get("CoreDAO Staking")
        assert (entry.apy, entry.risk, entry.tvl, entry.liquidity) == (
            source.apy, source.risk_score, source.tvl, source.liquidity,
        )

    def test_random_factor_bounds(self, scripted_random, catalog):
        """Test the lowest draw scales weights by 0.8 before clamping."""
        engine = AllocationEngine(scripted_random([0.0]))
        protocols = filter_protocols_by_risk(catalog.protocols, 3)

        allocation = engine.allocate(10_000, protocols, CONSERVATIVE)

        # Raw percentages 58.67, 24.89, 5.33: all pass the gate, then normalize
        assert list(allocation) == ["Lightning Yield", "CoreDAO Staking", "Bitcoin Bridge"]
        assert sum(e.percentage for e in allocation.values()) == pytest.approx(100, abs=0.1)

    def test_one_draw_per_ranked_protocol(self, scripted_random, catalog):
        """Test every ranked protocol consumes exactly one draw, included or not."""
        source = scripted_random([0.5])
        AllocationEngine(source).allocate(1000, filter_protocols_by_risk(catalog.protocols, 3), CONSERVATIVE)

        assert source.calls == 3

    def test_empty_input(self, scripted_random):
        """Test no protocols yields an empty allocation and no draws."""
        source = scripted_random([0.5])
        allocation = AllocationEngine(source).allocate(1000, {}, MODERATE)

        assert allocation == {}
        assert source.calls == 0

    def test_amount_below_minimum_lot(self, midpoint_random, catalog):
        """Test every position is gated out when no slice reaches $100."""
        allocation = AllocationEngine(midpoint_random).allocate(100, dict(catalog.protocols), AGGRESSIVE)
        assert allocation == {}

    def test_risk_free_rate_override(self, midpoint_random, catalog):
        """Test a custom risk-free rate changes scores."""
        engine = AllocationEngine(midpoint_random, risk_free_rate=0.0)
        assert engine.score(catalog.get("Bitcoin Bridge")) == pytest.approx(4.25)

    @pytest.mark.parametrize("amount", [150, 1000, 2500.5, 12_345.67, 100_000, 5_000_000])
    @pytest.mark.parametrize("tolerance", range(1, 11))
    def test_allocation_invariants(self, catalog, amount, tolerance):
        """Test sum and risk-ceiling invariants across inputs."""
        profile = resolve_risk_profile(tolerance)
        protocols = filter_protocols_by_risk(catalog.protocols, profile.max_risk)
        engine = AllocationEngine(NumpyRandomSource(seed=tolerance))

        allocation = engine.allocate(amount, protocols, profile)

        if allocation:
            assert sum(e.percentage for e in allocation.values()) == pytest.approx(100, abs=0.1)
            assert sum(e.amount for e in allocation.values()) == pytest.approx(
                amount, abs=0.01 * len(allocation)
            )
        for entry in allocation.values():
            assert entry.risk <= profile.max_risk
            assert 0 <= entry.percentage <= 100
            assert entry.amount >= 0
